from typing import Any, Mapping, Type, TypeVar, Union
from uuid import UUID
from pydantic import BaseModel, ValidationError
from app.core.errors import InvalidIdentifierError, InvalidInputError

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class PayloadValidator:
    """Stateless parsing of identifiers and request payloads.

    One instance is shared by the services; it holds no per-request state.
    """

    def parse_id(self, raw: Union[str, UUID], label: str = "id") -> UUID:
        if isinstance(raw, UUID):
            return raw
        try:
            return UUID(str(raw))
        except (TypeError, ValueError):
            raise InvalidIdentifierError(f"Invalid UUID for {label}: {raw!r}") from None

    def parse(self, schema: Type[SchemaT], payload: Union[SchemaT, Mapping[str, Any]]) -> SchemaT:
        if isinstance(payload, schema):
            return payload
        if isinstance(payload, BaseModel):
            payload = payload.model_dump()
        try:
            return schema.model_validate(payload)
        except ValidationError as e:
            raise InvalidInputError(f"Invalid input field: {format_validation_errors(e.errors())}") from e


def format_validation_errors(errors) -> str:
    parts = []
    for err in errors:
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        parts.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    return "; ".join(parts)


validator = PayloadValidator()
