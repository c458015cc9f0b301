"""
Application errors for the planner services.

Services raise these instead of leaking SQLAlchemy or pydantic details; the
API layer turns them into JSON responses using ``status_code`` and ``code``.

Usage:
    from app.core.errors import NotFoundError

    raise NotFoundError("Trip not found")
"""

from enum import Enum


class ErrorCode(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    INVALID_IDENTIFIER = "INVALID_IDENTIFIER"
    INVALID_INPUT = "INVALID_INPUT"
    ALREADY_CONFIRMED = "ALREADY_CONFIRMED"
    PERSISTENCE_FAILURE = "PERSISTENCE_FAILURE"
    EMPTY_RESULT = "EMPTY_RESULT"


class PlannerError(Exception):
    """Base exception for all planner errors."""

    code: ErrorCode = ErrorCode.PERSISTENCE_FAILURE
    status_code: int = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"message": self.message, "code": self.code.value}


class NotFoundError(PlannerError):
    """Referenced trip or participant does not exist."""

    code = ErrorCode.NOT_FOUND
    status_code = 404


class InvalidIdentifierError(PlannerError):
    """Identifier supplied by the caller is not a valid UUID."""

    code = ErrorCode.INVALID_IDENTIFIER
    status_code = 400


class InvalidInputError(PlannerError):
    """Payload failed field validation."""

    code = ErrorCode.INVALID_INPUT
    status_code = 400


class AlreadyConfirmedError(PlannerError):
    code = ErrorCode.ALREADY_CONFIRMED
    status_code = 409


class PersistenceError(PlannerError):
    """Any storage failure that is not otherwise classified."""

    code = ErrorCode.PERSISTENCE_FAILURE
    status_code = 500


class EmptyResultError(PlannerError):
    code = ErrorCode.EMPTY_RESULT
    status_code = 404
