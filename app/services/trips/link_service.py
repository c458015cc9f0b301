from sqlalchemy.exc import SQLAlchemyError
from typing import Any, Mapping, Union
from uuid import UUID
from app.core.errors import PersistenceError
from app.core.logger import logger
from app.core.validation import PayloadValidator
from app.repositories.planner_store import PlannerStore
from app.schemas.trip.link import LinkCreate, LinkListResponse, LinkResponse
from app.services.trips.trip_service import load_trip


class LinkService:
    def __init__(self, store: PlannerStore, validator: PayloadValidator):
        self.store = store
        self.validator = validator

    async def create_link(self, trip_id: Union[str, UUID], payload: Union[LinkCreate, Mapping[str, Any]]) -> UUID:
        trip_id = self.validator.parse_id(trip_id, "trip")
        link_data = self.validator.parse(LinkCreate, payload)

        try:
            link_id = await self.store.insert_link(trip_id, link_data.title, str(link_data.url))
        except SQLAlchemyError as e:
            logger.error(f"Failed to create link for trip {trip_id}: {e}")
            raise PersistenceError("Something went wrong") from e

        logger.info(f"Link {link_id} added to trip {trip_id}")
        return link_id

    async def list_links(self, trip_id: Union[str, UUID]) -> LinkListResponse:
        trip_id = self.validator.parse_id(trip_id, "trip")
        await load_trip(self.store, trip_id, "list_links")

        try:
            links = await self.store.list_links(trip_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to get links of trip {trip_id}: {e}")
            raise PersistenceError("Something went wrong") from e

        return LinkListResponse(links=[LinkResponse.model_validate(link) for link in links])
