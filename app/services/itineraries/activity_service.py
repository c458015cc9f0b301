from sqlalchemy.exc import SQLAlchemyError
from typing import Any, Mapping, Union
from uuid import UUID
from app.core.errors import EmptyResultError, PersistenceError
from app.core.logger import logger
from app.core.validation import PayloadValidator
from app.repositories.planner_store import PlannerStore
from app.schemas.itineraries.activity import ActivityCreate, ActivityListResponse
from app.services.itineraries.grouping import group_activities_by_date
from app.services.trips.trip_service import load_trip


class ActivityService:
    def __init__(self, store: PlannerStore, validator: PayloadValidator):
        self.store = store
        self.validator = validator

    async def create_activity(
        self,
        trip_id: Union[str, UUID],
        payload: Union[ActivityCreate, Mapping[str, Any]],
    ) -> UUID:
        trip_id = self.validator.parse_id(trip_id, "trip")
        activity_data = self.validator.parse(ActivityCreate, payload)

        try:
            activity_id = await self.store.insert_activity(trip_id, activity_data.title, activity_data.occurs_at)
        except SQLAlchemyError as e:
            logger.error(f"Failed to create activity for trip {trip_id}: {e}")
            raise PersistenceError("Something went wrong") from e

        logger.info(f"Activity {activity_id} added to trip {trip_id}")
        return activity_id

    async def get_trip_activities(self, trip_id: Union[str, UUID]) -> ActivityListResponse:
        trip_id = self.validator.parse_id(trip_id, "trip")
        await load_trip(self.store, trip_id, "get_trip_activities")

        try:
            activities = await self.store.list_activities(trip_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to get activities of trip {trip_id}: {e}")
            raise PersistenceError("Something went wrong") from e

        if not activities:
            raise EmptyResultError("No activities found")

        return ActivityListResponse(activities=group_activities_by_date(activities))
