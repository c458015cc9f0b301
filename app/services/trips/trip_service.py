from sqlalchemy.exc import NoResultFound, SQLAlchemyError
from typing import Any, Mapping, Optional, Union
from uuid import UUID
from app.core.cache import RedisCache
from app.core.config import settings
from app.core.errors import AlreadyConfirmedError, NotFoundError, PersistenceError
from app.core.logger import logger
from app.core.validation import PayloadValidator
from app.models.trips.trip_model import Trip
from app.repositories.planner_store import PlannerStore
from app.schemas.trip.trip_schema import TripCreate, TripResponse, TripUpdate
from app.services.notifications.dispatcher import NotificationDispatcher


async def load_trip(store: PlannerStore, trip_id: UUID, operation: str, for_update: bool = False) -> Trip:
    """Fetch a trip or raise NotFoundError / PersistenceError."""
    try:
        return await store.get_trip(trip_id, for_update=for_update)
    except NoResultFound:
        logger.warning(f"Trip not found: ID {trip_id} on {operation}")
        raise NotFoundError("Trip not found") from None
    except SQLAlchemyError as e:
        logger.error(f"Failed to get trip {trip_id} on {operation}: {e}")
        raise PersistenceError("Something went wrong") from e


class TripService:
    def __init__(
        self,
        store: PlannerStore,
        validator: PayloadValidator,
        dispatcher: NotificationDispatcher,
        cache: Optional[RedisCache] = None,
    ):
        self.store = store
        self.validator = validator
        self.dispatcher = dispatcher
        self.cache = cache

    def _cache_key(self, trip_id: UUID) -> str:
        return RedisCache.build_key("trips", "id", trip_id)

    async def _invalidate_trip_cache(self, trip_id: UUID):
        if self.cache:
            await self.cache.delete(self._cache_key(trip_id))

    async def create_trip(self, payload: Union[TripCreate, Mapping[str, Any]]) -> UUID:
        """Insert the trip and its initial invitees as one unit."""
        trip_data = self.validator.parse(TripCreate, payload)

        try:
            async with self.store.transaction():
                trip_id = await self.store.insert_trip(
                    destination=trip_data.destination,
                    starts_at=trip_data.starts_at,
                    ends_at=trip_data.ends_at,
                    owner_name=trip_data.owner_name,
                    owner_email=str(trip_data.owner_email),
                )
                await self.store.insert_participants(
                    trip_id, [str(email) for email in trip_data.emails_to_invite]
                )
        except SQLAlchemyError as e:
            logger.error(f"Failed to create trip to {trip_data.destination} for {trip_data.owner_email}: {e}")
            raise PersistenceError("trip creation failed") from e

        logger.info(f"Trip {trip_id} created with {len(trip_data.emails_to_invite)} invitees")
        self.dispatcher.notify_trip_owner_created(trip_id)
        return trip_id

    async def get_trip(self, trip_id: Union[str, UUID]) -> TripResponse:
        trip_id = self.validator.parse_id(trip_id, "trip")

        # Try to get from cache
        if self.cache:
            cached_trip = await self.cache.get(self._cache_key(trip_id))
            if cached_trip:
                logger.info(f"Trip ID {trip_id} retrieved from cache")
                return TripResponse.model_validate(cached_trip)

        trip = await load_trip(self.store, trip_id, "get_trip")

        if self.cache:
            await self.cache.set(
                self._cache_key(trip_id),
                trip.to_dict(),
                expire=settings.TRIP_CACHE_TTL_SECONDS
            )

        return TripResponse.model_validate(trip)

    async def update_trip(self, trip_id: Union[str, UUID], payload: Union[TripUpdate, Mapping[str, Any]]) -> None:
        """Replace destination and dates; the confirmation flag is left untouched."""
        trip_id = self.validator.parse_id(trip_id, "trip")
        update_data = self.validator.parse(TripUpdate, payload)

        try:
            await self.store.update_trip(
                trip_id,
                destination=update_data.destination,
                starts_at=update_data.starts_at,
                ends_at=update_data.ends_at,
            )
        except NoResultFound:
            logger.warning(f"Trip not found: ID {trip_id} on update_trip")
            raise NotFoundError("Trip not found") from None
        except SQLAlchemyError as e:
            logger.error(f"Failed to update trip {trip_id}: {e}")
            raise PersistenceError("Something went wrong") from e

        await self._invalidate_trip_cache(trip_id)
        logger.info(f"Trip ID {trip_id} updated")

    async def confirm_trip(self, trip_id: Union[str, UUID]) -> None:
        trip_id = self.validator.parse_id(trip_id, "trip")

        try:
            async with self.store.transaction():
                trip = await load_trip(self.store, trip_id, "confirm_trip", for_update=True)
                if trip.is_confirmed:
                    raise AlreadyConfirmedError("Trip is already confirmed")
                # a concurrent confirmation may have won between the read and this write
                if not await self.store.set_trip_confirmed(trip_id):
                    raise AlreadyConfirmedError("Trip is already confirmed")
        except SQLAlchemyError as e:
            logger.error(f"Failed to confirm trip {trip_id}: {e}")
            raise PersistenceError("Something went wrong") from e

        await self._invalidate_trip_cache(trip_id)
        logger.info(f"Trip ID {trip_id} confirmed")
        self.dispatcher.notify_participants_trip_confirmed(trip_id)
