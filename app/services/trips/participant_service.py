from email.utils import parseaddr
from email_validator import EmailNotValidError, validate_email
from sqlalchemy.exc import NoResultFound, SQLAlchemyError
from typing import Any, Mapping, Optional, Union
from uuid import UUID
from app.core.errors import AlreadyConfirmedError, NotFoundError, PersistenceError
from app.core.logger import logger
from app.core.validation import PayloadValidator
from app.models.trips.participant import Participant
from app.repositories.planner_store import PlannerStore
from app.schemas.trip.participant import (
    ParticipantInvite, ParticipantListResponse, ParticipantOut, ParticipantResponse
)
from app.services.notifications.dispatcher import NotificationDispatcher
from app.services.trips.trip_service import load_trip


def derive_display_name(email: str) -> Optional[str]:
    """
    Local part of a parseable mail address, e.g. "jane.doe" for
    "jane.doe@example.com". Returns None when the address does not parse.
    """
    _, address = parseaddr(email or "")
    if not address:
        return None
    try:
        parsed = validate_email(
            address,
            check_deliverability=False,
            globally_deliverable=False,
            test_environment=True,
            allow_quoted_local=True,
            allow_domain_literal=True,
        )
    except EmailNotValidError:
        return None
    return parsed.local_part


class ParticipantService:
    def __init__(self, store: PlannerStore, validator: PayloadValidator, dispatcher: NotificationDispatcher):
        self.store = store
        self.validator = validator
        self.dispatcher = dispatcher

    async def _load_participant(self, participant_id: UUID, operation: str, for_update: bool = False) -> Participant:
        try:
            return await self.store.get_participant(participant_id, for_update=for_update)
        except NoResultFound:
            logger.warning(f"Participant not found: ID {participant_id} on {operation}")
            raise NotFoundError("Participant not found") from None
        except SQLAlchemyError as e:
            logger.error(f"Failed to get participant {participant_id} on {operation}: {e}")
            raise PersistenceError("Something went wrong") from e

    async def invite_participant(
        self,
        trip_id: Union[str, UUID],
        payload: Union[ParticipantInvite, Mapping[str, Any]],
    ) -> UUID:
        trip_id = self.validator.parse_id(trip_id, "trip")
        invite_data = self.validator.parse(ParticipantInvite, payload)

        # no existence check, the foreign key rejects unknown trips
        try:
            participant_id = await self.store.insert_participant(trip_id, str(invite_data.email))
        except SQLAlchemyError as e:
            logger.error(f"Failed to invite {invite_data.email} to trip {trip_id}: {e}")
            raise PersistenceError("Something went wrong") from e

        logger.info(f"Participant {participant_id} invited to trip {trip_id}")
        self.dispatcher.notify_participant_invited(participant_id)
        return participant_id

    async def get_participant(self, participant_id: Union[str, UUID]) -> ParticipantResponse:
        participant_id = self.validator.parse_id(participant_id, "participant")
        participant = await self._load_participant(participant_id, "get_participant")
        return ParticipantResponse.model_validate(participant)

    async def list_participants(self, trip_id: Union[str, UUID]) -> ParticipantListResponse:
        trip_id = self.validator.parse_id(trip_id, "trip")
        await load_trip(self.store, trip_id, "list_participants")

        try:
            participants = await self.store.list_participants(trip_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to get participants of trip {trip_id}: {e}")
            raise PersistenceError("Something went wrong") from e

        return ParticipantListResponse(
            participants=[
                ParticipantOut(
                    id=participant.id,
                    email=participant.email,
                    is_confirmed=participant.is_confirmed,
                    name=derive_display_name(participant.email),
                )
                for participant in participants
            ]
        )

    async def confirm_participant(self, participant_id: Union[str, UUID]) -> None:
        participant_id = self.validator.parse_id(participant_id, "participant")

        try:
            async with self.store.transaction():
                participant = await self._load_participant(participant_id, "confirm_participant", for_update=True)
                if participant.is_confirmed:
                    raise AlreadyConfirmedError("Participant already confirmed")
                if not await self.store.set_participant_confirmed(participant_id):
                    raise AlreadyConfirmedError("Participant already confirmed")
        except SQLAlchemyError as e:
            logger.error(f"Failed to confirm participant {participant_id}: {e}")
            raise PersistenceError("Something went wrong") from e

        logger.info(f"Participant ID {participant_id} confirmed")
