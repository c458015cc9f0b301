"""
Persistence gateway for trips, participants, activities and links.

Every lookup by id raises ``sqlalchemy.exc.NoResultFound`` when no row
matches, so callers can tell a missing row apart from any other failure.
Writes commit immediately unless they run inside ``transaction()``, in which
case they only flush and the whole block commits or rolls back together.
"""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator, Iterable, List
from uuid import UUID, uuid4

from sqlalchemy import select, update
from sqlalchemy.exc import NoResultFound
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.trips.trip_model import Trip
from app.models.trips.participant import Participant
from app.models.trips.link import Link
from app.models.itinerary.activity import Activity


class PlannerStore:
    """Narrow data access interface used by the planner services."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self._tx_depth = 0

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator["PlannerStore"]:
        """
        Scope several operations in one all-or-nothing unit.

        Commits on clean exit, rolls back on any exception and re-raises it.
        Nested use joins the outer unit.
        """
        if self._tx_depth:
            self._tx_depth += 1
            try:
                yield self
            finally:
                self._tx_depth -= 1
            return

        self._tx_depth = 1
        try:
            yield self
            await self.session.commit()
        except BaseException:
            await self.session.rollback()
            raise
        finally:
            self._tx_depth = 0

    async def _save(self) -> None:
        if self._tx_depth:
            await self.session.flush()
            return
        try:
            await self.session.commit()
        except BaseException:
            await self.session.rollback()
            raise

    # Trips

    async def insert_trip(
        self,
        destination: str,
        starts_at: datetime,
        ends_at: datetime,
        owner_name: str,
        owner_email: str,
    ) -> UUID:
        trip = Trip(
            id=uuid4(),
            destination=destination,
            starts_at=starts_at,
            ends_at=ends_at,
            owner_name=owner_name,
            owner_email=owner_email,
            is_confirmed=False,
        )
        self.session.add(trip)
        await self._save()
        return trip.id

    async def get_trip(self, trip_id: UUID, for_update: bool = False) -> Trip:
        query = select(Trip).where(Trip.id == trip_id).execution_options(populate_existing=True)
        if for_update:
            query = query.with_for_update()
        result = await self.session.execute(query)
        return result.scalar_one()

    async def update_trip(
        self,
        trip_id: UUID,
        destination: str,
        starts_at: datetime,
        ends_at: datetime,
    ) -> None:
        """Replace destination and dates; the confirmation flag is never written here."""
        result = await self.session.execute(
            update(Trip)
            .where(Trip.id == trip_id)
            .values(
                destination=destination,
                starts_at=starts_at,
                ends_at=ends_at,
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise NoResultFound(f"No trip with id {trip_id}")
        await self._save()

    async def set_trip_confirmed(self, trip_id: UUID) -> bool:
        """Flip the confirmation flag; False when the trip was already confirmed or is missing."""
        result = await self.session.execute(
            update(Trip)
            .where(Trip.id == trip_id, Trip.is_confirmed.is_(False))
            .values(is_confirmed=True)
            .execution_options(synchronize_session=False)
        )
        await self._save()
        return result.rowcount == 1

    # Participants

    async def insert_participants(self, trip_id: UUID, emails: Iterable[str]) -> List[UUID]:
        participants = [
            Participant(id=uuid4(), trip_id=trip_id, email=email, is_confirmed=False)
            for email in emails
        ]
        self.session.add_all(participants)
        await self._save()
        return [participant.id for participant in participants]

    async def insert_participant(self, trip_id: UUID, email: str) -> UUID:
        participant = Participant(id=uuid4(), trip_id=trip_id, email=email, is_confirmed=False)
        self.session.add(participant)
        await self._save()
        return participant.id

    async def get_participant(self, participant_id: UUID, for_update: bool = False) -> Participant:
        query = select(Participant).where(Participant.id == participant_id).execution_options(populate_existing=True)
        if for_update:
            query = query.with_for_update()
        result = await self.session.execute(query)
        return result.scalar_one()

    async def list_participants(self, trip_id: UUID) -> List[Participant]:
        result = await self.session.execute(
            select(Participant).where(Participant.trip_id == trip_id)
        )
        return list(result.scalars().all())

    async def set_participant_confirmed(self, participant_id: UUID) -> bool:
        result = await self.session.execute(
            update(Participant)
            .where(Participant.id == participant_id, Participant.is_confirmed.is_(False))
            .values(is_confirmed=True)
            .execution_options(synchronize_session=False)
        )
        await self._save()
        return result.rowcount == 1

    # Activities

    async def insert_activity(self, trip_id: UUID, title: str, occurs_at: datetime) -> UUID:
        activity = Activity(id=uuid4(), trip_id=trip_id, title=title, occurs_at=occurs_at)
        self.session.add(activity)
        await self._save()
        return activity.id

    async def list_activities(self, trip_id: UUID) -> List[Activity]:
        result = await self.session.execute(
            select(Activity).where(Activity.trip_id == trip_id).order_by(Activity.occurs_at)
        )
        return list(result.scalars().all())

    # Links

    async def insert_link(self, trip_id: UUID, title: str, url: str) -> UUID:
        link = Link(id=uuid4(), trip_id=trip_id, title=title, url=url)
        self.session.add(link)
        await self._save()
        return link.id

    async def list_links(self, trip_id: UUID) -> List[Link]:
        result = await self.session.execute(
            select(Link).where(Link.trip_id == trip_id)
        )
        return list(result.scalars().all())
