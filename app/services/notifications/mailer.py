import asyncio
import smtplib
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import Callable
from uuid import UUID
from app.core.config import settings
from app.repositories.planner_store import PlannerStore

SENDER_NAME = settings.APP_NAME


def generate_confirm_link(path: str) -> str:
    """
    Returns a frontend URL the recipient follows to confirm
    """
    return f"{settings.FRONTEND_BASE_URL}/{path}/confirm"


def send_email_text(to_email: str, subject: str, body: str) -> None:
    msg = MIMEText(body)
    msg["Subject"] = subject
    msg["From"] = formataddr((SENDER_NAME, settings.MAIL_FROM))
    msg["To"] = to_email

    smtp_class = smtplib.SMTP_SSL if settings.SMTP_USE_SSL else smtplib.SMTP
    with smtp_class(settings.SMTP_HOST, settings.SMTP_PORT) as server:
        if settings.SMTP_USER:
            server.login(settings.SMTP_USER, settings.SMTP_PASSWORD or "")
        server.sendmail(settings.MAIL_FROM, [to_email], msg.as_string())


class Mailer:
    """
    Builds and delivers the planner's plain-text mails.

    Each method opens its own session because it runs after the request that
    triggered it has finished. Any failure propagates to the caller.
    """

    def __init__(self, session_factory: Callable, send: Callable[[str, str, str], None] = send_email_text):
        self.session_factory = session_factory
        self.send = send

    async def _deliver(self, to_email: str, subject: str, body: str) -> None:
        # smtplib blocks, keep it off the event loop
        await asyncio.to_thread(self.send, to_email, subject, body)

    async def send_confirm_email_to_trip_owner(self, trip_id: UUID) -> None:
        async with self.session_factory() as session:
            trip = await PlannerStore(session).get_trip(trip_id)

        body = (
            f"Hello, {trip.owner_name}!\n\n"
            f"Your trip to {trip.destination} which starts on {trip.starts_at:%d-%m-%Y} needs to be confirmed.\n"
            f"Follow the link below to confirm it:\n{generate_confirm_link(f'trips/{trip.id}')}\n"
        )
        await self._deliver(trip.owner_email, "Confirm your trip", body)

    async def send_confirm_email_to_participants(self, trip_id: UUID) -> None:
        async with self.session_factory() as session:
            store = PlannerStore(session)
            trip = await store.get_trip(trip_id)
            participants = await store.list_participants(trip_id)

        for participant in participants:
            await self._deliver(participant.email, "Confirm your trip", self._invitation_body(trip, participant))

    async def send_invite_email_to_participant(self, participant_id: UUID) -> None:
        async with self.session_factory() as session:
            store = PlannerStore(session)
            participant = await store.get_participant(participant_id)
            trip = await store.get_trip(participant.trip_id)

        await self._deliver(participant.email, "Confirm your trip", self._invitation_body(trip, participant))

    @staticmethod
    def _invitation_body(trip, participant) -> str:
        return (
            f"You have been invited for a trip to {trip.destination} by {trip.owner_name}.\n"
            f"The trip runs from {trip.starts_at:%d-%m-%Y} to {trip.ends_at:%d-%m-%Y}.\n"
            f"Follow the link below to confirm your attendance:\n"
            f"{generate_confirm_link(f'participants/{participant.id}')}\n"
        )
