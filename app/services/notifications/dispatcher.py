import asyncio
from typing import Awaitable, Callable, Optional, Set
from uuid import UUID
from app.core.database import SessionLocal
from app.core.logger import logger
from app.services.notifications.mailer import Mailer


class NotificationDispatcher:
    """
    Fire-and-forget delivery of planner mails.

    Every notify_* call schedules a task on the running loop and returns at
    once. Callers never see the outcome: failures are logged here and
    dropped, never retried.
    """

    def __init__(self, mailer: Mailer):
        self.mailer = mailer
        self._pending: Set[asyncio.Task] = set()

    def notify_trip_owner_created(self, trip_id: UUID) -> None:
        self._submit("notify_trip_owner_created", trip_id, self.mailer.send_confirm_email_to_trip_owner)

    def notify_participants_trip_confirmed(self, trip_id: UUID) -> None:
        self._submit("notify_participants_trip_confirmed", trip_id, self.mailer.send_confirm_email_to_participants)

    def notify_participant_invited(self, participant_id: UUID) -> None:
        self._submit("notify_participant_invited", participant_id, self.mailer.send_invite_email_to_participant)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def _submit(self, name: str, entity_id: UUID, job: Callable[[UUID], Awaitable[None]]) -> None:
        task = asyncio.get_running_loop().create_task(self._run(name, entity_id, job))
        # hold a reference until the task finishes
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _run(self, name: str, entity_id: UUID, job: Callable[[UUID], Awaitable[None]]) -> None:
        try:
            await job(entity_id)
            logger.info(f"{name} sent for {entity_id}")
        except Exception as e:
            logger.error(f"Failed to send email on {name} for {entity_id}: {e}")

    async def drain(self) -> None:
        """Wait for every scheduled notification (shutdown and tests)."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)


_dispatcher: Optional[NotificationDispatcher] = None


def get_dispatcher() -> NotificationDispatcher:
    """FastAPI dependency injection for the process-wide dispatcher."""
    global _dispatcher

    if _dispatcher is None:
        _dispatcher = NotificationDispatcher(Mailer(SessionLocal))

    return _dispatcher


async def shutdown_dispatcher() -> None:
    global _dispatcher
    if _dispatcher is not None:
        await _dispatcher.drain()
        _dispatcher = None
