"""
Repository for credential-change reminders.
Persists the whole collection as one JSON list under a single store key.
"""

import uuid
from typing import Callable, List, Optional, Tuple

from config.logging_config import get_logger
from config.settings import STORE_REMINDERS
from protouch.core.clock import Clock, SystemClock
from protouch.core.errors import NotFoundError, ValidationError
from protouch.reminder.countdown import days_left
from protouch.reminder.models import (
    Reminder, ReminderInterval, ReminderView, clean_comment, clean_title,
)
from protouch.storage.document_repository import DocumentRepository
from protouch.storage.kv_store import KeyValueStore

logger = get_logger(__name__)


def _new_id() -> str:
    return uuid.uuid4().hex


class ReminderRepository(DocumentRepository):
    """
    CRUD over the reminder collection.

    Stored order is insertion order; listing sorts by countdown and relies on
    a stable sort to keep insertion order among equal countdowns.
    """

    def __init__(self, store: KeyValueStore,
                 clock: Optional[Clock] = None,
                 id_factory: Optional[Callable[[], str]] = None):
        """
        Initialize repository.

        Args:
            store: Key-value store adapter
            clock: Time source (wall clock by default)
            id_factory: Produces fresh ids (uuid4 hex by default)
        """
        super().__init__(store, STORE_REMINDERS)
        self.clock = clock or SystemClock()
        self.id_factory = id_factory or _new_id

    async def _load(self) -> List[Reminder]:
        """Read the stored collection, skipping entries that fail validation."""
        entries = await self._read_document(list, [])

        reminders = []
        for entry in entries:
            try:
                reminders.append(Reminder.from_dict(entry))
            except ValidationError as e:
                logger.warning(f"Skipping stored reminder: {e}")
        return reminders

    async def _save(self, reminders: List[Reminder]) -> None:
        await self._write_document([r.to_dict() for r in reminders])

    async def list_all(self, now_ms: Optional[int] = None) -> List[ReminderView]:
        """
        Get all reminders, most urgent first.

        Args:
            now_ms: Evaluation time (clock time by default)

        Returns:
            ReminderView snapshots sorted ascending by days left
        """
        now_ms = self.clock.now_ms() if now_ms is None else now_ms
        views = [ReminderView(r, days_left(r, now_ms)) for r in await self._load()]
        return sorted(views, key=lambda v: v.days_left)

    async def get_by_id(self, reminder_id: str) -> Reminder:
        """
        Get reminder by ID.

        Raises:
            NotFoundError: If no reminder has this id
        """
        _, reminder = self._find(await self._load(), reminder_id)
        return reminder

    async def create(self, title: str, interval: int,
                     comment: Optional[str] = None) -> Reminder:
        """
        Create a new reminder.

        Args:
            title: Service or website name
            interval: Days between credential changes (10, 30 or 60)
            comment: Free text (optional)

        Returns:
            Created Reminder

        Raises:
            ValidationError: On empty title, bad interval or non-text comment
        """
        title = clean_title(title)
        interval = ReminderInterval.coerce(interval)
        comment = clean_comment(comment)

        async with self.lock:
            reminders = await self._load()
            taken = {r.id for r in reminders}

            reminder_id = self.id_factory()
            while reminder_id in taken:
                reminder_id = self.id_factory()

            reminder = Reminder(
                id=reminder_id,
                title=title,
                interval=interval,
                created_at=self.clock.now_ms(),
                comment=comment,
            )
            reminders.append(reminder)
            await self._save(reminders)

        logger.info(f"Created reminder {reminder.id}: {reminder}")
        return reminder

    async def update(self, reminder_id: str, title: str, interval: int,
                     comment: Optional[str] = None) -> Reminder:
        """
        Replace title, interval and comment of an existing reminder.
        The id and creation time are kept.

        Raises:
            NotFoundError: If no reminder has this id
            ValidationError: On empty title, bad interval or non-text comment
        """
        async with self.lock:
            reminders = await self._load()
            index, current = self._find(reminders, reminder_id)

            title = clean_title(title)
            interval = ReminderInterval.coerce(interval)
            comment = clean_comment(comment)

            updated = Reminder(
                id=current.id,
                title=title,
                interval=interval,
                created_at=current.created_at,
                comment=comment,
            )
            reminders[index] = updated
            await self._save(reminders)

        logger.debug(f"Updated reminder {reminder_id}")
        return updated

    async def delete(self, reminder_id: str) -> bool:
        """
        Delete a reminder. Unknown ids are ignored.

        Returns:
            True if something was removed
        """
        async with self.lock:
            reminders = await self._load()
            remaining = [r for r in reminders if r.id != reminder_id]
            if len(remaining) == len(reminders):
                logger.debug(f"Reminder {reminder_id} already absent")
                return False
            await self._save(remaining)

        logger.info(f"Reminder {reminder_id} deleted")
        return True

    async def delete_all(self) -> None:
        """Clear the entire collection."""
        async with self.lock:
            await self._remove_document()

        logger.info("All reminders deleted")

    @staticmethod
    def _find(reminders: List[Reminder], reminder_id: str) -> Tuple[int, Reminder]:
        for index, reminder in enumerate(reminders):
            if reminder.id == reminder_id:
                return index, reminder
        raise NotFoundError("Reminder", reminder_id)
