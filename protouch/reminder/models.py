"""
Data models for credential-change reminders.
"""

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

from protouch.core.errors import ValidationError


class ReminderInterval(IntEnum):
    """Allowed reminder periods, in days."""
    TEN_DAYS = 10
    THIRTY_DAYS = 30
    SIXTY_DAYS = 60

    @classmethod
    def coerce(cls, value) -> 'ReminderInterval':
        """Accept an int (or member) and return the member, else ValidationError."""
        if isinstance(value, bool):
            raise ValidationError(f"Invalid reminder interval: {value!r}")
        try:
            return cls(value)
        except ValueError as e:
            allowed = ", ".join(str(m.value) for m in cls)
            raise ValidationError(
                f"Invalid reminder interval: {value!r} (allowed: {allowed})"
            ) from e


def clean_title(title) -> str:
    """Trim a title, rejecting empty ones."""
    if not isinstance(title, str) or not title.strip():
        raise ValidationError("Reminder title must not be empty")
    return title.strip()


def clean_comment(comment) -> Optional[str]:
    """Trim a comment; blank comments become None."""
    if comment is None:
        return None
    if not isinstance(comment, str):
        raise ValidationError("Reminder comment must be text")
    return comment.strip() or None


@dataclass(frozen=True)
class Reminder:
    """Stored reminder. Countdown values are derived, never stored here."""

    id: str
    title: str
    interval: ReminderInterval
    created_at: int  # Epoch milliseconds
    comment: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.title} (every {int(self.interval)} days)"

    def to_dict(self) -> dict:
        """Convert to the persisted document shape."""
        data = {
            'id': self.id,
            'title': self.title,
            'interval': int(self.interval),
            'createdAt': self.created_at,
        }
        if self.comment is not None:
            data['comment'] = self.comment
        return data

    @classmethod
    def from_dict(cls, data: dict) -> 'Reminder':
        """
        Create from a persisted document entry.

        Raises:
            ValidationError: If the entry is malformed
        """
        if not isinstance(data, dict):
            raise ValidationError(f"Reminder entry must be an object, got {type(data).__name__}")

        reminder_id = data.get('id')
        if not isinstance(reminder_id, str) or not reminder_id:
            raise ValidationError(f"Reminder entry has no id: {data!r}")

        created_at = data.get('createdAt')
        if (isinstance(created_at, bool) or not isinstance(created_at, (int, float))
                or not math.isfinite(created_at)):
            raise ValidationError(f"Reminder {reminder_id} has no valid createdAt: {created_at!r}")

        return cls(
            id=reminder_id,
            title=clean_title(data.get('title')),
            interval=ReminderInterval.coerce(data.get('interval')),
            created_at=int(created_at),
            comment=clean_comment(data.get('comment')),
        )


@dataclass(frozen=True)
class ReminderView:
    """A reminder plus its countdown at the moment it was listed."""

    reminder: Reminder
    days_left: int

    @property
    def is_due(self) -> bool:
        return self.days_left == 0

    @property
    def id(self) -> str:
        return self.reminder.id

    @property
    def title(self) -> str:
        return self.reminder.title
