"""
Countdown derivation for reminders.

Pure functions of the stored fields and the current time. Elapsed days are
floored, so a reminder created at 23:59 counts one elapsed day once a full
86 400 000 ms have passed, not at midnight. The countdown stops at zero and
stays there until the reminder is edited or deleted; nothing renews it.
"""

from config.settings import MS_PER_DAY
from protouch.reminder.models import Reminder


def elapsed_days(created_at: int, now_ms: int) -> int:
    """Whole days between creation and now, never negative."""
    return max(0, (now_ms - created_at) // MS_PER_DAY)


def days_left(reminder: Reminder, now_ms: int) -> int:
    """Days remaining before the reminder is due; 0 means due."""
    return max(0, int(reminder.interval) - elapsed_days(reminder.created_at, now_ms))


def is_due(reminder: Reminder, now_ms: int) -> bool:
    return days_left(reminder, now_ms) == 0
