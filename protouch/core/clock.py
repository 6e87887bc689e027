"""
Wall clock used by the repositories.
Kept behind a tiny interface so countdowns can be checked without waiting.
"""

import time
from typing import Protocol


class Clock(Protocol):
    """Anything that can report the current time in epoch milliseconds."""

    def now_ms(self) -> int: ...


class SystemClock:
    """Clock backed by time.time()."""

    def now_ms(self) -> int:
        return int(time.time() * 1000)
