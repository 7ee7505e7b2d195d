"""Time source for join, activity and message timestamps."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """UTC wall clock used by live sessions; tests pass a fixed one."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
