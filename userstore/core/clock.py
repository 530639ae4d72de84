from datetime import datetime, timezone
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime:
        ...


class SystemClock:
    """Wall-clock time in UTC, without an offset attached."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc).replace(tzinfo=None)
