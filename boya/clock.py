"""Clock in the server's time frame, swappable for a fixed clock in tests."""

from datetime import datetime, timedelta
from typing import Protocol
from zoneinfo import ZoneInfo

from config import TIMEZONE

SERVER_TZ = ZoneInfo(TIMEZONE)


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Wall clock, expressed in the server's time zone."""

    def __init__(self, tz: ZoneInfo = SERVER_TZ):
        self.tz = tz

    def now(self) -> datetime:
        return datetime.now(self.tz)


class FixedClock:
    """Clock that only moves when told to."""

    def __init__(self, instant: datetime):
        self.instant = instant

    def now(self) -> datetime:
        return self.instant

    def advance(self, seconds: float) -> None:
        self.instant += timedelta(seconds=seconds)
