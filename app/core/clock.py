from datetime import datetime
from typing import Callable
from zoneinfo import ZoneInfo

from app.core.config import settings

Clock = Callable[[], datetime]


def make_clock(timezone_name: str = None) -> Clock:
    """Return a callable producing the current time in the configured timezone"""
    tz = ZoneInfo(timezone_name or settings.TIMEZONE)

    def now() -> datetime:
        return datetime.now(tz)

    return now
