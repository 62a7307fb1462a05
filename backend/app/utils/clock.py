"""Calendar helpers - every notion of "today" goes through here"""
from datetime import date, datetime, timedelta, timezone
from functools import lru_cache
from typing import Tuple
from zoneinfo import ZoneInfo

from app.core.config import settings

WEEK_DAYS = 7


@lru_cache(maxsize=None)
def _zone(name: str) -> ZoneInfo:
    return ZoneInfo(name)


def utcnow() -> datetime:
    """Naive UTC timestamp, the format stored in DateTime columns"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def today() -> date:
    """Current calendar day in APP_TIMEZONE"""
    return datetime.now(_zone(settings.APP_TIMEZONE)).date()


def trailing_week(end: date) -> Tuple[date, date]:
    """Inclusive 7-day window ending on ``end``"""
    return end - timedelta(days=WEEK_DAYS - 1), end
