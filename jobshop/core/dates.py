# jobshop/core/dates.py

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

from jobshop.core.config import TIMEZONE


def today() -> date:
    """Calendar date in the shop's timezone."""
    return datetime.now(ZoneInfo(TIMEZONE)).date()


def local_date(moment: datetime) -> date:
    """
    Calendar date of a stored timestamp in the shop's timezone.

    SQLite's CURRENT_TIMESTAMP comes back naive and in UTC, so naive values
    are read as UTC.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(ZoneInfo(TIMEZONE)).date()
