"""Time helpers: US/Eastern wall clock for ledger rows, epoch millis for caches."""

import time
from datetime import date, datetime
from typing import Optional, Union

import pytz
from dateutil import parser as date_parser

EASTERN_TZ = pytz.timezone("US/Eastern")


def now_eastern() -> datetime:
    """Return current time in US/Eastern timezone."""
    return datetime.now(EASTERN_TZ)


def to_eastern(dt: datetime) -> datetime:
    """Convert a datetime to US/Eastern timezone."""
    if dt.tzinfo is None:
        # Assume naive datetime is already Eastern
        return EASTERN_TZ.localize(dt)
    return dt.astimezone(EASTERN_TZ)


def now_millis() -> float:
    """Return the current wall-clock time as epoch milliseconds."""
    return time.time() * 1000


def parse_trade_date(value: Union[str, date, datetime, None]) -> Optional[date]:
    """
    Parse a transaction date.

    Accepts date/datetime objects or any string dateutil understands
    (``2024-01-15``, ``15 Jan 2024``...). Returns None for empty input.
    Raises ValueError for unparseable strings.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return to_eastern(value).date()
    if isinstance(value, date):
        return value
    value = value.strip()
    if not value:
        return None
    return date_parser.parse(value).date()
