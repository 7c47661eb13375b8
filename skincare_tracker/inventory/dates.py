"""Calendar date helpers shared by the classifier, sorter and filters.

Products carry dates as ISO strings. Anything that cannot be read as a
calendar date is treated as absent here; the form layer is the place that
rejects such values.
"""

import logging
import math
from datetime import date, datetime, time, timezone
from typing import Optional, Union

logger = logging.getLogger(__name__)

DateLike = Union[str, date, datetime, None]
Instant = Union[date, datetime, None]

SECONDS_PER_DAY = 24 * 60 * 60

def parse_date(value: DateLike) -> Optional[date]:
    """Read a calendar date from an ISO string, date or datetime.
    
    Args:
        value: ``YYYY-MM-DD`` string (a trailing time part is ignored),
            date, datetime or None
            
    Returns:
        The date, or None when the value is empty or unparseable
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    
    text = str(value).strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        logger.debug(f"Ignoring unparseable date: {value!r}")
        return None

def to_instant(value: Instant) -> datetime:
    """Resolve a reference instant to an aware UTC datetime.
    
    None means now; naive datetimes are taken as UTC; plain dates mean
    midnight UTC of that day.
    """
    if value is None:
        return datetime.now(timezone.utc)
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    return datetime.combine(value, time.min, tzinfo=timezone.utc)

def days_until(target: date, now: Instant = None) -> int:
    """Whole days from ``now`` until midnight UTC of ``target``.
    
    Partial days round up (``ceil``): 0.1 days ahead counts as 1 and
    0.9 days past counts as 0. Negative once a full day has passed.
    """
    delta = to_instant(target) - to_instant(now)
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)

def is_past(value: DateLike, now: Instant = None) -> bool:
    """True when the date is set and its midnight lies before ``now``."""
    day = parse_date(value)
    if day is None:
        return False
    return to_instant(day) < to_instant(now)

def format_date(value: DateLike) -> str:
    """Format a date for display, e.g. ``Jan 5, 2025`` or ``Not set``."""
    day = parse_date(value)
    if day is None:
        return "Not set"
    return f"{day:%b} {day.day}, {day.year}"

def to_iso(value: DateLike) -> Optional[str]:
    """Normalize a date-like value to ``YYYY-MM-DD`` or None."""
    day = parse_date(value)
    return day.isoformat() if day else None
