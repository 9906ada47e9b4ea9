"""
Date Utilities

Calendar-day helpers used by the streak logic. Every timestamp is handled
as UTC internally and only converted to a named zone when it has to be
truncated to a calendar day.
"""

from datetime import datetime
import pytz


def get_zone(timezone='UTC'):
    """
    Resolve a timezone name to a pytz zone.

    Args:
        timezone (str or tzinfo): Zone name (e.g. 'America/Denver') or a zone object

    Returns:
        tzinfo: The pytz zone

    Raises:
        ValueError: If the zone name is unknown
    """
    if timezone is None:
        return pytz.utc
    if not isinstance(timezone, str):
        return timezone
    try:
        return pytz.timezone(timezone)
    except pytz.UnknownTimeZoneError as e:
        raise ValueError(f"Unknown timezone '{timezone}'") from e


def utc_now():
    """Current time as an aware UTC datetime."""
    return datetime.now(pytz.utc)


def ensure_utc(ts):
    """
    Return ts as an aware UTC datetime. Naive values are taken to be UTC,
    which is how they are stored in the database.
    """
    if ts is None:
        return None
    if ts.tzinfo is None:
        return pytz.utc.localize(ts)
    return ts.astimezone(pytz.utc)


def to_storage(ts):
    """Convert a timestamp to the naive UTC form kept in the database."""
    if ts is None:
        return None
    return ensure_utc(ts).replace(tzinfo=None)


def truncate_to_day(ts, timezone='UTC'):
    """
    Truncate a timestamp to its calendar day in the given zone.

    Args:
        ts (datetime): Timestamp (naive values are treated as UTC)
        timezone (str or tzinfo): Reference zone for the day boundary

    Returns:
        date: Calendar day of ts in that zone
    """
    zone = get_zone(timezone)
    return zone.normalize(ensure_utc(ts).astimezone(zone)).date()


def is_same_day(first, second, timezone='UTC'):
    """Check whether two timestamps fall on the same calendar day."""
    if first is None or second is None:
        return False
    return truncate_to_day(first, timezone) == truncate_to_day(second, timezone)


def to_iso(ts):
    """Serialize a stored timestamp as ISO-8601 UTC, or None."""
    if ts is None:
        return None
    return ensure_utc(ts).isoformat().replace('+00:00', 'Z')
