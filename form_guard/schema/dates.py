"""
Date parsing shared by the validator and the resolvers.

Parsing never consults the clock or the host timezone: components missing
from the text are taken from a fixed reference date, numeric offsets become
fixed-offset timezones and bare zone names (other than UTC) are ignored, so
the same string always yields the same value.
"""

import logging
from datetime import datetime, tzinfo
from typing import Any, Optional

from dateutil import parser as date_parser
from dateutil import tz

logger = logging.getLogger(__name__)

REFERENCE_DATE = datetime(1970, 1, 1)


def _fixed_tzinfo(name: Optional[str], offset: Optional[int]) -> Optional[tzinfo]:
    # Without this, dateutil maps names found in time.tzname to tzlocal().
    if offset is None:
        return None
    if offset == 0:
        return tz.UTC
    return tz.tzoffset(name, offset)


def parse_date(value: Any, reference: datetime = REFERENCE_DATE) -> datetime:
    """
    Parse a date/time string.

    Args:
        value: Authored date string (ISO 8601 or another common format)
        reference: Source for components absent from the string

    Returns:
        datetime: Parsed value (timezone-aware only if the text carries an offset)

    Raises:
        ValueError: If value is not a string or is not a recognizable date
    """
    if not isinstance(value, str):
        raise ValueError(f"Date value must be a string, got {type(value).__name__}")
    if not value.strip():
        raise ValueError("Date value is empty")
    try:
        return date_parser.parse(value, default=reference, tzinfos=_fixed_tzinfo)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Unrecognized date: {value!r}") from e


def try_parse_date(value: Any, reference: datetime = REFERENCE_DATE) -> Optional[datetime]:
    """Parse like parse_date but return None instead of raising."""
    try:
        return parse_date(value, reference)
    except ValueError as e:
        logger.debug(f"Date conversion failed: {e}")
        return None


def is_valid_date(value: Any) -> bool:
    return try_parse_date(value) is not None
