# utils/datetime_utils.py
import re
from datetime import datetime, timezone
from typing import Optional
import logging


FEED_TIMESTAMP_FORMAT = '%Y-%m-%dT%H:%M:%S.%fZ'

# strptime's %f takes one to six digits; feed timestamps carry exactly milliseconds
FEED_TIMESTAMP_PATTERN = re.compile(r'\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z')


def parse_feed_timestamp(
    timestamp_str: Optional[str],
    fmt: str = FEED_TIMESTAMP_FORMAT,
    context: str = "unknown",
    logger: Optional[logging.Logger] = None
) -> Optional[datetime]:
    """
    Parse a feed timestamp string into a timezone-aware UTC datetime.

    The format is fixed by the feed and carries no offset, so the parsed value
    is always interpreted as UTC.

    Args:
        timestamp_str: Input string, e.g. ``2016-11-21T07:41:58.470Z``
        fmt: ``strptime`` format the string must match exactly
        context: Description of where timestamp came from for error messages
        logger: Optional logger for error reporting

    Returns:
        timezone-aware datetime in UTC or None if parsing failed
    """
    log = logger or logging.getLogger(__name__)

    if not timestamp_str:
        log.debug(f"Empty timestamp in context: {context}")
        return None

    value = timestamp_str.strip()
    if fmt == FEED_TIMESTAMP_FORMAT and not FEED_TIMESTAMP_PATTERN.fullmatch(value):
        log.debug(f"Timestamp '{timestamp_str}' from {context} does not match {fmt} with millisecond precision")
        return None

    try:
        return datetime.strptime(value, fmt).replace(tzinfo=timezone.utc)
    except ValueError as e:
        log.debug(f"Failed to parse timestamp '{timestamp_str}' from {context}: {str(e)}")
        return None


def format_as_iso(dt: datetime) -> str:
    """Format datetime as ISO 8601 with 'Z' suffix"""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')
