"""Pure date codec for the dd-MM-yyyy convention - no I/O dependencies."""

import logging
import re
from datetime import date, datetime

logger = logging.getLogger(__name__)

DATE_FORMAT = "%d-%m-%Y"

_DATE_PATTERN = re.compile(r"^\d{2}-\d{2}-\d{4}$")


def try_parse_date(text: str | None) -> date | None:
    """Strictly parse a dd-MM-yyyy string. Returns None if malformed."""
    if not isinstance(text, str) or not _DATE_PATTERN.match(text):
        return None
    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError:
        return None


def parse_date(
    text: str | None,
    today: date | None = None,
    log: logging.Logger | None = None,
) -> date:
    """
    Parse a dd-MM-yyyy string.

    Malformed input never raises: a warning is logged and today's date is
    returned instead.
    """
    parsed = try_parse_date(text)
    if parsed is not None:
        return parsed
    (log or logger).warning(f"Failed to parse date: {text!r}")
    return today or date.today()


def _dmy(value: date) -> str:
    # strftime("%Y") does not zero-pad years below 1000 on every platform
    return f"{value.day:02d}-{value.month:02d}-{value.year:04d}"


def format_date(
    value: date | datetime | None,
    today: date | None = None,
    log: logging.Logger | None = None,
) -> str:
    """Format a date as dd-MM-yyyy, falling back to today on failure."""
    if isinstance(value, date):
        return _dmy(value)
    (log or logger).warning(f"Failed to format date: {value!r}")
    return _dmy(today or date.today())


def to_api_date(value: date) -> str:
    """Format a date the way the submission endpoint expects (yyyy-MM-dd)."""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
