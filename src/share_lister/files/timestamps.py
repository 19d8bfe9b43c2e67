"""HTTP-date parsing for listing metadata."""

from datetime import datetime, timezone
from email.utils import parsedate_to_datetime


class TimestampParseError(ValueError):
    """Raised when a Last-Modified value is not a valid RFC 2822 date."""


def parse_http_date(value: str) -> datetime:
    """Parse an RFC 2822 date such as ``Mon, 25 Sep 2023 12:43:08 GMT``.

    Args:
        value: Date string from the service.

    Returns:
        Timezone-aware datetime normalised to UTC.

    Raises:
        TimestampParseError: If the value cannot be parsed.
    """
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError) as exc:
        raise TimestampParseError(f"Invalid HTTP date: {value!r}") from exc
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)
