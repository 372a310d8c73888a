from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from errors import ConfigurationError

DEFAULT_TIMEZONE = "America/Toronto"
REFERENCE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_timezone(name: str = DEFAULT_TIMEZONE) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigurationError(f"Unknown timezone '{name}': {e}") from e


def reference_now(tz_name: str = DEFAULT_TIMEZONE) -> datetime:
    """Current instant as an aware datetime in the reference timezone."""
    return datetime.now(get_timezone(tz_name))


def format_reference_time(now: datetime) -> str:
    return now.strftime(REFERENCE_FORMAT)


def format_readable(value: datetime, with_time: bool = True) -> str:
    """Friendly rendering used in readable_datetime, e.g. "Sun, 12/14 3:00 PM"."""
    readable = value.strftime("%a, %m/%d")
    if with_time:
        readable += " " + value.strftime("%I:%M %p").lstrip("0")
    return readable
