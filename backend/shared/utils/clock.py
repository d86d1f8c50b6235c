"""
Wall-clock access for the HTTP and CLI edges.

The report functions take `now` explicitly; only callers read the clock.
"""

from datetime import datetime
from zoneinfo import ZoneInfo

from shared.config.settings import settings


def local_zone() -> ZoneInfo:
    """Restaurant time zone from settings."""
    return ZoneInfo(settings.timezone)


def local_now() -> datetime:
    """Current time in the restaurant time zone."""
    return datetime.now(local_zone())


def as_local(value: datetime) -> datetime:
    """Attach or convert a caller-supplied instant to the restaurant zone."""
    if value.tzinfo is None:
        return value.replace(tzinfo=local_zone())
    return value.astimezone(local_zone())
