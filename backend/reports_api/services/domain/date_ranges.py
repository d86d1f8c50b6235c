"""
Date range helpers for the billing reports.

All boundaries are wall-clock boundaries in the timezone of the reference
instant (`now`). Naive timestamps found in orders are read as wall-clock time
in that same zone.
"""

import calendar
import re
from dataclasses import dataclass
from datetime import datetime, time, timedelta, tzinfo

from pydantic import TypeAdapter, ValidationError

from shared.config.constants import FAR_PAST_YEAR, ReportEvents, Timeframe
from reports_api.services.domain.observers import ReportObserver, notify

_datetime_adapter = TypeAdapter(datetime)
# Postgres timestamptz text uses hour-only offsets ("+00", "+03")
_HOUR_ONLY_OFFSET = re.compile(r"(\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?[+-]\d{2})$")


@dataclass(frozen=True)
class DateRange:
    """Inclusive [start, end] window."""

    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end


def month_range(year: int, month: int, tz: tzinfo | None = None) -> DateRange:
    """
    First and last instant of a calendar month.

    `month` is 1-12. The end is 23:59:59.999999 on the month's last day.
    """
    last_day = calendar.monthrange(year, month)[1]
    start = datetime(year, month, 1, tzinfo=tz)
    end = datetime.combine(start.date().replace(day=last_day), time.max, tzinfo=tz)
    return DateRange(start=start, end=end)


def current_month_range(now: datetime) -> DateRange:
    """Calendar month containing `now`, in `now`'s timezone."""
    return month_range(now.year, now.month, now.tzinfo)


def _subtract_month(moment: datetime) -> datetime:
    year, month = (moment.year, moment.month - 1) if moment.month > 1 else (moment.year - 1, 12)
    # Clamp to the target month's length (Mar 31 -> Feb 28/29)
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def far_past(tz: tzinfo | None = None) -> datetime:
    """Sentinel start for unbounded ("all") windows."""
    return datetime(FAR_PAST_YEAR, 1, 1, tzinfo=tz)


def prior_period(start: datetime, timeframe: str) -> datetime:
    """
    Start of the period of the same length that ends at `start`.

    week: 7 days earlier. month: one calendar month earlier.
    all: a far-past sentinel meaning unbounded.
    """
    if timeframe == Timeframe.WEEK:
        return start - timedelta(days=7)
    if timeframe == Timeframe.MONTH:
        return _subtract_month(start)
    if timeframe == Timeframe.ALL:
        return far_past(start.tzinfo)
    raise ValueError(f"Unknown timeframe: {timeframe!r}")


def start_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def window_start(now: datetime, timeframe: str) -> datetime:
    """Start of the analytics window ending at `now`, truncated to midnight."""
    return start_of_day(prior_period(now, timeframe))


def align_to(moment: datetime, reference: datetime) -> datetime:
    """Express `moment` in the timezone convention of `reference`."""
    if reference.tzinfo is None:
        # Aware values are converted to system local wall-clock time
        return moment.astimezone().replace(tzinfo=None) if moment.tzinfo else moment
    if moment.tzinfo is None:
        return moment.replace(tzinfo=reference.tzinfo)
    return moment.astimezone(reference.tzinfo)


def parse_timestamp(
    value: datetime | str | None,
    reference: datetime,
    observer: ReportObserver | None = None,
    **context,
) -> datetime | None:
    """
    Parse an ISO-8601 timestamp and align it to `reference`.

    Returns None for missing or malformed values. Malformed values are
    reported to the observer so operators can fix the source record.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return align_to(value, reference)
    try:
        text = _HOUR_ONLY_OFFSET.sub(r"\1:00", value.strip())
        parsed = _datetime_adapter.validate_python(text)
    except (ValidationError, AttributeError):
        notify(observer, ReportEvents.MALFORMED_TIMESTAMP, value=value, **context)
        return None
    return align_to(parsed, reference)


def is_in_current_month(value: datetime | str | None, now: datetime) -> bool:
    moment = parse_timestamp(value, now)
    return moment is not None and current_month_range(now).contains(moment)


def is_before_current_month(value: datetime | str | None, now: datetime) -> bool:
    """True for instants before the current month started (overdue territory)."""
    moment = parse_timestamp(value, now)
    return moment is not None and moment < current_month_range(now).start
