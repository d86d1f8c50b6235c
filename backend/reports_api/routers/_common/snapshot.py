"""
Helpers shared by report routers.

Usage:
    from reports_api.routers._common.snapshot import resolve_now, get_report_window

    @router.post("/revenue")
    def revenue(snapshot: ReportSnapshot, window: DateWindow = Depends(get_report_window)):
        now = resolve_now(snapshot)
        ...
"""

from dataclasses import dataclass
from datetime import date, datetime, time

from fastapi import Query

from shared.utils.clock import as_local, local_now, local_zone
from shared.utils.exceptions import ValidationError
from shared.utils.schemas import ReportSnapshot
from reports_api.services.domain.date_ranges import DateRange


def resolve_now(snapshot: ReportSnapshot) -> datetime:
    """The snapshot's as_of in local time, or the current local time."""
    if snapshot.as_of is not None:
        return as_local(snapshot.as_of)
    return local_now()


@dataclass
class DateWindow:
    """
    Optional calendar-day window from query parameters.

    Only start: that single day. Neither: the caller's default period.
    """

    start: date | None = None
    end: date | None = None

    def to_range(self) -> DateRange | None:
        if self.start is None:
            if self.end is not None:
                raise ValidationError("'end' requires 'start'", end=str(self.end))
            return None

        end = self.end or self.start
        if end < self.start:
            raise ValidationError(
                "Window start must not be after window end",
                start=str(self.start),
                end=str(end),
            )
        tz = local_zone()
        return DateRange(
            start=datetime.combine(self.start, time.min, tzinfo=tz),
            end=datetime.combine(end, time.max, tzinfo=tz),
        )


def get_report_window(
    start: date | None = Query(default=None, description="First day (inclusive)"),
    end: date | None = Query(default=None, description="Last day (inclusive)"),
) -> DateWindow:
    return DateWindow(start=start, end=end)
