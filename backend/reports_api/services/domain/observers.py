"""
Report observers.

Report functions stay pure: instead of logging, they hand diagnostic events
to an optional observer supplied by the caller. An observer is any callable
taking the event name and keyword data.

Usage:
    from reports_api.services.domain.observers import logging_observer

    report = calculate_revenue(orders, customers, now=now, observer=logging_observer())
"""

import logging
from typing import Any, Callable

from shared.config.constants import ReportEvents
from shared.config.logging import StructuredLogger, billing_logger

ReportObserver = Callable[..., None]


def notify(observer: ReportObserver | None, event: str, **data: Any) -> None:
    """Deliver an event if an observer was supplied."""
    if observer is not None:
        observer(event, **data)


def logging_observer(logger: StructuredLogger = billing_logger) -> ReportObserver:
    """
    Observer that writes events to a structured logger.

    Data-quality events are logged as warnings, everything else at debug.
    """

    def _observe(event: str, **data: Any) -> None:
        level = logging.WARNING if event in ReportEvents.WARNINGS else logging.DEBUG
        logger.log(level, event, **data)

    return _observe


class RecordingObserver:
    """Observer that keeps every event, for tests and the CLI summary."""

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    def __call__(self, event: str, **data: Any) -> None:
        self.events.append((event, data))

    def named(self, event: str) -> list[dict[str, Any]]:
        return [data for name, data in self.events if name == event]

    @property
    def warnings(self) -> list[tuple[str, dict[str, Any]]]:
        return [(name, data) for name, data in self.events if name in ReportEvents.WARNINGS]
