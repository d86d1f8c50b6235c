"""
Common utilities shared across routers.
"""

from .snapshot import DateWindow, get_report_window, resolve_now

__all__ = [
    "DateWindow",
    "get_report_window",
    "resolve_now",
]
