"""
Domain Services - billing reports and dish analytics.

Report functions are pure: they take materialized orders, customers and
dishes plus an explicit `now`, and return pydantic report models. Nothing
here reads the clock, touches storage, or logs directly; diagnostics go to
an optional observer.

Structure:
    Router / CLI (reads the clock, builds the snapshot)
        ↓
    Service (pure calculation)  ← YOU ARE HERE
        ↓
    Schemas (pydantic models)

Usage:
    from reports_api.services.domain import calculate_revenue, logging_observer

    report = calculate_revenue(orders, customers, now=local_now(), observer=logging_observer())
"""

from .date_ranges import (
    DateRange,
    current_month_range,
    month_range,
    prior_period,
    window_start,
    parse_timestamp,
    is_in_current_month,
    is_before_current_month,
)
from .observers import ReportObserver, RecordingObserver, logging_observer
from .revenue_service import calculate_revenue
from .billing_service import (
    calculate_monthly_bills,
    calculate_overdue_bills,
    get_overdue_severity,
    get_overdue_severity_color,
    format_days_overdue,
    apply_order_approval,
    apply_monthly_payment,
)
from .dish_analytics_service import (
    calculate_dish_performance,
    get_top_revenue_generators,
    get_trending_up_dishes,
    get_trending_down_dishes,
    get_underperforming_dishes,
    get_performance_insights,
    build_dish_analytics_report,
)
from .dashboard_service import (
    get_completed_orders_count,
    get_active_customers_count,
    build_dashboard_summary,
)

__all__ = [
    # Date ranges
    "DateRange",
    "current_month_range",
    "month_range",
    "prior_period",
    "window_start",
    "parse_timestamp",
    "is_in_current_month",
    "is_before_current_month",
    # Observers
    "ReportObserver",
    "RecordingObserver",
    "logging_observer",
    # Revenue
    "calculate_revenue",
    # Billing
    "calculate_monthly_bills",
    "calculate_overdue_bills",
    "get_overdue_severity",
    "get_overdue_severity_color",
    "format_days_overdue",
    "apply_order_approval",
    "apply_monthly_payment",
    # Dish analytics
    "calculate_dish_performance",
    "get_top_revenue_generators",
    "get_trending_up_dishes",
    "get_trending_down_dishes",
    "get_underperforming_dishes",
    "get_performance_insights",
    "build_dish_analytics_report",
    # Dashboard
    "get_completed_orders_count",
    "get_active_customers_count",
    "build_dashboard_summary",
]
