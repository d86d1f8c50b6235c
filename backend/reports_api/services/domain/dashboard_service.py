"""
Admin dashboard summary for the current month.
"""

from datetime import datetime

from shared.config.constants import OrderStatus
from shared.utils.schemas import Customer, DashboardSummary, Order
from reports_api.services.domain.billing_service import (
    calculate_monthly_bills,
    calculate_overdue_bills,
)
from reports_api.services.domain.date_ranges import current_month_range, parse_timestamp
from reports_api.services.domain.observers import ReportObserver
from reports_api.services.domain.revenue_service import calculate_revenue


def _created_this_month(
    orders: list[Order],
    now: datetime,
    observer: ReportObserver | None,
) -> list[Order]:
    month = current_month_range(now)
    selected = []
    for order in orders:
        created = parse_timestamp(order.created_at, now, observer, order_id=order.id, field="created_at")
        if created is not None and month.contains(created):
            selected.append(order)
    return selected


def get_completed_orders_count(
    orders: list[Order],
    *,
    now: datetime,
    observer: ReportObserver | None = None,
) -> int:
    """Approved orders created this month."""
    return sum(
        1 for order in _created_this_month(orders, now, observer)
        if order.status == OrderStatus.APPROVED
    )


def get_active_customers_count(
    orders: list[Order],
    *,
    now: datetime,
    observer: ReportObserver | None = None,
) -> int:
    """Distinct customers with any order created this month, whatever its status."""
    return len({order.customer_id for order in _created_this_month(orders, now, observer)})


def build_dashboard_summary(
    orders: list[Order],
    customers: list[Customer],
    *,
    now: datetime,
    observer: ReportObserver | None = None,
) -> DashboardSummary:
    revenue = calculate_revenue(orders, customers, now=now, observer=observer)
    bills = calculate_monthly_bills(orders, customers, now=now, observer=observer)
    overdue = calculate_overdue_bills(orders, customers, now=now, observer=observer)

    return DashboardSummary(
        as_of=now,
        total_revenue=revenue.total_revenue,
        walk_in_revenue=revenue.walk_in_revenue,
        monthly_payments_revenue=revenue.monthly_payments_revenue,
        total_monthly_bills=bills.total_monthly_bills,
        monthly_bill_customers=bills.total_customers,
        total_overdue_bills=overdue.total_overdue_bills,
        overdue_customers=overdue.total_customers,
        completed_orders=get_completed_orders_count(orders, now=now, observer=observer),
        active_customers=get_active_customers_count(orders, now=now, observer=observer),
    )
