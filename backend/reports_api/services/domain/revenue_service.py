"""
Revenue classification.

Revenue is money actually received:
1. Walk-in cash orders, counted when approved (created_at when approved_at is missing)
2. Monthly bill payments, derived per customer as total_spent - monthly_balance
"""

from datetime import datetime

from shared.config.constants import OrderStatus, PaymentType, ReportEvents
from shared.utils.schemas import BalanceWarning, Customer, Order, RevenueReport
from reports_api.services.domain.date_ranges import (
    DateRange,
    current_month_range,
    parse_timestamp,
)
from reports_api.services.domain.observers import ReportObserver, notify


def revenue_date(
    order: Order,
    now: datetime,
    observer: ReportObserver | None = None,
) -> datetime | None:
    """Date an order counts as revenue: approval, falling back to creation."""
    if order.approved_at:
        approved = parse_timestamp(
            order.approved_at, now, observer, order_id=order.id, field="approved_at"
        )
        if approved is not None:
            return approved
    return parse_timestamp(order.created_at, now, observer, order_id=order.id, field="created_at")


def calculate_walk_in_revenue(
    orders: list[Order],
    window: DateRange,
    now: datetime,
    observer: ReportObserver | None = None,
) -> tuple[float, list[Order]]:
    """Sum approved cash orders whose revenue date falls inside `window`."""
    revenue_orders = []
    for order in orders:
        if order.status != OrderStatus.APPROVED or order.payment_type != PaymentType.CASH:
            continue
        moment = revenue_date(order, now, observer)
        if moment is not None and window.contains(moment):
            revenue_orders.append(order)

    return sum(order.total_amount for order in revenue_orders), revenue_orders


def calculate_monthly_payments(
    customers: list[Customer],
    observer: ReportObserver | None = None,
) -> tuple[float, list[BalanceWarning]]:
    """
    Amount monthly customers have paid off so far.

    A customer whose balance exceeds their total spend is reported as a
    warning and contributes nothing.
    """
    total = 0.0
    warnings = []
    for customer in customers:
        if customer.payment_type != PaymentType.MONTHLY or customer.total_spent <= 0:
            continue

        paid = customer.total_spent - customer.monthly_balance
        if paid > 0:
            total += paid
        elif paid < 0:
            warning = BalanceWarning(
                customer_id=customer.id,
                customer_name=customer.name,
                total_spent=customer.total_spent,
                monthly_balance=customer.monthly_balance,
                paid_amount=paid,
            )
            warnings.append(warning)
            notify(
                observer,
                ReportEvents.NEGATIVE_PAID_AMOUNT,
                customer_id=customer.id,
                total_spent=customer.total_spent,
                monthly_balance=customer.monthly_balance,
                paid_amount=paid,
            )

    return total, warnings


def calculate_revenue(
    orders: list[Order],
    customers: list[Customer],
    *,
    now: datetime,
    window: DateRange | None = None,
    observer: ReportObserver | None = None,
) -> RevenueReport:
    """
    Revenue for the current month, or for `window` when given.

    Monthly payments are cumulative per customer and are not windowed.
    """
    if window is None:
        window = current_month_range(now)

    walk_in_revenue, revenue_orders = calculate_walk_in_revenue(orders, window, now, observer)
    monthly_payments_revenue, warnings = calculate_monthly_payments(customers, observer)

    report = RevenueReport(
        total_revenue=walk_in_revenue + monthly_payments_revenue,
        walk_in_revenue=walk_in_revenue,
        monthly_payments_revenue=monthly_payments_revenue,
        revenue_orders=revenue_orders,
        window_start=window.start,
        window_end=window.end,
        warnings=warnings,
    )
    notify(
        observer,
        ReportEvents.REVENUE_CALCULATED,
        total=report.total_revenue,
        walk_in=report.walk_in_revenue,
        monthly=report.monthly_payments_revenue,
        orders_in_window=len(revenue_orders),
    )
    return report
