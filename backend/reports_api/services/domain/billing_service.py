"""
Monthly billing: outstanding balances, overdue detection and balance changes.

The stored customer.monthly_balance is the ground truth for what a customer
owes. Order history is attached for display only; summing it would ignore
partial payments already applied to the balance.
"""

from datetime import datetime

from shared.config.constants import (
    DAYS_PER_MONTH,
    SEVERITY_COLORS,
    UNKNOWN_SEVERITY_COLOR,
    OrderStatus,
    PaymentType,
    ReportEvents,
    Severity,
    SeverityThresholds,
)
from shared.config.logging import billing_logger as logger, mask_email
from shared.utils.exceptions import InvalidStateError, PaymentAmountError, ValidationError
from shared.utils.schemas import (
    Customer,
    CustomerBill,
    MonthlyBillsReport,
    Order,
    OverdueBill,
    OverdueBillsReport,
    PaymentResult,
)
from reports_api.services.domain.date_ranges import current_month_range, parse_timestamp
from reports_api.services.domain.observers import ReportObserver, notify

SECONDS_PER_DAY = 86_400


def has_outstanding_balance(customer: Customer) -> bool:
    return customer.payment_type == PaymentType.MONTHLY and customer.monthly_balance > 0


def _orders_by_customer(orders: list[Order]) -> dict[str, list[Order]]:
    """Approved monthly orders grouped by customer id."""
    grouped: dict[str, list[Order]] = {}
    for order in orders:
        if order.status == OrderStatus.APPROVED and order.payment_type == PaymentType.MONTHLY:
            grouped.setdefault(order.customer_id, []).append(order)
    return grouped


# =============================================================================
# Monthly Bills
# =============================================================================


def calculate_monthly_bills(
    orders: list[Order],
    customers: list[Customer],
    *,
    now: datetime,
    observer: ReportObserver | None = None,
) -> MonthlyBillsReport:
    """
    Outstanding balances of monthly customers.

    The total is the sum of stored balances, so adding or removing order
    records never changes it.
    """
    month = current_month_range(now)
    monthly_orders = _orders_by_customer(orders)

    bills = []
    for customer in customers:
        if not has_outstanding_balance(customer):
            continue

        customer_orders = monthly_orders.get(customer.id, [])
        period_total = 0.0
        for order in customer_orders:
            created = parse_timestamp(
                order.created_at, now, observer, order_id=order.id, field="created_at"
            )
            if created is not None and month.contains(created):
                period_total += order.total_amount

        bills.append(
            CustomerBill(
                customer=customer,
                unpaid_amount=customer.monthly_balance,
                orders=customer_orders,
                current_period_total=period_total,
            )
        )

    report = MonthlyBillsReport(
        total_monthly_bills=sum(bill.unpaid_amount for bill in bills),
        customers_with_bills=bills,
        total_customers=len(bills),
    )
    notify(
        observer,
        ReportEvents.MONTHLY_BILLS_CALCULATED,
        total=report.total_monthly_bills,
        customers=report.total_customers,
    )
    return report


# =============================================================================
# Overdue Bills
# =============================================================================


def get_overdue_severity(days_overdue: int) -> str:
    if days_overdue >= SeverityThresholds.CRITICAL:
        return Severity.CRITICAL
    if days_overdue >= SeverityThresholds.HIGH:
        return Severity.HIGH
    if days_overdue >= SeverityThresholds.MEDIUM:
        return Severity.MEDIUM
    return Severity.LOW


def get_overdue_severity_color(severity: str) -> str:
    return SEVERITY_COLORS.get(severity, UNKNOWN_SEVERITY_COLOR)


def format_days_overdue(days: int) -> str:
    """
    Human-readable age of an overdue bill.

    0 -> "Due today", 1 -> "1 day overdue", under 30 days counts days,
    otherwise whole 30-day months.
    """
    if days <= 0:
        return "Due today"
    if days == 1:
        return "1 day overdue"
    if days < DAYS_PER_MONTH:
        return f"{days} days overdue"
    months = days // DAYS_PER_MONTH
    if months == 1:
        return "1 month overdue"
    return f"{months} months overdue"


def calculate_overdue_bills(
    orders: list[Order],
    customers: list[Customer],
    *,
    now: datetime,
    observer: ReportObserver | None = None,
) -> OverdueBillsReport:
    """
    Monthly customers owing money for orders placed before this month.

    A balance that only comes from this month's orders is not overdue yet.
    When a customer does have an old order, the whole stored balance counts
    as overdue.
    """
    month_start = current_month_range(now).start
    monthly_orders = _orders_by_customer(orders)

    overdue = []
    for customer in customers:
        if not has_outstanding_balance(customer):
            continue

        old_orders = []
        oldest = None
        for order in monthly_orders.get(customer.id, []):
            created = parse_timestamp(
                order.created_at, now, observer, order_id=order.id, field="created_at"
            )
            if created is None or created >= month_start:
                continue
            old_orders.append(order)
            if oldest is None or created < oldest:
                oldest = created

        if oldest is None:
            continue

        # Elapsed time, not wall-clock difference, across DST changes
        days_overdue = int((now.timestamp() - oldest.timestamp()) // SECONDS_PER_DAY)
        severity = get_overdue_severity(days_overdue)
        overdue.append(
            OverdueBill(
                customer=customer,
                overdue_amount=customer.monthly_balance,
                orders=old_orders,
                oldest_order_date=oldest,
                days_overdue=days_overdue,
                severity=severity,
                severity_color=get_overdue_severity_color(severity),
                days_overdue_label=format_days_overdue(days_overdue),
            )
        )

    # Most urgent first
    overdue.sort(key=lambda bill: bill.days_overdue, reverse=True)

    report = OverdueBillsReport(
        total_overdue_bills=sum(bill.overdue_amount for bill in overdue),
        customers_with_overdue=overdue,
        total_customers=len(overdue),
    )
    notify(
        observer,
        ReportEvents.OVERDUE_BILLS_CALCULATED,
        total=report.total_overdue_bills,
        customers=report.total_customers,
    )
    return report


# =============================================================================
# Balance Changes
# =============================================================================


def apply_order_approval(customer: Customer, order: Order) -> Customer:
    """
    Customer record after approving `order`.

    Every approved order adds to total_spent; monthly orders also add to
    the running balance. Returns a copy; the caller persists it.
    """
    if order.customer_id != customer.id:
        raise ValidationError(
            f"Order {order.id} does not belong to customer {customer.id}",
            order_id=order.id,
            customer_id=customer.id,
        )
    if order.status != OrderStatus.PENDING:
        raise InvalidStateError("Order", order.status, [OrderStatus.PENDING], order_id=order.id)

    update = {"total_spent": customer.total_spent + order.total_amount}
    if order.payment_type == PaymentType.MONTHLY:
        update["monthly_balance"] = customer.monthly_balance + order.total_amount

    logger.info(
        "Order approval applied",
        order_id=order.id,
        customer_id=customer.id,
        payment_type=order.payment_type,
        amount=order.total_amount,
    )
    return customer.model_copy(update=update)


def apply_monthly_payment(customer: Customer, amount: float) -> PaymentResult:
    """
    Record a monthly bill payment against the stored balance.

    Partial payments are allowed; paying more than is owed is not.
    """
    if customer.payment_type != PaymentType.MONTHLY:
        raise InvalidStateError(
            "Customer payment type", customer.payment_type, [PaymentType.MONTHLY],
            customer_id=customer.id,
        )
    if amount <= 0:
        raise PaymentAmountError(amount, "must be greater than zero", customer_id=customer.id)
    if amount > customer.monthly_balance:
        raise PaymentAmountError(
            amount,
            f"exceeds outstanding balance ({customer.monthly_balance})",
            customer_id=customer.id,
        )

    remaining = customer.monthly_balance - amount
    updated = customer.model_copy(update={"monthly_balance": remaining})

    logger.info(
        "Monthly payment applied",
        customer_id=customer.id,
        email=mask_email(customer.email),
        amount=amount,
        remaining_balance=remaining,
    )
    return PaymentResult(
        customer=updated,
        amount_paid=amount,
        remaining_balance=remaining,
        cleared=remaining == 0,
    )
