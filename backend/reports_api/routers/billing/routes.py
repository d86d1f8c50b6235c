"""
Billing router.
Revenue, monthly bills, overdue bills, payments and the dashboard summary.

Every endpoint computes from the snapshot in the request body; nothing is
stored. After a payment the caller persists the returned balance before the
next report call, otherwise the bills reports show stale data.
"""

from fastapi import APIRouter, Depends

from shared.config.logging import billing_logger as logger
from shared.utils.schemas import (
    DashboardSummary,
    ErrorResponse,
    MonthlyBillsReport,
    OverdueBillsReport,
    PaymentRequest,
    PaymentResult,
    ReportSnapshot,
    RevenueReport,
)
from reports_api.routers._common import DateWindow, get_report_window, resolve_now
from reports_api.services.domain import (
    apply_monthly_payment,
    build_dashboard_summary,
    calculate_monthly_bills,
    calculate_overdue_bills,
    calculate_revenue,
    logging_observer,
)


router = APIRouter(prefix="/api/billing", tags=["billing"])


@router.post(
    "/revenue",
    response_model=RevenueReport,
    responses={400: {"model": ErrorResponse}},
)
def revenue(
    snapshot: ReportSnapshot,
    window: DateWindow = Depends(get_report_window),
) -> RevenueReport:
    """
    Revenue for the current month, or for the ?start=&end= day range.

    Walk-in revenue is windowed by approval date; monthly payments are the
    cumulative amount each monthly customer has paid off.
    """
    now = resolve_now(snapshot)
    report = calculate_revenue(
        snapshot.orders,
        snapshot.customers,
        now=now,
        window=window.to_range(),
        observer=logging_observer(logger),
    )
    if report.warnings:
        logger.warning(
            "Monthly customers with balance above spend",
            customers=[w.customer_id for w in report.warnings],
        )
    return report


@router.post("/monthly-bills", response_model=MonthlyBillsReport)
def monthly_bills(snapshot: ReportSnapshot) -> MonthlyBillsReport:
    """Outstanding balances of monthly customers (stored balance is authoritative)."""
    return calculate_monthly_bills(
        snapshot.orders,
        snapshot.customers,
        now=resolve_now(snapshot),
        observer=logging_observer(logger),
    )


@router.post("/overdue-bills", response_model=OverdueBillsReport)
def overdue_bills(snapshot: ReportSnapshot) -> OverdueBillsReport:
    """Monthly customers owing for orders placed before this month, most urgent first."""
    return calculate_overdue_bills(
        snapshot.orders,
        snapshot.customers,
        now=resolve_now(snapshot),
        observer=logging_observer(logger),
    )


@router.post(
    "/payments",
    response_model=PaymentResult,
    responses={400: {"model": ErrorResponse}},
)
def record_payment(body: PaymentRequest) -> PaymentResult:
    """
    Apply a monthly bill payment and return the updated customer.

    400 when the amount is not positive, exceeds the balance, or the
    customer is not on monthly billing.
    """
    return apply_monthly_payment(body.customer, body.amount)


@router.post("/dashboard", response_model=DashboardSummary)
def dashboard(snapshot: ReportSnapshot) -> DashboardSummary:
    """Current-month tiles for the admin dashboard."""
    return build_dashboard_summary(
        snapshot.orders,
        snapshot.customers,
        now=resolve_now(snapshot),
        observer=logging_observer(logger),
    )
