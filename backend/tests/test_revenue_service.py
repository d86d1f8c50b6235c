"""
Tests for revenue classification.
"""

from datetime import datetime

import pytest

from reports_api.services.domain.date_ranges import DateRange
from reports_api.services.domain.revenue_service import (
    calculate_monthly_payments,
    calculate_revenue,
    revenue_date,
)
from shared.config.constants import ReportEvents
from tests.conftest import NOW, TZ, days_ago, make_customer, make_monthly_customer, make_order


class TestRevenueScenario:
    """End-to-end revenue figures."""

    def test_walk_in_plus_monthly_payments(self, now):
        """One 50,000 cash order and a customer who paid 100,000 of 120,000."""
        orders = [make_order(50000, approved_at=now.isoformat())]
        customers = [make_monthly_customer(balance=20000, spent=120000)]

        report = calculate_revenue(orders, customers, now=now)

        assert report.walk_in_revenue == 50000
        assert report.monthly_payments_revenue == 100000
        assert report.total_revenue == 150000
        assert [o.id for o in report.revenue_orders] == [orders[0].id]

    def test_trimmed_fraction_approval_time_counts(self, now):
        orders = [make_order(50000, approved_at="2025-03-10T10:00:00.12+00:00")]
        report = calculate_revenue(orders, [], now=now)
        assert report.walk_in_revenue == 50000
        assert report.warnings == []

    def test_empty_input_is_zero(self, now):
        report = calculate_revenue([], [], now=now)
        assert report.total_revenue == 0
        assert report.revenue_orders == []
        assert report.warnings == []

    def test_default_window_is_current_month(self, now):
        report = calculate_revenue([], [], now=now)
        assert report.window_start == datetime(2025, 3, 1, tzinfo=TZ)
        assert report.window_end.day == 31


class TestWalkInRevenue:
    """Only approved cash orders inside the window count."""

    @pytest.mark.parametrize("status", ["pending", "rejected"])
    def test_unapproved_orders_are_excluded(self, now, status):
        orders = [make_order(50000, status=status)]
        assert calculate_revenue(orders, [], now=now).walk_in_revenue == 0

    def test_monthly_orders_are_not_walk_in_revenue(self, now):
        orders = [make_order(50000, payment_type="monthly")]
        assert calculate_revenue(orders, [], now=now).walk_in_revenue == 0

    def test_previous_month_orders_are_excluded(self, now):
        orders = [make_order(50000, created_at="2025-02-28T10:00:00", approved_at="2025-02-28T10:05:00")]
        assert calculate_revenue(orders, [], now=now).walk_in_revenue == 0

    def test_approval_date_wins_over_creation_date(self, now):
        """Created last month, approved this month: counts now."""
        orders = [make_order(30000, created_at="2025-02-28T23:00:00", approved_at="2025-03-01T08:00:00")]
        assert calculate_revenue(orders, [], now=now).walk_in_revenue == 30000

    def test_created_at_used_when_approval_missing(self, now):
        order = make_order(created_at="2025-03-02T09:00:00")
        assert revenue_date(order, now) == datetime(2025, 3, 2, 9, 0, tzinfo=TZ)

    def test_malformed_approval_falls_back_to_creation(self, now, observer):
        order = make_order(created_at="2025-03-02T09:00:00", approved_at="bad")
        assert revenue_date(order, now, observer) == datetime(2025, 3, 2, 9, 0, tzinfo=TZ)
        assert observer.named(ReportEvents.MALFORMED_TIMESTAMP)[0]["field"] == "approved_at"

    def test_malformed_dates_exclude_order(self, now, observer):
        orders = [make_order(40000, created_at="yesterday-ish")]
        report = calculate_revenue(orders, [], now=now, observer=observer)
        assert report.walk_in_revenue == 0
        assert len(observer.named(ReportEvents.MALFORMED_TIMESTAMP)) == 1

    def test_explicit_window(self, now):
        window = DateRange(
            start=datetime(2025, 2, 1, tzinfo=TZ),
            end=datetime(2025, 2, 28, 23, 59, 59, tzinfo=TZ),
        )
        orders = [
            make_order(10000, created_at="2025-02-10T12:00:00"),
            make_order(20000, created_at=days_ago(1)),
        ]
        report = calculate_revenue(orders, [], now=now, window=window)
        assert report.walk_in_revenue == 10000
        assert report.window_start == window.start


class TestMonthlyPayments:
    """Paid amount derived as total_spent - monthly_balance."""

    def test_cash_customers_contribute_nothing(self):
        customers = [make_customer(total_spent=80000)]
        total, warnings = calculate_monthly_payments(customers)
        assert total == 0
        assert warnings == []

    def test_customers_without_spend_are_skipped(self):
        customers = [make_monthly_customer(balance=0, spent=0)]
        assert calculate_monthly_payments(customers) == (0, [])

    def test_multiple_customers_are_summed(self):
        customers = [
            make_monthly_customer(balance=0, spent=40000),
            make_monthly_customer(balance=5000, spent=15000),
        ]
        total, _ = calculate_monthly_payments(customers)
        assert total == 50000

    def test_negative_paid_amount_is_warned_not_added(self, now, observer):
        customer = make_monthly_customer(balance=90000, spent=60000)
        report = calculate_revenue([], [customer], now=now, observer=observer)

        assert report.monthly_payments_revenue == 0
        assert len(report.warnings) == 1
        warning = report.warnings[0]
        assert warning.customer_id == customer.id
        assert warning.paid_amount == -30000
        assert observer.warnings == [
            (
                ReportEvents.NEGATIVE_PAID_AMOUNT,
                {
                    "customer_id": customer.id,
                    "total_spent": 60000,
                    "monthly_balance": 90000,
                    "paid_amount": -30000,
                },
            )
        ]

    def test_report_event_is_emitted(self, now, observer):
        calculate_revenue([make_order(1000)], [], now=now, observer=observer)
        events = observer.named(ReportEvents.REVENUE_CALCULATED)
        assert events == [{"total": 1000, "walk_in": 1000, "monthly": 0, "orders_in_window": 1}]
