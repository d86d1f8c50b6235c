"""
Tests for the admin dashboard summary.
"""

from reports_api.services.domain.dashboard_service import (
    build_dashboard_summary,
    get_active_customers_count,
    get_completed_orders_count,
)
from tests.conftest import days_ago, make_monthly_customer, make_order


class TestDashboardCounts:
    """Current-month order and customer counts."""

    def test_completed_orders_counts_approved_this_month(self, now):
        orders = [
            make_order(),
            make_order(status="pending"),
            make_order(status="rejected"),
            make_order(created_at="2025-02-27T09:00:00"),
        ]
        assert get_completed_orders_count(orders, now=now) == 1

    def test_active_customers_are_distinct_and_any_status(self, now):
        orders = [
            make_order(customer_id="c1"),
            make_order(customer_id="c1", status="pending"),
            make_order(customer_id="c2", status="rejected"),
            make_order(customer_id="c3", created_at="2025-01-05T09:00:00"),
        ]
        assert get_active_customers_count(orders, now=now) == 2

    def test_empty(self, now):
        assert get_completed_orders_count([], now=now) == 0
        assert get_active_customers_count([], now=now) == 0


class TestDashboardSummary:
    """Summary combines the billing reports."""

    def test_summary(self, now):
        owing = make_monthly_customer(balance=20000, spent=120000)
        orders = [
            make_order(50000, customer_id="walk-in"),
            make_order(20000, payment_type="monthly", customer_id=owing.id, created_at=days_ago(40)),
        ]

        summary = build_dashboard_summary(orders, [owing], now=now)

        assert summary.as_of == now
        assert summary.walk_in_revenue == 50000
        assert summary.monthly_payments_revenue == 100000
        assert summary.total_revenue == 150000
        assert summary.total_monthly_bills == 20000
        assert summary.monthly_bill_customers == 1
        assert summary.total_overdue_bills == 20000
        assert summary.overdue_customers == 1
        assert summary.completed_orders == 1
        assert summary.active_customers == 1
