"""
Centralized constants for the billing reports.
Avoids magic strings and repeated thresholds.

Usage:
    from shared.config.constants import OrderStatus, PaymentType, Severity

    if order.status == OrderStatus.APPROVED and order.payment_type == PaymentType.CASH:
        ...
"""

from typing import Final


# =============================================================================
# Orders and Customers
# =============================================================================


class OrderStatus:
    """Order status constants. APPROVED and REJECTED are terminal."""

    PENDING: Final[str] = "pending"
    APPROVED: Final[str] = "approved"
    REJECTED: Final[str] = "rejected"

    ALL: Final[list[str]] = [PENDING, APPROVED, REJECTED]


class PaymentType:
    """How a customer settles approved orders."""

    CASH: Final[str] = "cash"  # Paid on the spot
    MONTHLY: Final[str] = "monthly"  # Accumulates on monthly_balance

    ALL: Final[list[str]] = [CASH, MONTHLY]


class Roles:
    """User role constants."""

    CUSTOMER: Final[str] = "customer"
    RECEPTIONIST: Final[str] = "receptionist"
    ADMIN: Final[str] = "admin"
    MASTER_ADMIN: Final[str] = "master_admin"

    ALL: Final[list[str]] = [CUSTOMER, RECEPTIONIST, ADMIN, MASTER_ADMIN]


class Permissions:
    """Permission codes checked by the staff portals."""

    VIEW_MENU: Final[str] = "view_menu"
    PLACE_ORDER: Final[str] = "place_order"
    PLACE_ORDER_FOR_OTHERS: Final[str] = "place_order_for_others"
    APPROVE_ORDERS: Final[str] = "approve_orders"
    VIEW_ALL_ORDERS: Final[str] = "view_all_orders"
    SEARCH_CUSTOMERS: Final[str] = "search_customers"
    PRINT_RECEIPT: Final[str] = "print_receipt"
    MANAGE_DISHES: Final[str] = "manage_dishes"
    MANAGE_CUSTOMERS: Final[str] = "manage_customers"
    VIEW_ANALYTICS: Final[str] = "view_analytics"


_CUSTOMER_PERMISSIONS: Final[tuple[str, ...]] = (
    Permissions.VIEW_MENU,
    Permissions.PLACE_ORDER,
)
_RECEPTIONIST_PERMISSIONS: Final[tuple[str, ...]] = _CUSTOMER_PERMISSIONS + (
    Permissions.PLACE_ORDER_FOR_OTHERS,
    Permissions.APPROVE_ORDERS,
    Permissions.VIEW_ALL_ORDERS,
    Permissions.SEARCH_CUSTOMERS,
    Permissions.PRINT_RECEIPT,
)
_ADMIN_PERMISSIONS: Final[tuple[str, ...]] = _RECEPTIONIST_PERMISSIONS + (
    Permissions.MANAGE_DISHES,
    Permissions.MANAGE_CUSTOMERS,
    Permissions.VIEW_ANALYTICS,
)

ROLE_PERMISSIONS: Final[dict[str, frozenset[str]]] = {
    Roles.CUSTOMER: frozenset(_CUSTOMER_PERMISSIONS),
    Roles.RECEPTIONIST: frozenset(_RECEPTIONIST_PERMISSIONS),
    Roles.ADMIN: frozenset(_ADMIN_PERMISSIONS),
    Roles.MASTER_ADMIN: frozenset(_ADMIN_PERMISSIONS),
}


class CustomerNumbers:
    """Sequential customer numbering."""

    WALK_IN: Final[int] = -1
    FIRST: Final[int] = 10  # First number handed out at registration
    MAX: Final[int] = 9999


WALK_IN_CUSTOMER_ID: Final[str] = "00000000-0000-0000-0000-000000000001"
WALK_IN_CUSTOMER_NAME: Final[str] = "Walk-in Customer"
WALK_IN_CUSTOMER_EMAIL: Final[str] = "walk-in@restaurant.local"


# =============================================================================
# Periods
# =============================================================================


class Timeframe:
    """Analytics window tags."""

    WEEK: Final[str] = "week"
    MONTH: Final[str] = "month"
    ALL: Final[str] = "all"

    CHOICES: Final[list[str]] = [WEEK, MONTH, ALL]


# "all" windows start here
FAR_PAST_YEAR: Final[int] = 2000


# =============================================================================
# Overdue Bills
# =============================================================================


class Severity:
    """Overdue severity tiers, least to most urgent."""

    LOW: Final[str] = "low"
    MEDIUM: Final[str] = "medium"
    HIGH: Final[str] = "high"
    CRITICAL: Final[str] = "critical"

    ALL: Final[list[str]] = [LOW, MEDIUM, HIGH, CRITICAL]


class SeverityThresholds:
    """Minimum days overdue for each tier above LOW."""

    MEDIUM: Final[int] = 30
    HIGH: Final[int] = 60
    CRITICAL: Final[int] = 90


SEVERITY_COLORS: Final[dict[str, str]] = {
    Severity.LOW: "#F59E0B",  # Orange
    Severity.MEDIUM: "#F97316",  # Deep orange
    Severity.HIGH: "#EF4444",  # Red
    Severity.CRITICAL: "#DC2626",  # Dark red
}
UNKNOWN_SEVERITY_COLOR: Final[str] = "#6B7280"  # Gray

DAYS_PER_MONTH: Final[int] = 30  # Used only for "N months overdue" labels


# =============================================================================
# Dish Analytics
# =============================================================================


class RatingWeights:
    """Maximum points each component contributes to the 1-5 star rating."""

    ORDER_COUNT: Final[float] = 2.0
    REVENUE: Final[float] = 2.0
    TREND: Final[float] = 1.0

    MIN_RATING: Final[float] = 1.0
    MAX_RATING: Final[float] = 5.0


class InsightThresholds:
    """Cut-offs for dish insights and the underperforming selector."""

    STRONG_TREND: Final[float] = 20.0  # +/- percent
    LOW_ORDER_COUNT: Final[int] = 5
    NEW_DISH_TREND: Final[float] = 100.0  # Trend reported when previous period is empty


class TrendColors:
    """Trend badge colors."""

    STRONG_UP: Final[str] = "#10B981"
    SLIGHT_UP: Final[str] = "#9ecda5"
    FLAT: Final[str] = "#6B7280"
    SLIGHT_DOWN: Final[str] = "#F59E0B"
    STRONG_DOWN: Final[str] = "#EF4444"

    STRONG_THRESHOLD: Final[float] = 10.0


# =============================================================================
# Report Events
# =============================================================================


class ReportEvents:
    """Event names delivered to report observers."""

    MALFORMED_TIMESTAMP: Final[str] = "malformed_timestamp"
    NEGATIVE_PAID_AMOUNT: Final[str] = "negative_paid_amount"
    REVENUE_CALCULATED: Final[str] = "revenue_calculated"
    MONTHLY_BILLS_CALCULATED: Final[str] = "monthly_bills_calculated"
    OVERDUE_BILLS_CALCULATED: Final[str] = "overdue_bills_calculated"
    DISH_PERFORMANCE_CALCULATED: Final[str] = "dish_performance_calculated"

    # Events that indicate bad upstream data
    WARNINGS: Final[frozenset[str]] = frozenset({
        MALFORMED_TIMESTAMP,
        NEGATIVE_PAID_AMOUNT,
    })
