"""
Shared Pydantic schemas used across the application.

Input models accept camelCase keys (as the mobile app sends them) as well as
snake_case field names. Responses are serialized with camelCase aliases.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


# =============================================================================
# Common Types
# =============================================================================

OrderStatus = Literal["pending", "approved", "rejected"]
PaymentType = Literal["cash", "monthly"]
Role = Literal["customer", "receptionist", "admin", "master_admin"]
Timeframe = Literal["week", "month", "all"]
SeverityLevel = Literal["low", "medium", "high", "critical"]

# Timestamps are kept as received; the report engine parses them and drops
# records whose value is malformed instead of rejecting the whole snapshot.
Timestamp = datetime | str


class CamelModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = {"populate_by_name": True, "alias_generator": to_camel}


# =============================================================================
# Catalog and Order Schemas
# =============================================================================


class Dish(CamelModel):
    """Menu dish."""

    id: str
    name: str
    description: str = ""
    price: float = Field(ge=0)
    image: str = ""
    category: str = ""
    available: bool = True


class CartItem(CamelModel):
    """Order line: dish snapshot at order time plus quantity."""

    dish: Dish
    quantity: int = Field(ge=1)


class Order(CamelModel):
    """Customer or walk-in order. Read-only input to the reports."""

    id: str
    customer_id: str
    customer_name: str = ""
    customer_email: str = ""
    items: list[CartItem] = Field(default_factory=list)
    total_amount: float
    status: OrderStatus
    payment_type: PaymentType
    created_at: Timestamp
    approved_at: Timestamp | None = None
    rejected_at: Timestamp | None = None
    paid_at: Timestamp | None = None
    is_walk_in: bool = False
    placed_by: str | None = None  # Email of the receptionist who placed it
    placed_by_name: str | None = None


class Customer(CamelModel):
    """Registered customer or staff member."""

    id: str
    name: str
    email: str
    phone: str | None = None
    customer_number: int
    role: Role = "customer"
    payment_type: PaymentType = "cash"
    monthly_balance: float = 0
    total_spent: float = 0
    is_first_login: bool = False
    registered_at: Timestamp | None = None


# =============================================================================
# Billing Report Schemas
# =============================================================================


class BalanceWarning(CamelModel):
    """Monthly customer whose balance exceeds their recorded spend."""

    customer_id: str
    customer_name: str
    total_spent: float
    monthly_balance: float
    paid_amount: float  # Negative: total_spent - monthly_balance


class RevenueReport(CamelModel):
    """Walk-in cash revenue plus monthly payments collected."""

    total_revenue: float
    walk_in_revenue: float
    monthly_payments_revenue: float
    revenue_orders: list[Order]
    window_start: datetime
    window_end: datetime
    warnings: list[BalanceWarning] = Field(default_factory=list)


class CustomerBill(CamelModel):
    """
    Outstanding balance of one monthly customer.

    unpaid_amount is the stored balance and is authoritative.
    current_period_total is the sum of this month's approved monthly orders,
    shown for context only; it ignores partial payments and can differ.
    """

    customer: Customer
    unpaid_amount: float
    orders: list[Order]
    current_period_total: float


class MonthlyBillsReport(CamelModel):
    total_monthly_bills: float
    customers_with_bills: list[CustomerBill]
    total_customers: int


class OverdueBill(CamelModel):
    """Monthly customer with at least one unpaid order from a prior month."""

    customer: Customer
    overdue_amount: float
    orders: list[Order]
    oldest_order_date: datetime
    days_overdue: int
    severity: SeverityLevel
    severity_color: str
    days_overdue_label: str


class OverdueBillsReport(CamelModel):
    total_overdue_bills: float
    customers_with_overdue: list[OverdueBill]
    total_customers: int


class PaymentRequest(CamelModel):
    """Monthly bill payment recorded by an admin."""

    customer: Customer
    amount: float


class PaymentResult(CamelModel):
    """Customer after a payment. The caller persists the new balance."""

    customer: Customer
    amount_paid: float
    remaining_balance: float
    cleared: bool


# =============================================================================
# Analytics Schemas
# =============================================================================


class DishPerformance(CamelModel):
    dish_id: str
    dish_name: str
    dish_image: str
    dish_category: str
    dish_price: float
    order_count: int
    total_revenue: float
    average_rating: float
    trend_percentage: float
    is_available: bool


class DishAnalyticsReport(CamelModel):
    """Dish performance with the dashboard selectors and insights."""

    timeframe: Timeframe
    performance: list[DishPerformance]
    top_revenue: list[DishPerformance]
    trending_up: list[DishPerformance]
    trending_down: list[DishPerformance]
    underperforming: list[DishPerformance]
    insights: list[str]


class DashboardSummary(CamelModel):
    """Admin dashboard tiles for the current month."""

    as_of: datetime
    total_revenue: float
    walk_in_revenue: float
    monthly_payments_revenue: float
    total_monthly_bills: float
    monthly_bill_customers: int
    total_overdue_bills: float
    overdue_customers: int
    completed_orders: int
    active_customers: int


# =============================================================================
# Request Schemas
# =============================================================================


class ReportSnapshot(CamelModel):
    """
    In-memory snapshot the reports are computed from.

    as_of overrides the clock; when omitted the server's local time is used.
    """

    orders: list[Order] = Field(default_factory=list)
    customers: list[Customer] = Field(default_factory=list)
    dishes: list[Dish] = Field(default_factory=list)
    as_of: datetime | None = None


class ErrorResponse(CamelModel):
    """Error body returned for AppException and its subclasses."""

    detail: str
    code: str
    request_id: str | None = None
