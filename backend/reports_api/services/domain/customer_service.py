"""
Customer helpers for the reception and admin portals.

Customers get sequential numbers at registration, starting at 10. Walk-in
orders are booked against a single shared customer numbered -1.
"""

from shared.config.constants import (
    ROLE_PERMISSIONS,
    WALK_IN_CUSTOMER_EMAIL,
    WALK_IN_CUSTOMER_ID,
    WALK_IN_CUSTOMER_NAME,
    CustomerNumbers,
    PaymentType,
    Roles,
)
from shared.utils.schemas import Customer


def build_walk_in_customer() -> Customer:
    """The shared customer record walk-in orders are placed under."""
    return Customer(
        id=WALK_IN_CUSTOMER_ID,
        name=WALK_IN_CUSTOMER_NAME,
        email=WALK_IN_CUSTOMER_EMAIL,
        customer_number=CustomerNumbers.WALK_IN,
        role=Roles.CUSTOMER,
        payment_type=PaymentType.CASH,
    )


def is_walk_in(customer: Customer) -> bool:
    return customer.id == WALK_IN_CUSTOMER_ID or customer.customer_number == CustomerNumbers.WALK_IN


def format_customer_number(customer_number: int) -> str:
    if customer_number == CustomerNumbers.WALK_IN:
        return "#WALK-IN"
    return f"#{customer_number}"


def is_valid_customer_number(value: str) -> bool:
    """Whether typed input is a usable customer number (1-9999)."""
    try:
        number = int(value.strip())
    except ValueError:
        return False
    return 0 < number <= CustomerNumbers.MAX


def get_customer_display_name(customer: Customer) -> str:
    """e.g. "Jane Doe (#42)"."""
    return f"{customer.name} ({format_customer_number(customer.customer_number)})"


def next_customer_number(customers: list[Customer]) -> int:
    """Next sequential number; the walk-in sentinel is ignored."""
    numbers = [c.customer_number for c in customers if c.customer_number > 0]
    if not numbers:
        return CustomerNumbers.FIRST
    return max(numbers) + 1


def find_customer_by_number(customers: list[Customer], customer_number: int) -> Customer | None:
    for customer in customers:
        if customer.customer_number == customer_number:
            return customer
    return None


def search_customers(customers: list[Customer], term: str, limit: int = 10) -> list[Customer]:
    """Case-insensitive match on name or email, ordered by customer number."""
    needle = term.strip().lower()
    if not needle:
        return []
    matches = [
        c for c in customers
        if needle in c.name.lower() or needle in c.email.lower()
    ]
    return sorted(matches, key=lambda c: c.customer_number)[:limit]


def has_permission(role: str, permission: str) -> bool:
    return permission in ROLE_PERMISSIONS.get(role, frozenset())
