"""
Pytest configuration and fixtures for the reports tests.

Report functions take `now` explicitly, so every test runs against the same
fixed instant: 2025-03-15 12:00 in the restaurant time zone.
"""

import itertools
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

import pytest
from fastapi.testclient import TestClient

from reports_api.main import app
from reports_api.services.domain import RecordingObserver
from shared.utils.schemas import CartItem, Customer, Dish, Order


TZ = ZoneInfo("Africa/Kampala")
NOW = datetime(2025, 3, 15, 12, 0, tzinfo=TZ)

_id_counter = itertools.count(1000)


def next_id(prefix: str = "id") -> str:
    """Unique id for test records."""
    return f"{prefix}-{next(_id_counter)}"


def days_ago(days: float, now: datetime = NOW) -> str:
    """ISO timestamp `days` before `now`."""
    return (now - timedelta(days=days)).isoformat()


def make_dish(**overrides) -> Dish:
    data = {
        "id": next_id("dish"),
        "name": "Rolex",
        "price": 5000,
        "category": "Breakfast",
        "available": True,
    }
    data.update(overrides)
    return Dish(**data)


def make_order(
    total_amount: float = 10000,
    *,
    status: str = "approved",
    payment_type: str = "cash",
    created_at: str | None = None,
    items: list[tuple[Dish, int]] | None = None,
    **overrides,
) -> Order:
    """Approved cash order created at NOW unless told otherwise."""
    cart = [CartItem(dish=dish, quantity=qty) for dish, qty in (items or [])]
    if items:
        total_amount = sum(dish.price * qty for dish, qty in items)
    data = {
        "id": next_id("order"),
        "customer_id": next_id("customer"),
        "items": cart,
        "total_amount": total_amount,
        "status": status,
        "payment_type": payment_type,
        "created_at": created_at or NOW.isoformat(),
    }
    data.update(overrides)
    return Order(**data)


def make_customer(**overrides) -> Customer:
    number = next(_id_counter)
    data = {
        "id": f"customer-{number}",
        "name": f"Customer {number}",
        "email": f"customer{number}@example.com",
        "customer_number": number,
    }
    data.update(overrides)
    return Customer(**data)


def make_monthly_customer(balance: float, spent: float | None = None, **overrides) -> Customer:
    return make_customer(
        payment_type="monthly",
        monthly_balance=balance,
        total_spent=balance if spent is None else spent,
        **overrides,
    )


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture
def client():
    """Test client for the reports API (runs the lifespan)."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def dishes() -> list[Dish]:
    return [
        make_dish(id="dish-rolex", name="Rolex", price=5000),
        make_dish(id="dish-matooke", name="Matooke", price=8000, category="Mains"),
        make_dish(id="dish-pilau", name="Pilau", price=12000, category="Mains"),
    ]
