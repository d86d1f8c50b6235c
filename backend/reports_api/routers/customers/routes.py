"""
Customer router.
Reception-desk lookups over a customer list supplied by the caller.
"""

from fastapi import APIRouter, Query
from pydantic import BaseModel

from shared.utils.exceptions import NotFoundError
from shared.utils.schemas import Customer, ErrorResponse, ReportSnapshot
from reports_api.services.domain.customer_service import (
    find_customer_by_number,
    next_customer_number,
    search_customers,
)


router = APIRouter(prefix="/api/customers", tags=["customers"])


class NextNumberResponse(BaseModel):
    customer_number: int


@router.post("/search", response_model=list[Customer])
def search(
    snapshot: ReportSnapshot,
    term: str = Query(min_length=1),
    limit: int = Query(default=10, ge=1, le=50),
) -> list[Customer]:
    """Customers whose name or email contains `term`."""
    return search_customers(snapshot.customers, term, limit)


@router.post(
    "/by-number/{customer_number}",
    response_model=Customer,
    responses={404: {"model": ErrorResponse}},
)
def by_number(customer_number: int, snapshot: ReportSnapshot) -> Customer:
    customer = find_customer_by_number(snapshot.customers, customer_number)
    if customer is None:
        raise NotFoundError("Customer number", customer_number)
    return customer


@router.post("/next-number", response_model=NextNumberResponse)
def next_number(snapshot: ReportSnapshot) -> NextNumberResponse:
    """Number to assign at the next registration."""
    return NextNumberResponse(customer_number=next_customer_number(snapshot.customers))
