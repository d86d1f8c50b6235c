"""
Utilities module: Exceptions, schemas, currency and clock helpers.
"""

from shared.utils.exceptions import (
    NotFoundError,
    ValidationError,
    InvalidStateError,
    PaymentAmountError,
)
from shared.utils.currency import format_currency
from shared.utils.clock import local_now
from shared.utils.schemas import ErrorResponse

__all__ = [
    # exceptions
    "NotFoundError",
    "ValidationError",
    "InvalidStateError",
    "PaymentAmountError",
    # currency
    "format_currency",
    # clock
    "local_now",
    # schemas
    "ErrorResponse",
]
