"""
HTTP exceptions raised by the balance helpers and request validation.

The report functions themselves never raise. Each exception logs itself when
created and carries a stable `code` that API clients can switch on.

Usage:
    from shared.utils.exceptions import NotFoundError, PaymentAmountError

    raise NotFoundError("Customer number", 42)
    raise PaymentAmountError(amount, "exceeds outstanding balance")
"""

from typing import Any

from fastapi import HTTPException, status

from shared.config.logging import get_logger

logger = get_logger(__name__)


class AppException(HTTPException):
    """
    Base exception with automatic logging.

    Subclasses set `code` and `status_code`; the message goes to `detail`.
    """

    code = "error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str, log_level: str = "warning", **log_context: Any):
        log_fn = getattr(logger, log_level, logger.warning)
        log_fn(detail, code=self.code, status_code=self.status_code, **log_context)

        super().__init__(status_code=self.status_code, detail=detail)


class NotFoundError(AppException):
    """Entity not found (404)."""

    code = "not_found"
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: str, entity_id: int | str | None = None, **log_context: Any):
        detail = f"{entity} {entity_id} not found" if entity_id is not None else f"{entity} not found"
        super().__init__(detail, entity=entity, entity_id=entity_id, **log_context)


class ValidationError(AppException):
    """Request rejected by a business rule (400)."""

    code = "validation_error"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(detail, **log_context)


class InvalidStateError(ValidationError):
    """Entity is in the wrong state for the operation, e.g. approving an approved order."""

    code = "invalid_state"

    def __init__(self, entity: str, current_state: str, expected_states: list[str] | None = None, **log_context: Any):
        if expected_states:
            detail = f"{entity} is '{current_state}', expected: {', '.join(expected_states)}"
        else:
            detail = f"{entity} cannot be '{current_state}' for this operation"

        super().__init__(detail, entity=entity, current_state=current_state, **log_context)


class PaymentAmountError(ValidationError):
    """Payment amount is not positive or exceeds the balance."""

    code = "invalid_payment_amount"

    def __init__(self, amount: float, reason: str, **log_context: Any):
        super().__init__(f"Invalid payment amount ({amount}): {reason}", amount=amount, **log_context)
