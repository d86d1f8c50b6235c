"""
Infrastructure module: request correlation.

Provides:
- Correlation ID middleware and logging filter (correlation.py)
"""

from shared.infrastructure.correlation import (
    CorrelationIdMiddleware,
    CorrelationIdFilter,
    get_request_id,
)

__all__ = [
    "CorrelationIdMiddleware",
    "CorrelationIdFilter",
    "get_request_id",
]
