"""
Shared module for common utilities used by the reports API and the CLI.

STRUCTURE:
- shared.config: Configuration
  - settings.py: Environment config (pydantic-settings)
  - logging.py: Structured logging
  - constants.py: Order status, payment types, roles, thresholds, report events

- shared.infrastructure: Request plumbing
  - correlation.py: X-Request-ID middleware and log filter

- shared.utils: Utilities
  - exceptions.py: HTTP exceptions with auto-logging
  - schemas.py: Pydantic models for orders, customers, dishes and reports
  - currency.py: Display formatting and conversion
  - clock.py: Local wall-clock access

IMPORT EXAMPLES:
    from shared.config.settings import settings
    from shared.config.constants import OrderStatus, PaymentType
    from shared.utils.exceptions import NotFoundError, PaymentAmountError
    from shared.utils.schemas import Order, Customer, ReportSnapshot
"""
