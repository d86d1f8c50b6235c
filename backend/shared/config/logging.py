"""
Structured logging for the reports API and CLI.

Loggers accept keyword data alongside the message:

    logger.info("Monthly payment applied", customer_id="c-1", amount=20000)

Production writes one JSON object per line; development writes a colored,
human-readable line. Both carry the request ID when logging inside a request.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from shared.config.settings import settings

SERVICE_NAME = "reports-api"


def _record_time(record: logging.LogRecord) -> datetime:
    return datetime.fromtimestamp(record.created, tz=timezone.utc)


def _request_id(record: logging.LogRecord) -> str | None:
    request_id = getattr(record, "request_id", None)
    return request_id if request_id and request_id != "-" else None


class StructuredFormatter(logging.Formatter):
    """One JSON object per record, for log aggregation."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": _record_time(record).isoformat(),
            "level": record.levelname,
            "service": SERVICE_NAME,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = _request_id(record)
        if request_id:
            log_data["request_id"] = request_id

        data = getattr(record, "extra_data", None)
        if data:
            log_data["data"] = data

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if settings.debug:
            log_data["source"] = f"{record.filename}:{record.lineno}"

        return json.dumps(log_data, default=str)


class DevelopmentFormatter(logging.Formatter):
    """
    Human-readable formatter for development.
    """

    COLORS = {
        "DEBUG": "\033[36m",     # Cyan
        "INFO": "\033[32m",      # Green
        "WARNING": "\033[33m",   # Yellow
        "ERROR": "\033[31m",     # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"
    DIM = "\033[2m"

    def __init__(self, use_color: bool = True):
        super().__init__()
        self.use_color = use_color

    def _paint(self, text: str, code: str) -> str:
        return f"{code}{text}{self.RESET}" if self.use_color else text

    def format(self, record: logging.LogRecord) -> str:
        timestamp = _record_time(record).astimezone().strftime("%H:%M:%S")
        head = self._paint(f"[{timestamp}] {record.levelname:8}", self.COLORS.get(record.levelname, ""))

        parts = [head]
        request_id = _request_id(record)
        if request_id:
            parts.append(self._paint(f"[{request_id[:8]}]", self.DIM))
        parts.append(f"{record.name}: {record.getMessage()}")
        message = " ".join(parts)

        data = getattr(record, "extra_data", None)
        if data:
            message += " (" + " | ".join(f"{k}={v}" for k, v in data.items()) + ")"

        if record.exc_info:
            message += f"\n{self.formatException(record.exc_info)}"

        return message


class StructuredLogger(logging.Logger):
    """
    Logger that accepts arbitrary keyword data.

    Keywords the stdlib understands (exc_info, extra, stack_info, stacklevel)
    keep their meaning; everything else is collected into `extra_data`.
    """

    def _log(
        self,
        level: int,
        msg: object,
        args: Any,
        exc_info: Any = None,
        extra: dict | None = None,
        stack_info: bool = False,
        stacklevel: int = 1,
        **data: Any,
    ) -> None:
        extra = dict(extra or {})
        extra["extra_data"] = data or None
        # Skip this frame so records point at the real caller
        super()._log(level, msg, args, exc_info, extra, stack_info, stacklevel + 1)


logging.setLoggerClass(StructuredLogger)


def setup_logging() -> None:
    """
    Configure the root logger.
    Call once at startup (API lifespan or CLI callback).
    """
    from shared.infrastructure.correlation import CorrelationIdFilter

    log_level = logging.DEBUG if settings.debug else logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.addFilter(CorrelationIdFilter())

    if settings.environment == "production":
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(DevelopmentFormatter(use_color=sys.stdout.isatty()))

    root = logging.getLogger()
    root.setLevel(log_level)
    root.handlers.clear()
    root.addHandler(handler)

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: str) -> StructuredLogger:
    """
    Get a structured logger.

    Usage:
        from shared.config.logging import get_logger
        logger = get_logger(__name__)

        logger.info("Payment applied", customer_id="c-1", amount=20000)
    """
    return logging.getLogger(name)  # type: ignore


def mask_email(email: str | None) -> str:
    """
    Mask an email address before it reaches the logs.

    "user@example.com" -> "us***@example.com"
    """
    if not email or "@" not in email:
        return "<no-email>" if not email else "***@invalid"

    local, domain = email.split("@", 1)
    return f"{local[:2]}***@{domain}"


# Pre-configured loggers
reports_api_logger = get_logger("reports_api")
billing_logger = get_logger("reports_api.billing")
analytics_logger = get_logger("reports_api.analytics")
cli_logger = get_logger("cli")
