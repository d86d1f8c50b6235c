"""
Tests for settings, logging, correlation IDs and currency helpers.
"""

import json
import logging

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from reports_api.core.cors import DEV_ORIGINS, get_cors_origins
from reports_api.services.domain.observers import RecordingObserver, logging_observer
from shared.config.constants import ReportEvents
from shared.config.logging import (
    DevelopmentFormatter,
    StructuredFormatter,
    get_logger,
    mask_email,
)
from shared.config.settings import Settings, settings
from shared.infrastructure.correlation import (
    CorrelationIdFilter,
    CorrelationIdMiddleware,
    get_request_id,
    request_id_var,
)
from shared.utils.currency import (
    convert_local_to_usd,
    convert_usd_to_local,
    format_currency,
    parse_currency_input,
)


# =============================================================================
# Settings Tests
# =============================================================================

class TestSettingsValidation:
    """Checks pydantic cannot express."""

    def test_defaults_are_valid(self):
        assert Settings(_env_file=None).validate_settings() == []

    def test_reads_env_case_insensitively(self, monkeypatch):
        monkeypatch.setenv("timezone", "Africa/Nairobi")
        monkeypatch.setenv("USD_EXCHANGE_RATE", "3800")
        loaded = Settings(_env_file=None)
        assert loaded.timezone == "Africa/Nairobi"
        assert loaded.usd_exchange_rate == 3800
        assert Settings.model_config["env_file"] == ".env"

    def test_unknown_timezone(self):
        errors = Settings(_env_file=None, timezone="Mars/Olympus").validate_settings()
        assert any("TIMEZONE" in e for e in errors)

    def test_non_positive_exchange_rate(self):
        errors = Settings(_env_file=None, usd_exchange_rate=0).validate_settings()
        assert any("USD_EXCHANGE_RATE" in e for e in errors)

    def test_production_requires_origins_and_no_debug(self):
        errors = Settings(_env_file=None, environment="production", debug=True).validate_settings()
        assert any("DEBUG" in e for e in errors)
        assert any("ALLOWED_ORIGINS" in e for e in errors)


class TestCorsOrigins:
    """ALLOWED_ORIGINS parsing."""

    def test_defaults_to_dev_servers(self, monkeypatch):
        monkeypatch.setattr(settings, "allowed_origins", "")
        assert get_cors_origins() == DEV_ORIGINS
        assert "http://localhost:5173" in DEV_ORIGINS

    def test_parses_configured_origins(self, monkeypatch):
        monkeypatch.setattr(settings, "allowed_origins", " https://admin.example.com/, ,https://ops.example.com")
        assert get_cors_origins() == ["https://admin.example.com", "https://ops.example.com"]


# =============================================================================
# Logging Tests
# =============================================================================

def make_record(message="Payment applied", **extra_data):
    record = logging.LogRecord("reports_api.billing", logging.INFO, __file__, 1, message, (), None)
    record.extra_data = extra_data or None
    record.request_id = "abcdef12-3456"
    return record


class TestFormatters:
    """Structured and development log output."""

    def test_structured_formatter_emits_json(self):
        output = json.loads(StructuredFormatter().format(make_record(customer_id="c-1")))
        assert output["message"] == "Payment applied"
        assert output["logger"] == "reports_api.billing"
        assert output["data"] == {"customer_id": "c-1"}
        assert output["request_id"] == "abcdef12-3456"

    def test_development_formatter_appends_data(self):
        output = DevelopmentFormatter().format(make_record(amount=20000))
        assert "Payment applied" in output
        assert "amount=20000" in output
        assert "[abcdef12]" in output

    def test_structured_logger_passes_keyword_data(self, caplog):
        logger = get_logger("reports_api.test")
        with caplog.at_level(logging.INFO, logger="reports_api.test"):
            logger.info("Order approval applied", order_id="o-1")
        assert caplog.records[-1].extra_data == {"order_id": "o-1"}

    @pytest.mark.parametrize(
        "email,masked",
        [
            ("user@example.com", "us***@example.com"),
            ("a@example.com", "a***@example.com"),
            (None, "<no-email>"),
            ("not-an-email", "***@invalid"),
        ],
    )
    def test_mask_email(self, email, masked):
        assert mask_email(email) == masked


class TestLoggingObserver:
    """Observer adapters."""

    def test_warning_events_log_at_warning(self, caplog):
        observe = logging_observer(get_logger("reports_api.observer_test"))
        with caplog.at_level(logging.DEBUG, logger="reports_api.observer_test"):
            observe(ReportEvents.MALFORMED_TIMESTAMP, value="bad", order_id="o-1")
            observe(ReportEvents.REVENUE_CALCULATED, total=0)

        levels = [(r.getMessage(), r.levelno) for r in caplog.records]
        assert (ReportEvents.MALFORMED_TIMESTAMP, logging.WARNING) in levels
        assert (ReportEvents.REVENUE_CALCULATED, logging.DEBUG) in levels

    def test_recording_observer(self):
        observer = RecordingObserver()
        observer(ReportEvents.NEGATIVE_PAID_AMOUNT, customer_id="c-1")
        observer(ReportEvents.REVENUE_CALCULATED, total=10)
        assert observer.named(ReportEvents.REVENUE_CALCULATED) == [{"total": 10}]
        assert observer.warnings == [(ReportEvents.NEGATIVE_PAID_AMOUNT, {"customer_id": "c-1"})]


# =============================================================================
# Correlation ID Tests
# =============================================================================

class TestCorrelationId:
    """Request ID middleware and log filter."""

    @pytest.fixture
    def app_with_correlation(self):
        app = FastAPI()
        app.add_middleware(CorrelationIdMiddleware)

        @app.get("/test")
        def test_endpoint():
            return {"request_id": get_request_id()}

        return app

    def test_generates_request_id(self, app_with_correlation):
        response = TestClient(app_with_correlation).get("/test")
        request_id = response.headers.get("X-Request-ID")
        assert request_id
        assert response.json()["request_id"] == request_id

    def test_propagates_incoming_request_id(self, app_with_correlation):
        response = TestClient(app_with_correlation).get("/test", headers={"X-Request-ID": "req-123"})
        assert response.headers["X-Request-ID"] == "req-123"

    def test_replaces_unsafe_request_id(self, app_with_correlation):
        response = TestClient(app_with_correlation).get("/test", headers={"X-Request-ID": "not a valid id!"})
        assert response.headers["X-Request-ID"] != "not a valid id!"
        assert len(response.headers["X-Request-ID"]) == 32

    def test_filter_adds_request_id(self):
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", (), None)
        token = request_id_var.set("req-456")
        try:
            assert CorrelationIdFilter().filter(record)
        finally:
            request_id_var.reset(token)
        assert record.request_id == "req-456"

    def test_filter_uses_dash_outside_requests(self):
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", (), None)
        CorrelationIdFilter().filter(record)
        assert record.request_id == "-"


# =============================================================================
# Currency Tests
# =============================================================================

class TestCurrency:
    """Display formatting and conversion."""

    def test_format_currency(self):
        assert format_currency(50000) == "USh 50,000"
        assert format_currency(1234567.6) == "USh 1,234,568"
        assert format_currency(0, symbol="$") == "$ 0"

    def test_conversions(self):
        assert convert_usd_to_local(10) == 37000
        assert convert_local_to_usd(37000) == pytest.approx(10)

    @pytest.mark.parametrize(
        "raw,value",
        [("USh 50,000", 50000.0), ("1.2.3", 1.23), ("12.50", 12.5), ("abc", 0.0), ("", 0.0)],
    )
    def test_parse_currency_input(self, raw, value):
        assert parse_currency_input(raw) == value
