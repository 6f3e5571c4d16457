"""Tests for custom CarLedger exceptions."""

import pytest

from carledger.config import Config
from carledger.exceptions import (
    CarLedgerError,
    ConfigurationError,
    ReportRequestError,
    TelemetryParsingError,
)
from carledger.utils.error_codes import (
    ErrorCategory,
    ErrorCode,
    StructuredError,
    get_error_metadata,
)


class TestCarLedgerError:
    """Tests for base CarLedgerError."""

    def test_basic_message(self):
        error = CarLedgerError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.details == {}

    def test_with_details(self):
        error = CarLedgerError("Error occurred", {"key": "value"})
        assert "Error occurred" in str(error)
        assert error.details == {"key": "value"}

    def test_is_exception(self):
        with pytest.raises(CarLedgerError):
            raise CarLedgerError("test")


class TestTelemetryParsingError:
    """Tests for TelemetryParsingError."""

    def test_basic_error(self):
        error = TelemetryParsingError("Invalid row")
        assert isinstance(error, CarLedgerError)
        assert error.field is None
        assert error.value is None
        assert error.details == {}

    def test_with_context(self):
        error = TelemetryParsingError("Bad number", field="odometer_km", value=12.5, record_id="rec-3")
        assert error.details == {"field": "odometer_km", "value": "12.5", "record_id": "rec-3"}
        assert error.value == 12.5


class TestReportRequestError:
    """Tests for ReportRequestError."""

    def test_limit(self):
        error = ReportRequestError("Too many rows", field="data_points", limit=50000)
        assert error.details == {"field": "data_points", "limit": 50000}

    def test_without_limit(self):
        error = ReportRequestError("Negative distance", field="min_distance_km")
        assert error.limit is None
        assert "limit" not in error.details


class TestConfigurationError:
    """Tests for ConfigurationError."""

    def test_config_key(self):
        error = ConfigurationError("Missing setting", config_key="RATE_LIMIT_STORAGE_URI")
        assert error.config_key == "RATE_LIMIT_STORAGE_URI"
        assert error.details["config_key"] == "RATE_LIMIT_STORAGE_URI"


class TestErrorCodes:
    """Tests for structured error codes."""

    def test_every_code_has_metadata(self):
        for code in ErrorCode:
            assert get_error_metadata(code)["description"] != "Unknown error"

    def test_structured_error_dict(self):
        cause = TelemetryParsingError("Bad number", field="odometer_km")
        error = StructuredError(ErrorCode.E300_ROW_PARSE_FAILED, "Bad number", exception=cause, field="odometer_km")

        data = error.to_dict()

        assert data["code"] == "E300"
        assert data["category"] == ErrorCategory.PARSING.value
        assert data["exception_type"] == "TelemetryParsingError"
        assert data["context"] == {"field": "odometer_km"}
        assert str(error) == "[E300] Bad number"

    def test_system_errors_alert(self):
        assert get_error_metadata(ErrorCode.E500_INTERNAL_SERVER_ERROR)["alert"] is True


class TestConfigValidation:
    """Tests for Config.validate."""

    def test_defaults_are_valid(self):
        Config.validate()

    def test_inverted_band(self, monkeypatch):
        monkeypatch.setattr(Config, 'MIN_REALISTIC_CONSUMPTION', 60.0)

        with pytest.raises(ConfigurationError) as exc_info:
            Config.validate()

        assert exc_info.value.config_key == 'MAX_REALISTIC_CONSUMPTION'

    def test_negative_distance(self, monkeypatch):
        monkeypatch.setattr(Config, 'MIN_DISTANCE_KM', -1.0)

        with pytest.raises(ConfigurationError) as exc_info:
            Config.validate()

        assert exc_info.value.config_key == 'MIN_DISTANCE_KM'

    def test_non_positive_row_cap(self, monkeypatch):
        monkeypatch.setattr(Config, 'MAX_DATA_POINTS', 0)

        with pytest.raises(ConfigurationError):
            Config.validate()
