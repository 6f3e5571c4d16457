"""
Tests for wide events (canonical log lines) utility.

Tests the structured logging patterns including:
- WideEvent creation and context management
- Timer and performance breakdown
- Tail sampling logic
"""

import time
from unittest.mock import patch

import pytest

from carledger.exceptions import TelemetryParsingError
from carledger.utils.error_codes import ErrorCode, StructuredError
from carledger.utils.wide_events import SERVICE_NAME, WideEvent, track_operation


class TestWideEvent:
    """Tests for WideEvent class."""

    def test_creates_event_with_defaults(self):
        """Creates event with default values."""
        event = WideEvent(operation="consumption_report")

        assert event.context["operation"] == "consumption_report"
        assert event.context["service"] == SERVICE_NAME
        assert "timestamp" in event.context
        assert "start_time" in event.context
        assert "request_id" in event.context

    def test_uses_given_request_id(self):
        event = WideEvent(operation="consumption_report", request_id="req-1")

        assert event.context["request_id"] == "req-1"

    def test_add_context(self):
        event = WideEvent(operation="test")
        event.add_context(data_point_rows=420, car_config_rows=3)

        assert event.context["data_point_rows"] == 420
        assert event.context["car_config_rows"] == 3

    def test_metrics_are_namespaced(self):
        event = WideEvent(operation="test")
        event.add_business_metric("fuel_types", ["gasoline"])
        event.add_technical_metric("parsed_points", 12)

        assert event.context["business_metrics"]["fuel_types"] == ["gasoline"]
        assert event.context["technical_metrics"]["parsed_points"] == 12

    def test_add_error_regular_exception(self):
        """Adds error details for regular exception."""
        event = WideEvent(operation="test")
        event.add_error(ValueError("Something went wrong"), extra_info="test")

        assert event.context["error"]["type"] == "ValueError"
        assert event.context["error"]["message"] == "Something went wrong"
        assert event.context["error"]["details"]["extra_info"] == "test"
        assert event.context["success"] is False

    def test_add_error_structured_error(self):
        """Adds error details for StructuredError."""
        event = WideEvent(operation="test")
        event.add_error(StructuredError(ErrorCode.E300_ROW_PARSE_FAILED, "Bad row", record_id="rec-1"))

        assert event.context["error"]["code"] == "E300"
        assert event.context["error"]["category"] == "parsing"
        assert event.context["error"]["context"] == {"record_id": "rec-1"}
        assert event.context["success"] is False

    def test_mark_failure(self):
        event = WideEvent(operation="test")
        event.mark_failure("Too many rows")

        assert event.context["success"] is False
        assert event.context["failure_reason"] == "Too many rows"

    def test_timer_context_manager(self):
        """Timer measures stage duration."""
        event = WideEvent(operation="test")

        with event.timer("calculate"):
            time.sleep(0.01)

        assert event.context["performance_breakdown"]["calculate_ms"] >= 10

    def test_timer_records_on_error(self):
        event = WideEvent(operation="test")

        with pytest.raises(RuntimeError):
            with event.timer("parse"):
                raise RuntimeError("boom")

        assert "parse_ms" in event.context["performance_breakdown"]

    def test_set_duration(self):
        event = WideEvent(operation="test")
        event.set_duration()

        assert "duration_ms" in event.context
        assert "start_time" not in event.context


class TestShouldEmit:
    """Tests for should_emit sampling logic."""

    def test_always_emits_errors(self):
        event = WideEvent(operation="test")
        event.context["success"] = False

        assert event.should_emit() is True

    def test_always_emits_slow_requests(self):
        event = WideEvent(operation="test")
        event.context["duration_ms"] = 2000
        event.mark_success()

        assert event.should_emit(slow_threshold_ms=1000) is True

    @patch("carledger.utils.wide_events.random.random", return_value=0.99)
    def test_always_emits_reports_with_excluded_segments(self, mock_random):
        event = WideEvent(operation="test")
        event.add_business_metric("excluded_segments", 2)
        event.mark_success()

        assert event.should_emit() is True

    @patch("carledger.utils.wide_events.random.random", return_value=0.99)
    def test_always_emits_low_confidence_reports(self, mock_random):
        event = WideEvent(operation="test")
        event.add_business_metric("excluded_segments", 0)
        event.add_business_metric("low_confidence_fuel_types", ["lpg"])
        event.mark_success()

        assert event.should_emit() is True

    @patch("carledger.utils.wide_events.random.random")
    def test_samples_normal_requests_at_configured_rate(self, mock_random):
        event = WideEvent(operation="test")
        event.add_business_metric("excluded_segments", 0)
        event.add_business_metric("low_confidence_fuel_types", [])
        event.mark_success()
        event.context["duration_ms"] = 10

        mock_random.return_value = 0.01
        assert event.should_emit(sample_rate=0.05) is True

        mock_random.return_value = 0.1
        assert event.should_emit(sample_rate=0.05) is False


class TestEmit:
    """Tests for emit method."""

    @patch("structlog.get_logger")
    def test_emits_event(self, mock_get_logger):
        mock_logger = mock_get_logger.return_value

        event = WideEvent(operation="consumption_report")
        event.mark_success()
        event.emit(force=True)

        mock_logger.info.assert_called_once()
        assert mock_logger.info.call_args[0][0] == "consumption_report_complete"

    @patch("structlog.get_logger")
    def test_emits_at_requested_level(self, mock_get_logger):
        mock_logger = mock_get_logger.return_value

        WideEvent(operation="test").emit(level="warning", force=True)

        mock_logger.warning.assert_called_once()

    @patch("carledger.utils.wide_events.random.random", return_value=0.99)
    @patch("structlog.get_logger")
    def test_sampled_out(self, mock_get_logger, mock_random):
        mock_logger = mock_get_logger.return_value

        event = WideEvent(operation="test")
        event.mark_success()
        event.emit()

        mock_logger.info.assert_not_called()


class TestTrackOperation:
    """Tests for track_operation context manager."""

    @patch("structlog.get_logger")
    def test_tracks_successful_operation(self, mock_get_logger):
        mock_logger = mock_get_logger.return_value

        with track_operation("consumption_report", data_point_rows=10) as event:
            event.add_business_metric("vehicles", 1)

        mock_logger.info.assert_called_once()
        assert event.context["success"] is True
        assert event.context["data_point_rows"] == 10

    @patch("structlog.get_logger")
    def test_tracks_failed_operation(self, mock_get_logger):
        mock_logger = mock_get_logger.return_value

        with pytest.raises(ValueError):
            with track_operation("consumption_report"):
                raise ValueError("Test error")

        mock_logger.error.assert_called_once()

    @patch("structlog.get_logger")
    def test_carledger_error_logged_as_warning(self, mock_get_logger):
        mock_logger = mock_get_logger.return_value

        with pytest.raises(TelemetryParsingError):
            with track_operation(
                "consumption_report",
                request_id="req-9",
                error_code_for=lambda e: ErrorCode.E300_ROW_PARSE_FAILED,
            ) as event:
                raise TelemetryParsingError("Bad number", field="odometer_km", record_id="rec-2")

        mock_logger.warning.assert_called_once()
        mock_logger.error.assert_not_called()
        assert event.context["request_id"] == "req-9"
        assert event.context["error"]["code"] == "E300"
        assert event.context["error"]["context"] == {"field": "odometer_km", "record_id": "rec-2"}

    @patch("structlog.get_logger")
    @patch("carledger.utils.wide_events.random.random", return_value=0.99)
    def test_sampled_success_can_be_dropped(self, mock_random, mock_get_logger):
        mock_logger = mock_get_logger.return_value

        with track_operation("consumption_report", sample_success=True) as event:
            event.add_business_metric("excluded_segments", 0)

        mock_logger.info.assert_not_called()
        assert event.context["success"] is True
