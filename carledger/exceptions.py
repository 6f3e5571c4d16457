"""
Custom exceptions for CarLedger.

The consumption calculator itself never raises; these exceptions belong to
the boundaries around it (row parsing, HTTP payloads, configuration).
"""


class CarLedgerError(Exception):
    """Base exception for all CarLedger errors."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class TelemetryParsingError(CarLedgerError):
    """Failed to convert a raw data-access row into a telemetry point or tank config."""

    def __init__(self, message: str, field: str = None, value=None, record_id: str = None):
        details = {}
        if field:
            details['field'] = field
        if value is not None:
            details['value'] = str(value)
        if record_id:
            details['record_id'] = record_id
        super().__init__(message, details)
        self.field = field
        self.value = value
        self.record_id = record_id


class ReportRequestError(CarLedgerError):
    """Consumption report request is malformed or too large."""

    def __init__(self, message: str, field: str = None, limit: int = None):
        details = {}
        if field:
            details['field'] = field
        if limit is not None:
            details['limit'] = limit
        super().__init__(message, details)
        self.field = field
        self.limit = limit


class ConfigurationError(CarLedgerError):
    """Invalid or missing configuration."""

    def __init__(self, message: str, config_key: str = None):
        details = {}
        if config_key:
            details['config_key'] = config_key
        super().__init__(message, details)
        self.config_key = config_key
