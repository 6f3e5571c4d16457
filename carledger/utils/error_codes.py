"""
Error Code Taxonomy for CarLedger

Structured error codes for the parsing and HTTP boundaries around the
consumption calculator.

Error Code Format:
- E001-E099: Validation errors (bad input data)
- E300-E399: Parsing errors (data-access rows, JSON)
- E500-E599: System errors
"""

from enum import Enum
from typing import Optional


class ErrorCategory(str, Enum):
    """High-level error categories for grouping and alerting."""

    VALIDATION = "validation"
    PARSING = "parsing"
    SYSTEM = "system"


class ErrorCode(str, Enum):
    """Structured error codes with consistent format."""

    # Validation Errors (E001-E099)
    E003_INVALID_DATA_TYPE = "E003"  # Field has wrong data type
    E004_OUT_OF_RANGE = "E004"  # Value outside acceptable range
    E006_PAYLOAD_TOO_LARGE = "E006"  # More data points than the calculator accepts

    # Parsing Errors (E300-E399)
    E300_ROW_PARSE_FAILED = "E300"  # Failed to parse a data-access row
    E301_INVALID_TIMESTAMP = "E301"  # Invalid timestamp format
    E303_JSON_DECODE_ERROR = "E303"  # JSON decoding failed

    # System Errors (E500-E599)
    E500_INTERNAL_SERVER_ERROR = "E500"  # Unhandled internal error


# Error metadata: maps error codes to categories and descriptions
ERROR_METADATA = {
    ErrorCode.E003_INVALID_DATA_TYPE: {
        "category": ErrorCategory.VALIDATION,
        "description": "Field has wrong data type",
        "severity": "warning",
        "alert": False,
    },
    ErrorCode.E004_OUT_OF_RANGE: {
        "category": ErrorCategory.VALIDATION,
        "description": "Value outside acceptable range",
        "severity": "warning",
        "alert": False,
    },
    ErrorCode.E006_PAYLOAD_TOO_LARGE: {
        "category": ErrorCategory.VALIDATION,
        "description": "Too many data points in a single report request",
        "severity": "warning",
        "alert": False,
    },
    ErrorCode.E300_ROW_PARSE_FAILED: {
        "category": ErrorCategory.PARSING,
        "description": "Failed to parse data-access row",
        "severity": "warning",
        "alert": False,
    },
    ErrorCode.E301_INVALID_TIMESTAMP: {
        "category": ErrorCategory.PARSING,
        "description": "Invalid timestamp format",
        "severity": "warning",
        "alert": False,
    },
    ErrorCode.E303_JSON_DECODE_ERROR: {
        "category": ErrorCategory.PARSING,
        "description": "JSON decoding failed",
        "severity": "warning",
        "alert": False,
    },
    ErrorCode.E500_INTERNAL_SERVER_ERROR: {
        "category": ErrorCategory.SYSTEM,
        "description": "Unhandled internal error",
        "severity": "critical",
        "alert": True,
    },
}


def get_error_metadata(error_code: ErrorCode) -> dict:
    """Get metadata for an error code."""
    return ERROR_METADATA.get(
        error_code,
        {
            "category": ErrorCategory.SYSTEM,
            "description": "Unknown error",
            "severity": "error",
            "alert": True,
        },
    )


class StructuredError:
    """Structured error with code, category, and metadata."""

    def __init__(self, code: ErrorCode, message: str, exception: Optional[Exception] = None, **context):
        """
        Create a structured error.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            exception: Original exception (if applicable)
            **context: Additional context fields (car_id, record_id, etc.)
        """
        self.code = code
        self.message = message
        self.exception = exception
        self.context = context
        self.metadata = get_error_metadata(code)

    def to_dict(self) -> dict:
        """Convert to dictionary for logging."""
        error_dict = {
            "code": self.code.value,
            "category": self.metadata["category"].value,
            "message": self.message,
            "severity": self.metadata["severity"],
            "alert": self.metadata["alert"],
        }

        if self.exception:
            error_dict["exception_type"] = type(self.exception).__name__
            error_dict["exception_message"] = str(self.exception)

        if self.context:
            error_dict["context"] = self.context

        return error_dict

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"
