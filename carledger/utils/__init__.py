"""Utility modules for CarLedger."""

from .error_codes import ErrorCategory, ErrorCode, StructuredError, get_error_metadata
from .row_parser import RowParser
from .wide_events import WideEvent, track_operation

__all__ = [
    'ErrorCategory',
    'ErrorCode',
    'StructuredError',
    'get_error_metadata',
    'RowParser',
    'WideEvent',
    'track_operation',
]
