"""
Services module for CarLedger business logic.

Service functions wrap the pure calculator with parsing, limits and
logging, separate from the Flask route handlers.
"""

from .consumption_service import (
    build_consumption_report,
    consumption_result_to_report,
    describe_fuel_type_units,
    error_code_for,
)

__all__ = [
    'build_consumption_report',
    'consumption_result_to_report',
    'describe_fuel_type_units',
    'error_code_for',
]
