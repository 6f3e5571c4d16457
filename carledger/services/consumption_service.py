"""
Consumption Report Service

Turns raw rows from the reporting data-access layer into a consumption
report: parse, cap the input size, run the calculator, attach unit labels.
Each report emits one wide event.
"""

import logging
from typing import Iterable, List, Optional

from ..calculations import (
    calculate_consumption,
    get_consumption_unit_label,
    get_fuel_volume_unit_label,
)
from ..config import Config
from ..exceptions import ReportRequestError, TelemetryParsingError
from ..models import Confidence, ConsumptionResult
from ..utils.error_codes import ErrorCode
from ..utils.row_parser import RowParser
from ..utils.wide_events import WideEvent, track_operation

logger = logging.getLogger(__name__)


def describe_fuel_type_units(
    fuel_type: str,
    volume_unit: Optional[str] = None,
    consumption_unit: Optional[str] = None
) -> dict:
    """Unit labels to display next to a fuel type's figures."""
    volume_unit = volume_unit or Config.DEFAULT_VOLUME_UNIT
    consumption_unit = consumption_unit or Config.DEFAULT_CONSUMPTION_UNIT
    return {
        'volume_unit': get_fuel_volume_unit_label(fuel_type, volume_unit),
        'consumption_unit': get_consumption_unit_label(fuel_type, consumption_unit),
    }


def consumption_result_to_report(
    result: ConsumptionResult,
    volume_unit: Optional[str] = None,
    consumption_unit: Optional[str] = None
) -> dict:
    """Serialize a result, labelling every fuel type with its display units."""
    report = result.to_dict()
    for entry in report['by_fuel_type']:
        entry.update(describe_fuel_type_units(entry['fuel_type'], volume_unit, consumption_unit))
    return report


def error_code_for(error: Exception) -> ErrorCode:
    """Map a boundary exception to its structured error code."""
    if isinstance(error, TelemetryParsingError):
        if error.field == 'when_done':
            return ErrorCode.E301_INVALID_TIMESTAMP
        return ErrorCode.E300_ROW_PARSE_FAILED
    if isinstance(error, ReportRequestError) and error.limit is not None:
        return ErrorCode.E006_PAYLOAD_TOO_LARGE
    if isinstance(error, ReportRequestError):
        return ErrorCode.E004_OUT_OF_RANGE
    return ErrorCode.E500_INTERNAL_SERVER_ERROR


def _record_outcome(event: WideEvent, result: ConsumptionResult) -> None:
    excluded = sum(len(entry.excluded_segments) for entry in result.by_fuel_type)
    low_confidence = [
        entry.fuel_type for entry in result.by_fuel_type if entry.confidence == Confidence.LOW
    ]
    event.add_business_metric("fuel_types", [entry.fuel_type for entry in result.by_fuel_type])
    event.add_business_metric("total_distance_km", round(result.total_distance_km, 1))
    event.add_business_metric("vehicles", result.total_vehicles_count)
    event.add_business_metric("excluded_segments", excluded)
    event.add_business_metric("low_confidence_fuel_types", low_confidence)


def build_consumption_report(
    data_point_rows: Iterable[dict],
    car_config_rows: Iterable[dict],
    min_distance_km: Optional[float] = None,
    volume_unit: Optional[str] = None,
    consumption_unit: Optional[str] = None,
    request_id: Optional[str] = None
) -> dict:
    """
    Build a consumption report from data-access rows.

    Args:
        data_point_rows: Telemetry rows (see RowParser)
        car_config_rows: Tank configuration rows, one per car
        min_distance_km: Optional minimum segment distance override
        volume_unit: User's volume unit ('l', 'gal-us', 'gal-uk')
        consumption_unit: User's consumption unit ('l100km', 'mpg-us', 'mpg-uk')
        request_id: Request id to tie the wide event to the HTTP request

    Returns:
        JSON-ready dict with by_fuel_type and grand totals

    Raises:
        ReportRequestError: Too many rows or invalid minimum distance
        TelemetryParsingError: A row could not be parsed
    """
    data_point_rows: List[dict] = list(data_point_rows)
    car_config_rows: List[dict] = list(car_config_rows)

    with track_operation(
        "consumption_report",
        request_id=request_id,
        error_code_for=error_code_for,
        sample_success=True,
        data_point_rows=len(data_point_rows),
        car_config_rows=len(car_config_rows),
        min_distance_km=min_distance_km,
    ) as event:
        if len(data_point_rows) > Config.MAX_DATA_POINTS:
            raise ReportRequestError(
                "Too many data points for a single report",
                field='data_points',
                limit=Config.MAX_DATA_POINTS,
            )

        if min_distance_km is not None and min_distance_km < 0:
            raise ReportRequestError("min_distance_km cannot be negative", field='min_distance_km')

        with event.timer("parse"):
            points = RowParser.parse_telemetry_rows(data_point_rows)
            configs = RowParser.parse_tank_config_rows(car_config_rows)
        event.add_technical_metric("parsed_points", len(points))

        with event.timer("calculate"):
            result = calculate_consumption(points, configs, min_distance_km=min_distance_km)

        _record_outcome(event, result)

    return consumption_result_to_report(result, volume_unit, consumption_unit)
