"""
Consumption routes for CarLedger.

Computes consumption reports over rows supplied by the caller and exposes
the fuel type unit helpers.
"""

import logging
from flask import Blueprint, request, jsonify

from ..calculations import is_electric_fuel_type, is_hydrogen_fuel_type
from ..exceptions import ReportRequestError, TelemetryParsingError
from ..extensions import cache, limiter, RateLimits
from ..services import build_consumption_report, describe_fuel_type_units, error_code_for
from ..utils.error_codes import ErrorCode

logger = logging.getLogger(__name__)

consumption_bp = Blueprint('consumption', __name__)


def error_response(message, code: ErrorCode, details=None, status=400):
    body = {'error': message, 'error_code': code.value}
    if details:
        body['details'] = details
    return jsonify(body), status


def validate_report_request(data):
    """
    Validate a consumption report request body.

    Returns (is_valid, errors) tuple.
    """
    errors = []

    for field in ('data_points', 'car_configs'):
        if field not in data:
            errors.append(f'{field} is required')
        elif not isinstance(data[field], list):
            errors.append(f'{field} must be a list')
        elif not all(isinstance(row, dict) for row in data[field]):
            errors.append(f'{field} must contain objects')

    min_distance = data.get('min_distance_km')
    if min_distance is not None:
        if isinstance(min_distance, bool) or not isinstance(min_distance, (int, float)):
            errors.append('min_distance_km must be a number')
        elif min_distance < 0:
            errors.append('min_distance_km must be >= 0')

    for field in ('volume_unit', 'consumption_unit'):
        value = data.get(field)
        if value is not None and not isinstance(value, str):
            errors.append(f'{field} must be a string')

    return len(errors) == 0, errors


@consumption_bp.route('/consumption/calculate', methods=['POST'])
@limiter.limit(RateLimits.EXPENSIVE)
def calculate_consumption_report():
    """
    Calculate consumption per fuel type.

    Request body:
        data_points: Telemetry rows (odometer, refuel and gauge data)
        car_configs: Tank configuration rows, one per car
        min_distance_km: Optional minimum segment distance (default 10)
        volume_unit: Optional display volume unit (default 'l')
        consumption_unit: Optional display consumption unit (default 'l100km')
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return error_response('No data provided', ErrorCode.E303_JSON_DECODE_ERROR)

    is_valid, errors = validate_report_request(data)
    if not is_valid:
        return error_response('Validation failed', ErrorCode.E003_INVALID_DATA_TYPE, errors)

    try:
        report = build_consumption_report(
            data['data_points'],
            data['car_configs'],
            min_distance_km=data.get('min_distance_km'),
            volume_unit=data.get('volume_unit'),
            consumption_unit=data.get('consumption_unit'),
            request_id=request.headers.get('X-Request-ID'),
        )
    except (TelemetryParsingError, ReportRequestError) as e:
        code = error_code_for(e)
        status = 413 if code == ErrorCode.E006_PAYLOAD_TOO_LARGE else 400
        return error_response(e.message, code, e.details, status=status)

    return jsonify(report)


@consumption_bp.route('/consumption/fuel-types/<fuel_type>/units', methods=['GET'])
@limiter.limit(RateLimits.READ_HEAVY)
@cache.cached(query_string=True)
def get_fuel_type_units(fuel_type):
    """Display unit labels for a fuel type given the user's preferred units."""
    fuel_type = fuel_type.lower()
    units = describe_fuel_type_units(
        fuel_type,
        request.args.get('volume_unit'),
        request.args.get('consumption_unit'),
    )
    return jsonify({
        'fuel_type': fuel_type,
        'is_electric': is_electric_fuel_type(fuel_type),
        'is_hydrogen': is_hydrogen_fuel_type(fuel_type),
        **units,
    })
