"""
CarLedger Calculation Module

Fuel and energy consumption reconstruction from sparse odometer, refuel
and tank-gauge records.

Usage:
    from carledger.calculations import calculate_consumption
    from carledger.calculations.constants import DEFAULT_MIN_DISTANCE_KM
"""

# Entry point
from .consumption import (
    calculate_consumption,
    calculate_vehicle_tank_results,
    resolve_thresholds,
)

# Pipeline stages
from .tank_state import (
    build_tank_readings,
    estimate_tank_level,
    find_first_known_level,
    find_last_known_level,
    group_points_by_vehicle_tank,
)
from .segments import calculate_segment_consumption
from .approximation import calculate_approximation
from .confidence import (
    consumption_per_100km,
    determine_confidence,
    is_consumption_realistic,
)
from .aggregation import aggregate_by_fuel_type, build_consumption_result

# Fuel type helpers
from .fuel_types import (
    get_consumption_unit_label,
    get_fuel_volume_unit_label,
    is_electric_fuel_type,
    is_hydrogen_fuel_type,
)

# Constants (re-export for convenience)
from .constants import (
    DEFAULT_MIN_DISTANCE_KM,
    DEFAULT_THRESHOLDS,
    MAX_REALISTIC_CONSUMPTION,
    MIN_CONFIDENCE_DISTANCE_KM,
    MIN_REALISTIC_CONSUMPTION,
    ConsumptionThresholds,
)

__all__ = [
    # Entry point
    "calculate_consumption",
    "calculate_vehicle_tank_results",
    "resolve_thresholds",
    # Tank state
    "group_points_by_vehicle_tank",
    "estimate_tank_level",
    "build_tank_readings",
    "find_first_known_level",
    "find_last_known_level",
    # Segments
    "calculate_segment_consumption",
    "calculate_approximation",
    # Confidence
    "determine_confidence",
    "consumption_per_100km",
    "is_consumption_realistic",
    # Aggregation
    "aggregate_by_fuel_type",
    "build_consumption_result",
    # Fuel types
    "is_electric_fuel_type",
    "is_hydrogen_fuel_type",
    "get_fuel_volume_unit_label",
    "get_consumption_unit_label",
    # Constants
    "DEFAULT_MIN_DISTANCE_KM",
    "MIN_CONFIDENCE_DISTANCE_KM",
    "MIN_REALISTIC_CONSUMPTION",
    "MAX_REALISTIC_CONSUMPTION",
    "DEFAULT_THRESHOLDS",
    "ConsumptionThresholds",
]
