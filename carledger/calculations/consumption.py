"""
Consumption calculation entry point.

Pipeline: group by vehicle+tank -> measure each group -> aggregate by
fuel type. Pure and deterministic; inputs are never modified.
"""

import dataclasses
import logging
from typing import List, Optional, Sequence

from ..models import ConsumptionResult, TankConfig, TelemetryPoint, VehicleTankResult
from .aggregation import build_consumption_result
from .constants import DEFAULT_THRESHOLDS, ConsumptionThresholds
from .segments import calculate_segment_consumption
from .tank_state import group_points_by_vehicle_tank

logger = logging.getLogger(__name__)


def resolve_thresholds(
    min_distance_km: Optional[float] = None,
    thresholds: Optional[ConsumptionThresholds] = None
) -> ConsumptionThresholds:
    """Apply a minimum-distance override on top of a threshold bundle."""
    base = thresholds or DEFAULT_THRESHOLDS
    if min_distance_km is None:
        return base
    return dataclasses.replace(base, min_distance_km=min_distance_km)


def calculate_vehicle_tank_results(
    points: Sequence[TelemetryPoint],
    car_configs: Sequence[TankConfig],
    thresholds: ConsumptionThresholds = DEFAULT_THRESHOLDS
) -> List[VehicleTankResult]:
    """
    Measure consumption for every vehicle+tank with a usable configuration.

    Groups without a config, with an invalid tank, or without enough data
    are skipped.
    """
    configs = {config.car_id: config for config in car_configs}
    results = []

    for (car_id, tank), group in group_points_by_vehicle_tank(points).items():
        config = configs.get(car_id)
        if config is None:
            logger.debug(f"No tank config for car {car_id}, skipping {len(group)} point(s)")
            continue

        if not config.is_usable(tank):
            logger.debug(f"Car {car_id} {tank.value} tank has no capacity or fuel type, skipping")
            continue

        segment = calculate_segment_consumption(group, config.capacity_for(tank), thresholds)
        if segment is None:
            logger.debug(f"Not enough data for car {car_id} {tank.value} tank")
            continue

        results.append(VehicleTankResult(
            car_id=car_id,
            tank=tank,
            fuel_type=config.fuel_type_for(tank),
            segment=segment,
        ))

    return results


def calculate_consumption(
    points: Sequence[TelemetryPoint],
    car_configs: Sequence[TankConfig],
    min_distance_km: Optional[float] = None,
    thresholds: Optional[ConsumptionThresholds] = None
) -> ConsumptionResult:
    """
    Calculate fuel/energy consumption per fuel type.

    Args:
        points: Telemetry points with known odometer readings
        car_configs: One tank configuration per vehicle
        min_distance_km: Override for the minimum segment distance (default 10 km)
        thresholds: Full threshold bundle; min_distance_km wins over its value

    Returns:
        ConsumptionResult; empty when either input is empty

    Examples:
        >>> calculate_consumption([], [])
        ConsumptionResult(by_fuel_type=(), total_distance_km=0.0, total_vehicles_count=0)
    """
    if not points or not car_configs:
        return ConsumptionResult.empty()

    run_thresholds = resolve_thresholds(min_distance_km, thresholds)
    results = calculate_vehicle_tank_results(points, car_configs, run_thresholds)
    return build_consumption_result(results)
