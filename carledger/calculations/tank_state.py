"""
Tank State Calculations

Handles the first two stages of consumption tracking:
- Grouping telemetry by vehicle and tank
- Deriving an absolute tank level for each point
"""

from typing import Dict, List, Optional, Sequence, Tuple

from ..models import TankLevelSource, TankReading, TankSlot, TelemetryPoint
from .constants import MAX_TANK_FRACTION, MIN_TANK_FRACTION

GroupKey = Tuple[str, TankSlot]


def group_points_by_vehicle_tank(
    points: Sequence[TelemetryPoint]
) -> Dict[GroupKey, List[TelemetryPoint]]:
    """
    Partition telemetry into one odometer-ordered list per (car, tank).

    Groups appear in the order their first point appears in ``points``.
    Sorting is stable, so points sharing an odometer keep their input order.

    Args:
        points: Telemetry points for any number of vehicles

    Returns:
        Dict keyed by (car_id, TankSlot)
    """
    grouped: Dict[GroupKey, List[TelemetryPoint]] = {}

    for point in points:
        key = (point.car_id, point.tank_slot)
        grouped.setdefault(key, []).append(point)

    for group in grouped.values():
        group.sort(key=lambda p: p.odometer_km)

    return grouped


def estimate_tank_level(
    point: TelemetryPoint,
    tank_capacity: float
) -> Tuple[Optional[float], TankLevelSource]:
    """
    Derive the tank level at a single point.

    A full-tank flag wins over a gauge reading on the same point.

    Args:
        point: Telemetry point
        tank_capacity: Capacity of the point's tank (L, kWh or kg)

    Returns:
        (level, source) tuple; level is None when the source is UNKNOWN

    Examples:
        >>> estimate_tank_level(TelemetryPoint('car-1', 1000.0, is_full_tank=True), 60.0)
        (60.0, <TankLevelSource.EXACT: 'exact'>)
        >>> estimate_tank_level(TelemetryPoint('car-1', 1000.0, fuel_in_tank=0.25), 60.0)
        (15.0, <TankLevelSource.APPROXIMATE: 'approximate'>)
    """
    if point.is_full_tank is True:
        return tank_capacity, TankLevelSource.EXACT

    fraction = point.fuel_in_tank
    if fraction is not None and MIN_TANK_FRACTION <= fraction <= MAX_TANK_FRACTION:
        return fraction * tank_capacity, TankLevelSource.APPROXIMATE

    return None, TankLevelSource.UNKNOWN


def build_tank_readings(
    points: Sequence[TelemetryPoint],
    tank_capacity: float
) -> List[TankReading]:
    """Attach a derived tank level to every point, preserving order."""
    readings = []
    for point in points:
        level, source = estimate_tank_level(point, tank_capacity)
        readings.append(TankReading(point=point, level=level, source=source))
    return readings


def find_first_known_level(readings: Sequence[TankReading]) -> int:
    """Index of the first reading with a known level, or -1."""
    for index, reading in enumerate(readings):
        if reading.is_known:
            return index
    return -1


def find_last_known_level(readings: Sequence[TankReading]) -> int:
    """Index of the last reading with a known level, or -1."""
    for index in range(len(readings) - 1, -1, -1):
        if readings[index].is_known:
            return index
    return -1
