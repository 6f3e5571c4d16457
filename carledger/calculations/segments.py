"""
Segment Consumption Calculations

Measures what one vehicle+tank burned between the first and last points
with a known tank level:

    consumed = level at start + refuels in between - level at end

Falls back to the refuel-spacing approximation when no such pair exists.
"""

import logging
from typing import Optional, Sequence

from ..models import (
    Confidence,
    ConfidenceReason,
    ExcludedSegment,
    SegmentResult,
    TelemetryPoint,
)
from .approximation import calculate_approximation
from .confidence import determine_confidence
from .constants import DEFAULT_THRESHOLDS, ConsumptionThresholds
from .tank_state import build_tank_readings, find_first_known_level, find_last_known_level

logger = logging.getLogger(__name__)


def calculate_segment_consumption(
    points: Sequence[TelemetryPoint],
    tank_capacity: float,
    thresholds: ConsumptionThresholds = DEFAULT_THRESHOLDS
) -> Optional[SegmentResult]:
    """
    Calculate consumption for one vehicle+tank.

    Args:
        points: Points for a single vehicle+tank, sorted by odometer
        tank_capacity: Tank capacity (L, kWh or kg), must be positive
        thresholds: Threshold bundle for this run

    Returns:
        SegmentResult, or None when neither the anchored calculation nor
        the approximation has enough data

    Examples:
        Full tank (60 L) at 1000 km, 40 L refuel, gauge reads 55 L at
        1600 km: 60 + 40 - 55 = 45 L over 600 km.
    """
    if len(points) < 2:
        return None

    readings = build_tank_readings(points, tank_capacity)
    start_idx = find_first_known_level(readings)
    end_idx = find_last_known_level(readings)

    if start_idx == -1 or end_idx == -1 or start_idx >= end_idx:
        return calculate_approximation(points, thresholds.min_distance_km)

    start = readings[start_idx]
    end = readings[end_idx]
    distance = end.odometer_km - start.odometer_km

    if distance < thresholds.min_distance_km:
        return SegmentResult(
            fuel_consumed=0.0,
            distance_km=0.0,
            confidence=Confidence.LOW,
            confidence_reasons=(ConfidenceReason.DISTANCE_TOO_SHORT,),
            refuels_count=sum(1 for p in points if p.is_refuel),
            data_points_count=len(points),
            excluded=(ExcludedSegment(ConfidenceReason.DISTANCE_TOO_SHORT, distance),),
        )

    # Start anchor's own refuel is already inside its tank level
    refuels_between = 0.0
    refuels_count = 0
    for reading in readings[start_idx + 1:end_idx + 1]:
        if reading.point.counts_as_refuel:
            refuels_between += reading.point.refuel_volume
            refuels_count += 1

    fuel_consumed = start.level + refuels_between - end.level

    confidence, reasons = determine_confidence(
        start, end, distance, fuel_consumed, thresholds
    )

    if fuel_consumed < 0:
        logger.debug(
            f"Negative consumption {fuel_consumed:.2f} over {distance:.1f} km "
            f"(car {start.point.car_id}); likely a missed refuel or bad gauge reading"
        )
        return SegmentResult(
            fuel_consumed=0.0,
            distance_km=0.0,
            confidence=Confidence.LOW,
            confidence_reasons=(ConfidenceReason.NEGATIVE_CONSUMPTION, *reasons),
            refuels_count=refuels_count,
            data_points_count=len(points),
            excluded=(ExcludedSegment(ConfidenceReason.NEGATIVE_CONSUMPTION, distance),),
        )

    return SegmentResult(
        fuel_consumed=fuel_consumed,
        distance_km=distance,
        confidence=confidence,
        confidence_reasons=tuple(reasons),
        refuels_count=refuels_count,
        data_points_count=len(points),
    )
