"""
Approximate consumption from refuel spacing.

Used only when a vehicle+tank has no pair of points with a known tank
level. The first refuel's volume was burned before the tracked window
started, so only the refuels after it count towards consumption.
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
from .constants import DEFAULT_MIN_DISTANCE_KM, MIN_APPROXIMATION_REFUELS

logger = logging.getLogger(__name__)


def calculate_approximation(
    points: Sequence[TelemetryPoint],
    min_distance_km: float = DEFAULT_MIN_DISTANCE_KM
) -> Optional[SegmentResult]:
    """
    Estimate consumption as the sum of every refuel except the first.

    Args:
        points: All points for one vehicle+tank
        min_distance_km: Shortest refuel-to-refuel span worth reporting

    Returns:
        LOW-confidence SegmentResult, or None with fewer than two refuels

    Examples:
        Refuels of 10, 15 and 20 L at 1000, 1500 and 2000 km give
        35 L over 1000 km.
    """
    refuels = sorted(
        (p for p in points if p.counts_as_refuel),
        key=lambda p: p.odometer_km,
    )

    if len(refuels) < MIN_APPROXIMATION_REFUELS:
        logger.debug(f"Approximation skipped: only {len(refuels)} usable refuel(s)")
        return None

    distance = refuels[-1].odometer_km - refuels[0].odometer_km

    if distance < min_distance_km:
        return SegmentResult(
            fuel_consumed=0.0,
            distance_km=0.0,
            confidence=Confidence.LOW,
            confidence_reasons=(
                ConfidenceReason.APPROXIMATION,
                ConfidenceReason.DISTANCE_TOO_SHORT,
            ),
            refuels_count=len(refuels),
            data_points_count=len(points),
            excluded=(ExcludedSegment(ConfidenceReason.DISTANCE_TOO_SHORT, distance),),
        )

    fuel_consumed = sum(p.refuel_volume for p in refuels[1:])

    return SegmentResult(
        fuel_consumed=fuel_consumed,
        distance_km=distance,
        confidence=Confidence.LOW,
        confidence_reasons=(ConfidenceReason.APPROXIMATION,),
        refuels_count=len(refuels),
        data_points_count=len(points),
    )
