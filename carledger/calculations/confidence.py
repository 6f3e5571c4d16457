"""
Confidence Classification

Assigns a reliability tier to a measured consumption segment. The tier
starts at HIGH and every rule can only demote it.
"""

from typing import List, Optional, Tuple

from ..models import Confidence, ConfidenceReason, TankLevelSource, TankReading
from .constants import DEFAULT_THRESHOLDS, ConsumptionThresholds


def consumption_per_100km(fuel_consumed: float, distance_km: float) -> Optional[float]:
    """
    Consumption rate per 100 km in the tank's native unit.

    Examples:
        >>> consumption_per_100km(45.0, 600.0)
        7.5
        >>> consumption_per_100km(45.0, 0) is None
        True
    """
    if distance_km is None or distance_km <= 0:
        return None
    return (fuel_consumed / distance_km) * 100


def is_consumption_realistic(
    rate_per_100km: float,
    thresholds: ConsumptionThresholds = DEFAULT_THRESHOLDS
) -> bool:
    """Whether a per-100 km rate falls inside the realistic band (inclusive)."""
    return (
        thresholds.min_realistic_consumption
        <= rate_per_100km
        <= thresholds.max_realistic_consumption
    )


def determine_confidence(
    start: TankReading,
    end: TankReading,
    distance_km: float,
    fuel_consumed: float,
    thresholds: ConsumptionThresholds = DEFAULT_THRESHOLDS
) -> Tuple[Confidence, List[ConfidenceReason]]:
    """
    Classify how far a segment's consumption can be trusted.

    Rules (reasons accumulate, tier only goes down):
    - both anchors from full-tank flags: "full-to-full"
    - both anchors known, at least one from the gauge: "tank-percentage", medium
    - either anchor not a refuel: "mixed-sources", medium
    - distance under the confidence threshold: "short-distance", medium
    - rate outside the realistic band: "consumption-outlier", low

    Args:
        start: First anchor reading
        end: Last anchor reading
        distance_km: Odometer span between the anchors
        fuel_consumed: Conservation result for the span
        thresholds: Threshold bundle for this run

    Returns:
        (confidence, reasons) tuple
    """
    reasons: List[ConfidenceReason] = []
    confidence = Confidence.HIGH

    both_exact = start.source == TankLevelSource.EXACT and end.source == TankLevelSource.EXACT

    if both_exact:
        reasons.append(ConfidenceReason.FULL_TO_FULL)
    elif start.is_known and end.is_known:
        reasons.append(ConfidenceReason.TANK_PERCENTAGE)
        confidence = confidence.demote(Confidence.MEDIUM)

    if not start.is_refuel or not end.is_refuel:
        reasons.append(ConfidenceReason.MIXED_SOURCES)
        confidence = confidence.demote(Confidence.MEDIUM)

    if distance_km < thresholds.min_confidence_distance_km:
        reasons.append(ConfidenceReason.SHORT_DISTANCE)
        confidence = confidence.demote(Confidence.MEDIUM)

    rate = consumption_per_100km(fuel_consumed, distance_km)
    if rate is not None and not is_consumption_realistic(rate, thresholds):
        reasons.append(ConfidenceReason.CONSUMPTION_OUTLIER)
        confidence = confidence.demote(Confidence.LOW)

    return confidence, reasons
