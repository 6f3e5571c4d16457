"""
Aggregation of per-vehicle results into per-fuel-type summaries.
"""

from typing import Dict, List, Sequence

from ..models import (
    Confidence,
    ConfidenceReason,
    ConsumptionResult,
    ExcludedSegment,
    FuelTypeConsumption,
    VehicleTankResult,
)
from .confidence import consumption_per_100km


class _FuelTypeTotals:
    """Running totals for one fuel type."""

    def __init__(self):
        self.fuel_consumed = 0.0
        self.distance_km = 0.0
        self.vehicles = set()
        self.refuels_count = 0
        self.data_points_count = 0
        self.usable_segments_count = 0
        self.confidence = Confidence.HIGH
        self.reasons: Dict[ConfidenceReason, None] = {}
        self.excluded: List[ExcludedSegment] = []

    def add(self, result: VehicleTankResult) -> None:
        segment = result.segment
        self.fuel_consumed += segment.fuel_consumed
        self.distance_km += segment.distance_km
        self.vehicles.add(result.car_id)
        self.refuels_count += segment.refuels_count
        self.data_points_count += segment.data_points_count
        self.confidence = self.confidence.demote(segment.confidence)
        self.excluded.extend(segment.excluded)

        if segment.is_usable:
            self.usable_segments_count += 1

        for reason in segment.confidence_reasons:
            self.reasons.setdefault(reason, None)

    def summarize(self, fuel_type: str) -> FuelTypeConsumption:
        return FuelTypeConsumption(
            fuel_type=fuel_type,
            fuel_consumed=self.fuel_consumed,
            distance_km=self.distance_km,
            consumption_per_100km=consumption_per_100km(self.fuel_consumed, self.distance_km),
            confidence=self.confidence,
            confidence_reasons=tuple(self.reasons),
            vehicles_count=len(self.vehicles),
            refuels_count=self.refuels_count,
            data_points_count=self.data_points_count,
            usable_segments_count=self.usable_segments_count,
            excluded_segments=tuple(self.excluded),
        )


def aggregate_by_fuel_type(results: Sequence[VehicleTankResult]) -> List[FuelTypeConsumption]:
    """
    Merge vehicle+tank results into one summary per fuel type.

    Fuel types are listed in the order they are first seen. The overall
    confidence of a fuel type is the worst tier among its segments and
    reasons are the union of all segment reasons.

    Examples:
        Two gasoline cars measuring 30 L / 300 km and 20 L / 200 km give
        50 L / 500 km, 10.0 L/100km, 2 vehicles.
    """
    totals: Dict[str, _FuelTypeTotals] = {}

    for result in results:
        totals.setdefault(result.fuel_type, _FuelTypeTotals()).add(result)

    return [agg.summarize(fuel_type) for fuel_type, agg in totals.items()]


def build_consumption_result(results: Sequence[VehicleTankResult]) -> ConsumptionResult:
    """Aggregate results and compute grand totals across fuel types."""
    by_fuel_type = aggregate_by_fuel_type(results)

    return ConsumptionResult(
        by_fuel_type=tuple(by_fuel_type),
        total_distance_km=sum(entry.distance_km for entry in by_fuel_type),
        total_vehicles_count=len({result.car_id for result in results}),
    )
