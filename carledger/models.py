"""
Value types for the consumption calculator.

Everything here is immutable: inputs arrive fully built from the
data-access layer and results are never modified after they are produced.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional, Tuple


class RecordKind(str, Enum):
    """Kind of ledger record a telemetry point came from."""

    REFUEL = "refuel"
    EXPENSE = "expense"
    CHECKPOINT = "checkpoint"
    OTHER = "other"


class TankSlot(str, Enum):
    """Physical tank a refuel went into."""

    PRIMARY = "primary"
    SECONDARY = "secondary"


class TankLevelSource(str, Enum):
    """How a point's tank level was derived."""

    EXACT = "exact"  # Full-tank flag on a refuel
    APPROXIMATE = "approximate"  # Gauge fraction
    UNKNOWN = "unknown"


class Confidence(str, Enum):
    """Reliability tier attached to every consumption figure, best first."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return _CONFIDENCE_RANK[self]

    def demote(self, ceiling: "Confidence") -> "Confidence":
        """Return the worse of this tier and ``ceiling``."""
        return self if self.rank >= ceiling.rank else ceiling

    @classmethod
    def worst(cls, tiers: Iterable["Confidence"]) -> "Confidence":
        """Worst tier in ``tiers``; HIGH when there is nothing to demote it."""
        result = cls.HIGH
        for tier in tiers:
            result = result.demote(tier)
        return result


_CONFIDENCE_RANK = {
    Confidence.HIGH: 0,
    Confidence.MEDIUM: 1,
    Confidence.LOW: 2,
}


class ConfidenceReason(str, Enum):
    """Tags explaining why a result got its confidence tier."""

    FULL_TO_FULL = "full-to-full"
    TANK_PERCENTAGE = "tank-percentage"
    MIXED_SOURCES = "mixed-sources"
    SHORT_DISTANCE = "short-distance"
    CONSUMPTION_OUTLIER = "consumption-outlier"
    DISTANCE_TOO_SHORT = "distance-too-short"
    NEGATIVE_CONSUMPTION = "negative-consumption"
    APPROXIMATION = "approximation"


@dataclass(frozen=True)
class TelemetryPoint:
    """One odometer reading from the ledger (refuel, expense, checkpoint...)."""

    car_id: str
    odometer_km: float
    when_done: Optional[datetime] = None
    kind: RecordKind = RecordKind.OTHER
    fuel_in_tank: Optional[float] = None  # Gauge fraction 0-1
    refuel_volume: Optional[float] = None  # L, kWh or kg
    is_full_tank: Optional[bool] = None
    tank: Optional[TankSlot] = None
    record_id: Optional[str] = None

    @property
    def is_refuel(self) -> bool:
        return self.kind == RecordKind.REFUEL

    @property
    def tank_slot(self) -> TankSlot:
        """Tank this point belongs to; everything but a refuel reads the primary tank."""
        if self.is_refuel and self.tank is not None:
            return self.tank
        return TankSlot.PRIMARY

    @property
    def counts_as_refuel(self) -> bool:
        """Refuel with a positive fill volume."""
        return self.is_refuel and self.refuel_volume is not None and self.refuel_volume > 0


@dataclass(frozen=True)
class TankConfig:
    """Tank capacities and fuel types for one vehicle."""

    car_id: str
    main_capacity: Optional[float] = None
    main_fuel_type: Optional[str] = None
    addl_capacity: Optional[float] = None
    addl_fuel_type: Optional[str] = None

    def capacity_for(self, slot: TankSlot) -> Optional[float]:
        return self.main_capacity if slot == TankSlot.PRIMARY else self.addl_capacity

    def fuel_type_for(self, slot: TankSlot) -> Optional[str]:
        return self.main_fuel_type if slot == TankSlot.PRIMARY else self.addl_fuel_type

    def is_usable(self, slot: TankSlot) -> bool:
        """A tank takes part in calculation only with a positive capacity and a fuel type."""
        capacity = self.capacity_for(slot)
        return capacity is not None and capacity > 0 and bool(self.fuel_type_for(slot))


@dataclass(frozen=True)
class TankReading:
    """A telemetry point with its derived tank level."""

    point: TelemetryPoint
    level: Optional[float]
    source: TankLevelSource

    @property
    def is_known(self) -> bool:
        return self.source != TankLevelSource.UNKNOWN

    @property
    def odometer_km(self) -> float:
        return self.point.odometer_km

    @property
    def is_refuel(self) -> bool:
        return self.point.is_refuel


@dataclass(frozen=True)
class ExcludedSegment:
    """Data that existed but was discarded, with the reason."""

    reason: ConfidenceReason
    distance_km: float

    def to_dict(self) -> dict:
        return {
            'reason': self.reason.value,
            'distance_km': self.distance_km,
        }


@dataclass(frozen=True)
class SegmentResult:
    """Consumption measured for one vehicle+tank."""

    fuel_consumed: float
    distance_km: float
    confidence: Confidence
    confidence_reasons: Tuple[ConfidenceReason, ...] = ()
    refuels_count: int = 0
    data_points_count: int = 0
    excluded: Tuple[ExcludedSegment, ...] = ()

    @property
    def is_usable(self) -> bool:
        return self.distance_km > 0


@dataclass(frozen=True)
class VehicleTankResult:
    """A segment result tagged with where it came from."""

    car_id: str
    tank: TankSlot
    fuel_type: str
    segment: SegmentResult


@dataclass(frozen=True)
class FuelTypeConsumption:
    """Consumption summary for one fuel/energy type across vehicles."""

    fuel_type: str
    fuel_consumed: float  # L, kWh or kg
    distance_km: float
    consumption_per_100km: Optional[float]
    confidence: Confidence
    confidence_reasons: Tuple[ConfidenceReason, ...] = ()
    vehicles_count: int = 0
    refuels_count: int = 0
    data_points_count: int = 0
    usable_segments_count: int = 0
    excluded_segments: Tuple[ExcludedSegment, ...] = ()

    def to_dict(self) -> dict:
        return {
            'fuel_type': self.fuel_type,
            'fuel_consumed': self.fuel_consumed,
            'distance_km': self.distance_km,
            'consumption_per_100km': self.consumption_per_100km,
            'confidence': self.confidence.value,
            'confidence_reasons': [reason.value for reason in self.confidence_reasons],
            'vehicles_count': self.vehicles_count,
            'refuels_count': self.refuels_count,
            'data_points_count': self.data_points_count,
            'usable_segments_count': self.usable_segments_count,
            'excluded_segments': [segment.to_dict() for segment in self.excluded_segments],
        }


@dataclass(frozen=True)
class ConsumptionResult:
    """Per-fuel-type summaries plus grand totals."""

    by_fuel_type: Tuple[FuelTypeConsumption, ...] = field(default_factory=tuple)
    total_distance_km: float = 0.0
    total_vehicles_count: int = 0

    @classmethod
    def empty(cls) -> "ConsumptionResult":
        return cls()

    def for_fuel_type(self, fuel_type: str) -> Optional[FuelTypeConsumption]:
        for entry in self.by_fuel_type:
            if entry.fuel_type == fuel_type:
                return entry
        return None

    def to_dict(self) -> dict:
        return {
            'by_fuel_type': [entry.to_dict() for entry in self.by_fuel_type],
            'total_distance_km': self.total_distance_km,
            'total_vehicles_count': self.total_vehicles_count,
        }
