"""
Calculation Constants for CarLedger

Centralized location for the thresholds used by the consumption calculator.
Values come from Config so deployments can tune them without code changes.
"""

from dataclasses import dataclass

from ..config import Config

# Distance Constants (km)
DEFAULT_MIN_DISTANCE_KM = Config.MIN_DISTANCE_KM  # Segments shorter than this are discarded
MIN_CONFIDENCE_DISTANCE_KM = Config.MIN_CONFIDENCE_DISTANCE_KM  # Below this a segment is at most "medium"

# Realistic consumption band (per 100 km, tank's native unit)
MIN_REALISTIC_CONSUMPTION = Config.MIN_REALISTIC_CONSUMPTION  # Hypermiling / small EV
MAX_REALISTIC_CONSUMPTION = Config.MAX_REALISTIC_CONSUMPTION  # Large trucks, towing

# Fuel type families with non-liquid units
ELECTRIC_FUEL_TYPES = frozenset({'electric'})
HYDROGEN_FUEL_TYPES = frozenset({'hydrogen'})

# Gauge fraction bounds
MIN_TANK_FRACTION = 0.0
MAX_TANK_FRACTION = 1.0

# Minimum refuels the approximation fallback needs
MIN_APPROXIMATION_REFUELS = 2


@dataclass(frozen=True)
class ConsumptionThresholds:
    """Numeric thresholds for one calculation run."""

    min_distance_km: float = DEFAULT_MIN_DISTANCE_KM
    min_confidence_distance_km: float = MIN_CONFIDENCE_DISTANCE_KM
    min_realistic_consumption: float = MIN_REALISTIC_CONSUMPTION
    max_realistic_consumption: float = MAX_REALISTIC_CONSUMPTION


DEFAULT_THRESHOLDS = ConsumptionThresholds()
