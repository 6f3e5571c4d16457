"""
Test Data Factories for CarLedger

Provides factory classes to easily create calculator inputs with sensible
defaults, reducing boilerplate in tests.

Usage:
    # A full-tank refuel at 1000 km
    point = RefuelFactory.build(odometer_km=1000.0, is_full_tank=True)

    # A gauge reading with no refuel
    point = CheckpointFactory.build(odometer_km=1500.0, fuel_in_tank=0.5)

    # Raw data-access rows for the HTTP/service layer
    row = TelemetryRowFactory.build(expense_type=1, refuel_volume_liters=40)
"""

import itertools
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from carledger.models import RecordKind, TankConfig, TelemetryPoint

BASE_TIME = datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc)

_record_ids = itertools.count(1)


class BaseFactory:
    """Base factory with common functionality."""

    model = None

    @classmethod
    def build(cls, **kwargs):
        """Build an instance with defaults overridden by kwargs."""
        defaults = cls.get_defaults()
        defaults.update(kwargs)
        return cls.model(**defaults)

    @classmethod
    def build_batch(cls, count: int, **kwargs):
        return [cls.build(**kwargs) for _ in range(count)]

    @classmethod
    def get_defaults(cls) -> Dict[str, Any]:
        """Override in subclasses to provide default values."""
        raise NotImplementedError


class RefuelFactory(BaseFactory):
    """Factory for refuel TelemetryPoints."""

    model = TelemetryPoint

    @classmethod
    def get_defaults(cls) -> Dict[str, Any]:
        return {
            "car_id": "car-1",
            "odometer_km": 1000.0,
            "when_done": BASE_TIME,
            "kind": RecordKind.REFUEL,
            "refuel_volume": 40.0,
            "is_full_tank": False,
        }


class CheckpointFactory(BaseFactory):
    """Factory for non-refuel TelemetryPoints."""

    model = TelemetryPoint

    @classmethod
    def get_defaults(cls) -> Dict[str, Any]:
        return {
            "car_id": "car-1",
            "odometer_km": 1000.0,
            "when_done": BASE_TIME,
            "kind": RecordKind.CHECKPOINT,
        }


class TankConfigFactory(BaseFactory):
    """Factory for TankConfig instances (single 60 L gasoline tank)."""

    model = TankConfig

    @classmethod
    def get_defaults(cls) -> Dict[str, Any]:
        return {
            "car_id": "car-1",
            "main_capacity": 60.0,
            "main_fuel_type": "gasoline",
        }


class _DictFactory(BaseFactory):
    model = dict


class TelemetryRowFactory(_DictFactory):
    """Factory for raw telemetry rows as the data-access layer returns them."""

    @classmethod
    def get_defaults(cls) -> Dict[str, Any]:
        record_id = next(_record_ids)
        return {
            "record_id": f"rec-{record_id}",
            "car_id": "car-1",
            "odometer_km": 1000.0,
            "when_done": (BASE_TIME + timedelta(days=record_id)).isoformat(),
            "expense_type": 1,
            "fuel_in_tank": None,
            "refuel_volume_liters": 40.0,
            "is_full_tank": False,
            "tank_type": "main",
        }


class TankConfigRowFactory(_DictFactory):
    """Factory for raw tank configuration rows."""

    @classmethod
    def get_defaults(cls) -> Dict[str, Any]:
        return {
            "car_id": "car-1",
            "main_tank_volume_liters": 60.0,
            "main_tank_fuel_type": "gasoline",
            "addl_tank_volume_liters": None,
            "addl_tank_fuel_type": None,
        }
