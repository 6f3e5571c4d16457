"""Parse data-access rows into telemetry points and tank configurations."""

import logging
import math
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from dateutil import parser as date_parser

from ..exceptions import TelemetryParsingError
from ..models import RecordKind, TankConfig, TankSlot, TelemetryPoint

logger = logging.getLogger(__name__)


class RowParser:
    """
    Converts rows from the reporting data-access layer into calculator inputs.

    Telemetry rows are the join of expense records and their refuel details:
    - record_id, car_id
    - odometer_km: required, non-negative
    - when_done: datetime, ISO string or unix seconds
    - expense_type: 1=refuel, 2=expense, 3=checkpoint (or the names)
    - fuel_in_tank: gauge fraction 0-1
    - refuel_volume_liters, is_full_tank, tank_type: refuel details

    Tank config rows carry the per-car tank setup:
    - car_id
    - main_tank_volume_liters, main_tank_fuel_type
    - addl_tank_volume_liters, addl_tank_fuel_type
    """

    EXPENSE_TYPE_MAP = {
        1: RecordKind.REFUEL,
        2: RecordKind.EXPENSE,
        3: RecordKind.CHECKPOINT,
        'refuel': RecordKind.REFUEL,
        'expense': RecordKind.EXPENSE,
        'checkpoint': RecordKind.CHECKPOINT,
    }

    TANK_TYPE_MAP = {
        'main': TankSlot.PRIMARY,
        'primary': TankSlot.PRIMARY,
        'addl': TankSlot.SECONDARY,
        'secondary': TankSlot.SECONDARY,
    }

    TRUE_STRINGS = ('true', '1', 'yes')
    FALSE_STRINGS = ('false', '0', 'no')

    @classmethod
    def parse_telemetry_row(cls, row: dict) -> TelemetryPoint:
        """
        Parse one telemetry row.

        Raises:
            TelemetryParsingError: car id or odometer missing/invalid, bad
                timestamp, unknown tank type
        """
        record_id = cls._parse_id(row.get('record_id'))
        car_id = cls._parse_id(row.get('car_id'))
        if not car_id:
            raise TelemetryParsingError("Missing car_id", field='car_id', record_id=record_id)

        odometer = cls._parse_float(row.get('odometer_km'), 'odometer_km', record_id)
        if odometer is None:
            raise TelemetryParsingError("Missing odometer_km", field='odometer_km', record_id=record_id)
        if odometer < 0:
            raise TelemetryParsingError(
                "Odometer cannot be negative", field='odometer_km', value=odometer, record_id=record_id
            )

        return TelemetryPoint(
            car_id=car_id,
            odometer_km=odometer,
            when_done=cls._parse_timestamp(row.get('when_done'), record_id),
            kind=cls._parse_kind(row.get('expense_type'), record_id),
            fuel_in_tank=cls._parse_float(row.get('fuel_in_tank'), 'fuel_in_tank', record_id),
            refuel_volume=cls._parse_float(row.get('refuel_volume_liters'), 'refuel_volume_liters', record_id),
            is_full_tank=cls._parse_bool(row.get('is_full_tank'), 'is_full_tank', record_id),
            tank=cls._parse_tank(row.get('tank_type'), record_id),
            record_id=record_id,
        )

    @classmethod
    def parse_telemetry_rows(cls, rows: Iterable[dict]) -> List[TelemetryPoint]:
        """Parse telemetry rows, dropping those without an odometer reading."""
        points = []
        skipped = 0
        for row in rows:
            if row.get('odometer_km') in (None, ''):
                skipped += 1
                continue
            points.append(cls.parse_telemetry_row(row))

        if skipped:
            logger.debug(f"Skipped {skipped} row(s) without odometer reading")
        return points

    @classmethod
    def parse_tank_config_row(cls, row: dict) -> TankConfig:
        """
        Parse one tank configuration row.

        Capacities that are missing or non-positive are kept as-is; the
        calculator skips those tanks.
        """
        car_id = cls._parse_id(row.get('car_id'))
        if not car_id:
            raise TelemetryParsingError("Missing car_id in tank config", field='car_id')

        return TankConfig(
            car_id=car_id,
            main_capacity=cls._parse_float(row.get('main_tank_volume_liters'), 'main_tank_volume_liters', car_id),
            main_fuel_type=cls._parse_fuel_type(row.get('main_tank_fuel_type')),
            addl_capacity=cls._parse_float(row.get('addl_tank_volume_liters'), 'addl_tank_volume_liters', car_id),
            addl_fuel_type=cls._parse_fuel_type(row.get('addl_tank_fuel_type')),
        )

    @classmethod
    def parse_tank_config_rows(cls, rows: Iterable[dict]) -> List[TankConfig]:
        return [cls.parse_tank_config_row(row) for row in rows]

    @staticmethod
    def _parse_id(value) -> Optional[str]:
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @staticmethod
    def _parse_float(value, field: str, record_id: Optional[str] = None) -> Optional[float]:
        """Parse a numeric field; None and empty strings mean "not recorded"."""
        if value is None or value == '':
            return None
        if isinstance(value, bool):
            raise TelemetryParsingError(f"{field} must be a number", field=field, value=value, record_id=record_id)
        try:
            number = float(value)
        except (ValueError, TypeError):
            raise TelemetryParsingError(f"{field} must be a number", field=field, value=value, record_id=record_id)
        if not math.isfinite(number):
            raise TelemetryParsingError(f"{field} must be finite", field=field, value=value, record_id=record_id)
        return number

    @classmethod
    def _parse_bool(cls, value, field: str, record_id: Optional[str] = None) -> Optional[bool]:
        if value is None or value == '':
            return None
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in cls.TRUE_STRINGS:
            return True
        if text in cls.FALSE_STRINGS:
            return False
        raise TelemetryParsingError(f"{field} must be a boolean", field=field, value=value, record_id=record_id)

    @classmethod
    def _parse_kind(cls, value, record_id: Optional[str] = None) -> RecordKind:
        """Unknown codes and names are non-refuel records; non-scalar values are rejected."""
        if value is None:
            return RecordKind.OTHER
        if isinstance(value, str):
            text = value.strip().lower()
            if text.isdigit():
                return cls.EXPENSE_TYPE_MAP.get(int(text), RecordKind.OTHER)
            return cls.EXPENSE_TYPE_MAP.get(text, RecordKind.OTHER)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TelemetryParsingError("expense_type must be a code or name", field='expense_type',
                                        value=value, record_id=record_id)
        return cls.EXPENSE_TYPE_MAP.get(value, RecordKind.OTHER)

    @classmethod
    def _parse_tank(cls, value, record_id: Optional[str] = None) -> Optional[TankSlot]:
        if value is None or value == '':
            return None
        tank = cls.TANK_TYPE_MAP.get(str(value).strip().lower())
        if tank is None:
            raise TelemetryParsingError("Unknown tank_type", field='tank_type', value=value, record_id=record_id)
        return tank

    @staticmethod
    def _parse_fuel_type(value) -> Optional[str]:
        if value is None:
            return None
        text = str(value).strip().lower()
        return text or None

    @staticmethod
    def _parse_timestamp(value, record_id: Optional[str] = None) -> Optional[datetime]:
        """Parse when_done; naive datetimes are assumed to be UTC."""
        if value is None or value == '':
            return None

        if isinstance(value, datetime):
            dt = value
        elif isinstance(value, bool):
            raise TelemetryParsingError("Invalid timestamp", field='when_done',
                                        value=value, record_id=record_id)
        elif isinstance(value, (int, float)) or str(value).strip().isdigit():
            try:
                return datetime.fromtimestamp(float(value), tz=timezone.utc)
            except (ValueError, OverflowError, OSError):
                raise TelemetryParsingError("Invalid unix timestamp", field='when_done',
                                            value=value, record_id=record_id)
        else:
            text = str(value).strip()
            try:
                dt = date_parser.parse(text)
            except (ValueError, OverflowError, TypeError):
                raise TelemetryParsingError("Invalid timestamp", field='when_done',
                                            value=value, record_id=record_id)

        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt
