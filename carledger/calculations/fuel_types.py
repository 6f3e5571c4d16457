"""
Fuel type helpers for the report formatting layer.

Electric tanks are measured in kWh and hydrogen tanks in kg; liquid fuels
keep whatever volume/consumption unit the user prefers.
"""

from .constants import ELECTRIC_FUEL_TYPES, HYDROGEN_FUEL_TYPES

# Consumption units whose electric/hydrogen equivalent is distance per unit
_DISTANCE_PER_UNIT_CONSUMPTION = ('mpg-us', 'mpg-uk')


def is_electric_fuel_type(fuel_type: str) -> bool:
    """Check if fuel type uses electricity (kWh)."""
    return fuel_type in ELECTRIC_FUEL_TYPES


def is_hydrogen_fuel_type(fuel_type: str) -> bool:
    """Check if fuel type is hydrogen (kg)."""
    return fuel_type in HYDROGEN_FUEL_TYPES


def get_fuel_volume_unit_label(fuel_type: str, volume_unit: str) -> str:
    """
    Volume unit label for a fuel type.

    Examples:
        >>> get_fuel_volume_unit_label('electric', 'gal-us')
        'kWh'
        >>> get_fuel_volume_unit_label('diesel', 'gal-us')
        'gal-us'
    """
    if is_electric_fuel_type(fuel_type):
        return 'kWh'
    if is_hydrogen_fuel_type(fuel_type):
        return 'kg'
    return volume_unit


def get_consumption_unit_label(fuel_type: str, consumption_unit: str) -> str:
    """
    Consumption unit label for a fuel type.

    Examples:
        >>> get_consumption_unit_label('electric', 'l100km')
        'kWh/100km'
        >>> get_consumption_unit_label('hydrogen', 'mpg-us')
        'mi/kg'
        >>> get_consumption_unit_label('gasoline', 'mpg-uk')
        'mpg-uk'
    """
    if is_electric_fuel_type(fuel_type):
        energy_unit = 'kWh'
    elif is_hydrogen_fuel_type(fuel_type):
        energy_unit = 'kg'
    else:
        return consumption_unit

    if consumption_unit in _DISTANCE_PER_UNIT_CONSUMPTION:
        return f'mi/{energy_unit}'
    return f'{energy_unit}/100km'
