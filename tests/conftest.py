"""
Pytest fixtures for CarLedger tests.
"""

import os

import pytest

# Set BEFORE importing the app so limits and caching are off for tests
os.environ['FLASK_TESTING'] = 'true'
os.environ['RATELIMIT_ENABLED'] = 'false'

from carledger.app import app as flask_app, init_cache  # noqa: E402

from tests.factories import (  # noqa: E402
    RefuelFactory,
    TankConfigFactory,
    TankConfigRowFactory,
    TelemetryRowFactory,
)


@pytest.fixture
def app():
    """Create application for testing."""
    flask_app.config['TESTING'] = True
    init_cache(flask_app)
    yield flask_app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def gasoline_config():
    """Single 60 L gasoline tank for car-1."""
    return TankConfigFactory.build()


@pytest.fixture
def full_to_full_points():
    """
    Two full-tank refuels 600 km apart with a partial refuel in between.

    Consumed = 60 + (20 + 25) - 60 = 45 L over 600 km; the start anchor's
    own 40 L is already inside its full tank.
    """
    return [
        RefuelFactory.build(odometer_km=1000.0, refuel_volume=40.0, is_full_tank=True),
        RefuelFactory.build(odometer_km=1300.0, refuel_volume=20.0),
        RefuelFactory.build(odometer_km=1600.0, refuel_volume=25.0, is_full_tank=True),
    ]


@pytest.fixture
def unanchored_refuels():
    """Three partial refuels of 10, 15 and 20 L with no tank level known anywhere."""
    return [
        RefuelFactory.build(odometer_km=1000.0, refuel_volume=10.0),
        RefuelFactory.build(odometer_km=1300.0, refuel_volume=15.0),
        RefuelFactory.build(odometer_km=1600.0, refuel_volume=20.0),
    ]


@pytest.fixture
def report_payload():
    """Valid HTTP payload: two full-tank refuels 500 km apart on one car."""
    return {
        "data_points": [
            TelemetryRowFactory.build(odometer_km=1000.0, is_full_tank=True),
            TelemetryRowFactory.build(odometer_km=1500.0, refuel_volume_liters=35.0, is_full_tank=True),
        ],
        "car_configs": [TankConfigRowFactory.build()],
    }
