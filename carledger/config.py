import os

from .exceptions import ConfigurationError


class Config:
    """Application configuration from environment variables."""

    # Flask
    FLASK_ENV = os.environ.get('FLASK_ENV', 'production')
    DEBUG = FLASK_ENV == 'development'

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # API Configuration
    FLASK_HOST = os.environ.get('FLASK_HOST', '0.0.0.0')
    FLASK_PORT = int(os.environ.get('FLASK_PORT', 8080))
    CACHE_TIMEOUT_SECONDS = int(os.environ.get('CACHE_TIMEOUT', 60))
    RATE_LIMIT_STORAGE_URI = os.environ.get('RATE_LIMIT_STORAGE_URI', 'memory://')
    RATELIMIT_ENABLED = os.environ.get('RATELIMIT_ENABLED', 'true').lower() == 'true'

    # Callers must cap the result set before handing it to the calculator
    MAX_DATA_POINTS = int(os.environ.get('MAX_DATA_POINTS', 50000))

    # Consumption thresholds (distance in km, rates per 100 km in the tank's native unit)
    MIN_DISTANCE_KM = float(os.environ.get('MIN_DISTANCE_KM', 10))
    MIN_CONFIDENCE_DISTANCE_KM = float(os.environ.get('MIN_CONFIDENCE_DISTANCE_KM', 100))
    MIN_REALISTIC_CONSUMPTION = float(os.environ.get('MIN_REALISTIC_CONSUMPTION', 1))
    MAX_REALISTIC_CONSUMPTION = float(os.environ.get('MAX_REALISTIC_CONSUMPTION', 50))

    # Display defaults
    DEFAULT_VOLUME_UNIT = os.environ.get('DEFAULT_VOLUME_UNIT', 'l')
    DEFAULT_CONSUMPTION_UNIT = os.environ.get('DEFAULT_CONSUMPTION_UNIT', 'l100km')

    @classmethod
    def validate(cls):
        """
        Check threshold settings for consistency.

        Raises:
            ConfigurationError: a threshold is negative or the realistic band is empty
        """
        for key in ('MIN_DISTANCE_KM', 'MIN_CONFIDENCE_DISTANCE_KM', 'MIN_REALISTIC_CONSUMPTION'):
            if getattr(cls, key) < 0:
                raise ConfigurationError(f"{key} cannot be negative", config_key=key)

        if cls.MIN_REALISTIC_CONSUMPTION > cls.MAX_REALISTIC_CONSUMPTION:
            raise ConfigurationError(
                "MIN_REALISTIC_CONSUMPTION is above MAX_REALISTIC_CONSUMPTION",
                config_key='MAX_REALISTIC_CONSUMPTION',
            )

        if cls.MAX_DATA_POINTS <= 0:
            raise ConfigurationError("MAX_DATA_POINTS must be positive", config_key='MAX_DATA_POINTS')
