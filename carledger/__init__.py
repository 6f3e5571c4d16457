"""CarLedger fuel and energy consumption tracking."""

__version__ = "1.0.0"
