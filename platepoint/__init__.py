"""PlatePoint — rate restaurants on service, food and ambiance."""

__version__ = "1.0.0"
