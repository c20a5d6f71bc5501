"""Coastal location forecast scoring: weather, tides, and water temperature."""

__version__ = "0.1.0"
