"""Monitored coastal location."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Location:
    location_id: str
    display_name: str
    latitude: float
    longitude: float
    noaa_station_id: str
    is_active: bool = True
