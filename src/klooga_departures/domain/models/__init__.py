from .departure import Departure, DepartureBoard
from .geo import GeoPoint
from .station_directory import (
    PlaceholderStation,
    RouteChoice,
    StationDirectory,
    default_station_directory,
)
from .stop import Stop

__all__ = [
    "Departure",
    "DepartureBoard",
    "GeoPoint",
    "PlaceholderStation",
    "RouteChoice",
    "StationDirectory",
    "Stop",
    "default_station_directory",
]
