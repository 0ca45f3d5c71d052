from .departures import (
    DeparturesError,
    MissingApiKey,
    MissingStationParameter,
    StationNotFound,
    UpstreamError,
)

__all__ = [
    "DeparturesError",
    "MissingApiKey",
    "MissingStationParameter",
    "StationNotFound",
    "UpstreamError",
]
