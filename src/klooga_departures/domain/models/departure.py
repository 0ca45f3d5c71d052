from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Departure:
    """One scheduled leg between two stations.

    Times are upstream ``HH:MM:SS`` strings. They may exceed ``24:00:00`` for
    trips running past midnight, which keeps them comparable as strings.
    """

    origin_departure_time: str
    destination_arrival_time: str
    route_name: str | None = None
    route_onestop_id: str | None = None
    headsign: str | None = None


@dataclass(frozen=True, slots=True)
class DepartureBoard:
    departures: tuple[Departure, ...]
    origin: str
    destination: str
