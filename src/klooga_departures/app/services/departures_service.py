from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from klooga_departures.app.ports.output import IScheduleProvider
from klooga_departures.app.services.station_resolver import StationResolver
from klooga_departures.domain.algorithms.schedule_window import (
    departure_window,
    remaining_departures,
    window_start,
)
from klooga_departures.domain.exceptions import MissingStationParameter
from klooga_departures.domain.models import DepartureBoard, RouteChoice, StationDirectory

DEFAULT_PER_PAGE = 200


@dataclass(slots=True)
class DeparturesService:
    """Today's remaining departures between two stations.

    - Resolves the placeholder station (at most one stop search per process).
    - Queries the schedule for today from the current minute onwards.
    - Re-filters and sorts, since the upstream window is not trusted.
    """

    schedule_provider: IScheduleProvider
    resolver: StationResolver
    directory: StationDirectory
    clock: Callable[[], datetime] = datetime.now
    per_page: int = DEFAULT_PER_PAGE

    def list_routes(self) -> tuple[RouteChoice, ...]:
        return self.directory.routes

    async def list_departures(
        self, *, origin: str | None, destination: str | None
    ) -> DepartureBoard:
        if not origin or not destination:
            raise MissingStationParameter("Missing from/to")

        now = self.clock()
        not_before = window_start(now)

        origin_id = await self.resolver.resolve(origin)
        destination_id = await self.resolver.resolve(destination)

        departures = await self.schedule_provider.schedule_stop_pairs(
            origin=origin_id,
            destination=destination_id,
            service_date=now.date(),
            departure_between=departure_window(now),
            per_page=self.per_page,
        )

        return DepartureBoard(
            departures=remaining_departures(departures, not_before=not_before),
            origin=origin_id,
            destination=destination_id,
        )
