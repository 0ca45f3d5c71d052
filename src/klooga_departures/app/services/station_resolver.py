from __future__ import annotations

import logging
from dataclasses import dataclass, field

from klooga_departures.app.ports.output import IStopSearchProvider
from klooga_departures.domain.algorithms.schedule_window import pick_stop_candidate
from klooga_departures.domain.exceptions import StationNotFound
from klooga_departures.domain.models import PlaceholderStation

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class StationResolver:
    """Resolves the placeholder token to a concrete Onestop ID.

    The first successful lookup is kept for the lifetime of the resolver and
    never invalidated. Two concurrent first lookups may both search and both
    write; they write the same value.
    """

    stop_search: IStopSearchProvider
    placeholder: PlaceholderStation

    _resolved: str | None = field(default=None, init=False, repr=False)

    async def resolve(self, station_id: str) -> str:
        if station_id != self.placeholder.token:
            return station_id
        return await self.resolve_or_fetch()

    async def resolve_or_fetch(self) -> str:
        if self._resolved is not None:
            return self._resolved

        stops = await self.stop_search.stops_near(
            center=self.placeholder.location, radius_m=self.placeholder.radius_m
        )
        candidate = pick_stop_candidate(stops, self.placeholder.name_hint)
        if candidate is None or not candidate.onestop_id:
            raise StationNotFound(
                f"No stop found for {self.placeholder.token} near "
                f"{self.placeholder.location.lat},{self.placeholder.location.lon}"
            )

        logger.info(
            "Resolved %s to %s (%s)",
            self.placeholder.token,
            candidate.onestop_id,
            candidate.name,
        )
        self._resolved = candidate.onestop_id
        return self._resolved
