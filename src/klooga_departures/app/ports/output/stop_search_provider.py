from __future__ import annotations

from abc import ABC, abstractmethod

from klooga_departures.domain.models import GeoPoint, Stop


class IStopSearchProvider(ABC):
    """Port for searching stops around a coordinate."""

    @abstractmethod
    async def stops_near(self, *, center: GeoPoint, radius_m: int) -> tuple[Stop, ...]:
        raise NotImplementedError
