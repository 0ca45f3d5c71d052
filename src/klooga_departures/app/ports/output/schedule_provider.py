from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from klooga_departures.domain.models import Departure


class IScheduleProvider(ABC):
    """Port for querying scheduled stop pairs between two stations."""

    @abstractmethod
    async def schedule_stop_pairs(
        self,
        *,
        origin: str,
        destination: str,
        service_date: date,
        departure_between: str,
        per_page: int,
    ) -> tuple[Departure, ...]:
        """Return departures active on ``service_date`` inside the time window.

        Implementations respect the service calendar (weekends, holidays).
        """
