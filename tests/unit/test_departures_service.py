from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

import pytest

from klooga_departures.app.services.departures_service import DeparturesService
from klooga_departures.app.services.station_resolver import StationResolver
from klooga_departures.domain.exceptions import MissingStationParameter, UpstreamError
from klooga_departures.domain.models import (
    Departure,
    GeoPoint,
    Stop,
    default_station_directory,
)

KLOOGARANNA = "s-ud91xepqe7-kloogaranna"
LILLEKULA_ID = "s-ud9d1yqz4c-lillekula"


@dataclass(slots=True)
class FakeStopSearch:
    stops: tuple[Stop, ...]
    calls: int = 0

    async def stops_near(self, *, center: GeoPoint, radius_m: int) -> tuple[Stop, ...]:
        self.calls += 1
        return self.stops


@dataclass(slots=True)
class FakeScheduleProvider:
    departures: tuple[Departure, ...] = ()
    error: Exception | None = None
    calls: list[dict[str, Any]] = field(default_factory=list)

    async def schedule_stop_pairs(self, **kwargs: Any) -> tuple[Departure, ...]:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.departures


def _service(
    schedule: FakeScheduleProvider,
    search: FakeStopSearch | None = None,
    now: datetime = datetime(2026, 10, 19, 14, 5, 42),
) -> DeparturesService:
    directory = default_station_directory()
    search = search or FakeStopSearch(
        stops=(Stop(onestop_id=LILLEKULA_ID, name="Lilleküla"),)
    )
    return DeparturesService(
        schedule_provider=schedule,
        resolver=StationResolver(stop_search=search, placeholder=directory.placeholder),
        directory=directory,
        clock=lambda: now,
    )


def _dep(t: str, route: str = "R11") -> Departure:
    return Departure(
        origin_departure_time=t,
        destination_arrival_time=t,
        route_name=route,
        headsign="Klooga-Rand",
    )


@pytest.mark.parametrize(
    ("origin", "destination"),
    [(None, KLOOGARANNA), (KLOOGARANNA, None), ("", KLOOGARANNA), (None, None)],
)
def test_missing_station_raises_without_upstream_calls(origin, destination) -> None:
    schedule = FakeScheduleProvider()
    search = FakeStopSearch(stops=())
    svc = _service(schedule, search)

    with pytest.raises(MissingStationParameter):
        asyncio.run(svc.list_departures(origin=origin, destination=destination))

    assert schedule.calls == []
    assert search.calls == 0


def test_query_uses_today_and_current_minute_window() -> None:
    schedule = FakeScheduleProvider()
    svc = _service(schedule)

    board = asyncio.run(svc.list_departures(origin="LILLEKYLA", destination=KLOOGARANNA))

    assert schedule.calls == [
        {
            "origin": LILLEKULA_ID,
            "destination": KLOOGARANNA,
            "service_date": date(2026, 10, 19),
            "departure_between": "14:05:00,23:59:59",
            "per_page": 200,
        }
    ]
    assert board.origin == LILLEKULA_ID
    assert board.destination == KLOOGARANNA
    assert board.departures == ()


def test_departures_are_refiltered_and_sorted() -> None:
    schedule = FakeScheduleProvider(
        departures=(_dep("16:20:00"), _dep("14:02:00"), _dep("14:05:00"), _dep("15:01:00"))
    )
    svc = _service(schedule)

    board = asyncio.run(svc.list_departures(origin="LILLEKYLA", destination=KLOOGARANNA))

    times = [d.origin_departure_time for d in board.departures]
    assert times == ["14:05:00", "15:01:00", "16:20:00"]
    assert times == sorted(times)
    assert all(t >= "14:05:00" for t in times)


def test_placeholder_as_destination_is_resolved() -> None:
    schedule = FakeScheduleProvider()
    svc = _service(schedule)

    board = asyncio.run(svc.list_departures(origin=KLOOGARANNA, destination="LILLEKYLA"))

    assert board.destination == LILLEKULA_ID
    assert schedule.calls[0]["origin"] == KLOOGARANNA


def test_placeholder_is_resolved_once_across_requests() -> None:
    search = FakeStopSearch(stops=(Stop(onestop_id=LILLEKULA_ID, name="Lilleküla"),))
    svc = _service(FakeScheduleProvider(), search)

    asyncio.run(svc.list_departures(origin="LILLEKYLA", destination=KLOOGARANNA))
    asyncio.run(svc.list_departures(origin=KLOOGARANNA, destination="LILLEKYLA"))

    assert search.calls == 1


def test_upstream_error_propagates() -> None:
    schedule = FakeScheduleProvider(error=UpstreamError(503, "maintenance"))
    svc = _service(schedule)

    with pytest.raises(UpstreamError) as info:
        asyncio.run(svc.list_departures(origin=KLOOGARANNA, destination="LILLEKYLA"))

    assert info.value.status_code == 503
    assert info.value.text == "maintenance"


def test_list_routes_returns_directory_routes() -> None:
    svc = _service(FakeScheduleProvider())

    labels = [r.label for r in svc.list_routes()]

    assert labels == [
        "Lilleküla → Klooga",
        "Lilleküla → Kloogaranna",
        "Klooga → Lilleküla",
        "Kloogaranna → Lilleküla",
    ]
