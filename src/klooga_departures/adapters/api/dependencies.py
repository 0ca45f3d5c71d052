from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from klooga_departures.adapters.settings import RuntimeSettings, load_station_directory
from klooga_departures.adapters.transitland.http_transitland_provider import (
    HttpTransitlandProvider,
)
from klooga_departures.app.services.departures_service import DeparturesService
from klooga_departures.app.services.station_resolver import StationResolver
from klooga_departures.domain.models import StationDirectory


@lru_cache(maxsize=1)
def get_station_directory() -> StationDirectory:
    return load_station_directory(RuntimeSettings.from_env())


@lru_cache(maxsize=1)
def get_station_resolver() -> StationResolver:
    # One resolver per process: it owns the memoized placeholder ID.
    # The provider reads settings per call, so the key is still checked per request.
    return StationResolver(
        stop_search=HttpTransitlandProvider(),
        placeholder=get_station_directory().placeholder,
    )


def get_departures_service(
    resolver: StationResolver = Depends(get_station_resolver),
    directory: StationDirectory = Depends(get_station_directory),
) -> DeparturesService:
    settings = RuntimeSettings.from_env()
    return DeparturesService(
        schedule_provider=HttpTransitlandProvider(settings=settings),
        resolver=resolver,
        directory=directory,
        clock=settings.now,
        per_page=settings.per_page,
    )
