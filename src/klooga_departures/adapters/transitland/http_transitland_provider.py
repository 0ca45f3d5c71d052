from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any

import httpx

from klooga_departures.adapters.settings import RuntimeSettings
from klooga_departures.app.ports.output import IScheduleProvider, IStopSearchProvider
from klooga_departures.domain.exceptions import StationNotFound, UpstreamError
from klooga_departures.domain.models import Departure, GeoPoint, Stop

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class HttpTransitlandProvider(IScheduleProvider, IStopSearchProvider):
    """Talks to the Transitland REST APIs over HTTP.

    - v1 ``schedule_stop_pairs`` for departures (honours service calendars).
    - v2 ``stops`` for the proximity search behind placeholder resolution.

    Notes:
      - Settings default to the environment and are read per call, so a
        missing API key fails before any request is sent.
      - No retries. No timeout unless TRANSITLAND_TIMEOUT_S is set.
    """

    settings: RuntimeSettings | None = None
    transport: httpx.AsyncBaseTransport | None = None

    def _settings(self) -> RuntimeSettings:
        return self.settings or RuntimeSettings.from_env()

    def _client(self, settings: RuntimeSettings) -> httpx.AsyncClient:
        kwargs: dict[str, Any] = {}
        if settings.timeout_s is not None:
            kwargs["timeout"] = settings.timeout_s
        if self.transport is not None:
            kwargs["transport"] = self.transport
        return httpx.AsyncClient(**kwargs)

    async def stops_near(self, *, center: GeoPoint, radius_m: int) -> tuple[Stop, ...]:
        settings = self._settings()
        api_key = settings.require_api_key()
        url = f"{settings.v2_url}/stops"
        params = {**center.as_query(), "radius": str(radius_m), "apikey": api_key}

        logger.debug("GET %s lat=%s lon=%s radius=%s", url, center.lat, center.lon, radius_m)
        async with self._client(settings) as client:
            resp = await client.get(url, params=params)

        if not resp.is_success:
            logger.warning("Transitland stop search failed with %s", resp.status_code)
            raise StationNotFound(f"Transitland stops error: {resp.status_code}")

        return _parse_stops(_json_or_none(resp))

    async def schedule_stop_pairs(
        self,
        *,
        origin: str,
        destination: str,
        service_date: date,
        departure_between: str,
        per_page: int,
    ) -> tuple[Departure, ...]:
        settings = self._settings()
        api_key = settings.require_api_key()
        url = f"{settings.v1_url}/schedule_stop_pairs"
        params = {
            "api_key": api_key,
            "origin_onestop_id": origin,
            "destination_onestop_id": destination,
            "date": service_date.isoformat(),
            "active": "true",
            "origin_departure_between": departure_between,
            "per_page": str(per_page),
        }

        logger.debug(
            "GET %s origin=%s destination=%s date=%s between=%s",
            url,
            origin,
            destination,
            params["date"],
            departure_between,
        )
        async with self._client(settings) as client:
            resp = await client.get(url, params=params)

        if not resp.is_success:
            logger.warning(
                "Transitland schedule_stop_pairs failed with %s", resp.status_code
            )
            raise UpstreamError(resp.status_code, resp.text)

        return _parse_schedule_stop_pairs(_json_or_none(resp))


def _json_or_none(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        logger.warning("Transitland returned a body that is not JSON")
        return None


def _opt_str(value: Any) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None


def _rows(payload: Any, key: str) -> list[dict[str, Any]]:
    if not isinstance(payload, dict):
        return []
    rows = payload.get(key) or []
    if not isinstance(rows, list):
        return []
    return [row for row in rows if isinstance(row, dict)]


def _parse_schedule_stop_pairs(payload: Any) -> tuple[Departure, ...]:
    out: list[Departure] = []

    for row in _rows(payload, "schedule_stop_pairs"):
        departs = _opt_str(row.get("origin_departure_time"))
        if departs is None:
            continue

        out.append(
            Departure(
                origin_departure_time=departs,
                destination_arrival_time=_opt_str(row.get("destination_arrival_time"))
                or "",
                route_name=_opt_str(row.get("route_name")),
                route_onestop_id=_opt_str(row.get("route_onestop_id")),
                headsign=_opt_str(row.get("trip_headsign")),
            )
        )

    return tuple(out)


def _parse_stop_location(row: dict[str, Any]) -> GeoPoint | None:
    geometry = row.get("geometry")
    if not isinstance(geometry, dict):
        return None
    coords = geometry.get("coordinates")
    if not isinstance(coords, (list, tuple)) or len(coords) < 2:
        return None
    try:
        # GeoJSON order is lon, lat.
        return GeoPoint(lat=float(coords[1]), lon=float(coords[0]))
    except (TypeError, ValueError):
        return None


def _parse_stops(payload: Any) -> tuple[Stop, ...]:
    return tuple(
        Stop(
            onestop_id=_opt_str(row.get("onestop_id")),
            name=row.get("name") if isinstance(row.get("name"), str) else "",
            location=_parse_stop_location(row),
        )
        for row in _rows(payload, "stops")
    )
