from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import httpx

from klooga_departures.adapters.display.board import BoardState
from klooga_departures.domain.models import Departure, RouteChoice

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_S = 60.0


@dataclass(slots=True)
class DeparturesPoller:
    """Polls the departures service for the selected route.

    At most one polling task runs. Selecting another route cancels it and
    starts over from the loading state.
    """

    base_url: str
    interval_s: float = DEFAULT_INTERVAL_S
    on_update: Callable[[RouteChoice, BoardState], None] | None = None
    transport: httpx.AsyncBaseTransport | None = None

    state: BoardState = field(default_factory=BoardState, init=False)
    _task: asyncio.Task[None] | None = field(default=None, init=False, repr=False)

    def _client(self) -> httpx.AsyncClient:
        kwargs: dict[str, Any] = {"base_url": self.base_url}
        if self.transport is not None:
            kwargs["transport"] = self.transport
        return httpx.AsyncClient(**kwargs)

    def _publish(self, route: RouteChoice, state: BoardState) -> None:
        self.state = state
        if self.on_update is not None:
            self.on_update(route, state)

    async def fetch(self, route: RouteChoice) -> BoardState:
        params = {"from": route.origin, "to": route.destination}
        try:
            async with self._client() as client:
                resp = await client.get("/departures", params=params)
        except httpx.HTTPError as exc:
            logger.warning("Departures request failed: %s", exc)
            return BoardState.failed(str(exc))

        if not resp.is_success:
            return BoardState.failed(resp.text)

        try:
            payload = resp.json()
        except ValueError:
            return BoardState.failed("Departures service returned invalid JSON")

        return BoardState.loaded(_parse_trips(payload))

    async def fetch_routes(self) -> tuple[RouteChoice, ...]:
        async with self._client() as client:
            resp = await client.get("/routes")
            resp.raise_for_status()
            rows = resp.json()

        return tuple(
            RouteChoice(label=r["label"], origin=r["from"], destination=r["to"])
            for r in rows
        )

    async def _poll(self, route: RouteChoice) -> None:
        while True:
            self._publish(route, BoardState.loading_state())
            self._publish(route, await self.fetch(route))
            await asyncio.sleep(self.interval_s)

    def select(self, route: RouteChoice) -> asyncio.Task[None]:
        """Switch to ``route``. Must be called from a running event loop."""

        if self._task is not None and not self._task.done():
            self._task.cancel()

        self._publish(route, BoardState.loading_state())
        self._task = asyncio.get_running_loop().create_task(self._poll(route))
        return self._task

    async def stop(self) -> None:
        task = self._task
        self._task = None
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass


def _parse_trips(payload: Any) -> tuple[Departure, ...]:
    rows = payload.get("trips") if isinstance(payload, dict) else None
    if not isinstance(rows, list):
        return ()

    return tuple(
        Departure(
            origin_departure_time=str(row.get("origin_departure_time") or ""),
            destination_arrival_time=str(row.get("destination_arrival_time") or ""),
            route_name=row.get("route_name"),
            route_onestop_id=row.get("route_onestop_id"),
            headsign=row.get("headsig"),
        )
        for row in rows
        if isinstance(row, dict)
    )
