from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from datetime import datetime
from zoneinfo import ZoneInfo

import httpx

from klooga_departures.adapters.display.board import BoardState, render_board
from klooga_departures.adapters.display.poller import DEFAULT_INTERVAL_S, DeparturesPoller
from klooga_departures.adapters.settings import DEFAULT_TZ_LABEL
from klooga_departures.domain.models import RouteChoice, default_station_directory

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000"


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="klooga-departures-board",
        description="Show today's remaining trains for one of the configured routes.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--base-url",
        default=os.getenv("KLOOGA_API_URL", DEFAULT_BASE_URL),
        help="Departures service URL (default: $KLOOGA_API_URL or %(default)s)",
    )
    parser.add_argument(
        "--route", type=int, default=0, help="Index into the route table (default: 0)"
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=DEFAULT_INTERVAL_S,
        help="Seconds between refreshes (default: %(default)s)",
    )
    parser.add_argument(
        "--tz",
        default=os.getenv("TZ_LABEL", DEFAULT_TZ_LABEL),
        help="Timezone for the refresh label (default: %(default)s)",
    )
    parser.add_argument("--once", action="store_true", help="Print one board and exit")
    parser.add_argument("--list-routes", action="store_true", help="List routes and exit")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


async def _routes(poller: DeparturesPoller) -> tuple[RouteChoice, ...]:
    try:
        routes = await poller.fetch_routes()
    except (httpx.HTTPError, ValueError, KeyError, TypeError) as exc:
        logger.warning("Could not load routes from service (%s); using defaults", exc)
        routes = ()
    return routes or default_station_directory().routes


def _printer(tz_label: str):
    zone = ZoneInfo(tz_label)

    def _print(route: RouteChoice, state: BoardState) -> None:
        now_label = datetime.now(zone).strftime("%H:%M")
        print(render_board(state, route=route, now_label=now_label, tz_label=tz_label))
        print()

    return _print


async def _run(args: argparse.Namespace) -> int:
    poller = DeparturesPoller(base_url=args.base_url, interval_s=args.interval)
    routes = await _routes(poller)

    if args.list_routes:
        for i, r in enumerate(routes):
            print(f"{i}: {r.label} ({r.origin} → {r.destination})")
        return 0

    if not (0 <= args.route < len(routes)):
        print(f"No route with index {args.route}", file=sys.stderr)
        return 2

    route = routes[args.route]
    show = _printer(args.tz)

    if args.once:
        state = await poller.fetch(route)
        show(route, state)
        return 1 if state.error is not None else 0

    # Loading states are skipped in the terminal; they would only flicker.
    def _on_update(r: RouteChoice, state: BoardState) -> None:
        if not state.loading:
            show(r, state)

    poller.on_update = _on_update
    try:
        await poller.select(route)
    finally:
        await poller.stop()
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return asyncio.run(_run(args))
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    sys.exit(main())
