from __future__ import annotations

from dataclasses import dataclass

from klooga_departures.domain.models import Departure, RouteChoice

TITLE = "Lilleküla ↔ Klooga / Kloogaranna"
LOADING_TEXT = "Loading departures…"
EMPTY_TEXT = "No more departures today."
ERROR_HINT = (
    "Check that TRANSITLAND_API_KEY is set and that the Lilleküla stop lookup succeeded."
)
FOOTER = (
    "Data: Transitland (GTFS). Service calendars (weekends, holidays) are respected "
    "and only departures from the current time onwards are shown."
)


@dataclass(frozen=True, slots=True)
class BoardState:
    """What the board shows: loading, an error, or a list (possibly empty)."""

    loading: bool = False
    error: str | None = None
    departures: tuple[Departure, ...] | None = None

    @staticmethod
    def loading_state() -> "BoardState":
        return BoardState(loading=True)

    @staticmethod
    def failed(message: str) -> "BoardState":
        return BoardState(error=message or "Unknown error")

    @staticmethod
    def loaded(departures: tuple[Departure, ...]) -> "BoardState":
        return BoardState(departures=departures)


def _hhmm(value: str) -> str:
    return value[:5]


def render_departure(departure: Departure) -> str:
    line = departure.route_name or departure.route_onestop_id or ""
    parts = [
        f"Departs {_hhmm(departure.origin_departure_time)}",
        f"Arrives {_hhmm(departure.destination_arrival_time)}",
    ]
    if line:
        parts.append(line)
    if departure.headsign:
        parts.append(departure.headsign)
    return "  ".join(parts)


def render_board(
    state: BoardState,
    *,
    route: RouteChoice,
    now_label: str,
    tz_label: str,
) -> str:
    lines = [
        TITLE,
        f"Today's remaining departures. Last refresh: {now_label} ({tz_label}).",
        "",
        f"[{route.label}]",
    ]

    if state.loading:
        lines.append(LOADING_TEXT)
    if state.error is not None:
        lines.append(f"Error: {state.error}")
        lines.append(f"  {ERROR_HINT}")
    if state.departures is not None:
        if not state.departures:
            lines.append(EMPTY_TEXT)
        lines.extend(render_departure(d) for d in state.departures)

    lines.extend(["", FOOTER])
    return "\n".join(lines)
