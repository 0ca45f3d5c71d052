from __future__ import annotations

from klooga_departures.adapters.display.board import (
    EMPTY_TEXT,
    ERROR_HINT,
    LOADING_TEXT,
    BoardState,
    render_board,
    render_departure,
)
from klooga_departures.domain.models import Departure, RouteChoice

ROUTE = RouteChoice("Lilleküla → Klooga", "LILLEKYLA", "s-ud932p00sp-kloogaraudteejaam")


def _render(state: BoardState) -> str:
    return render_board(state, route=ROUTE, now_label="14:05", tz_label="Europe/Tallinn")


def test_loading_state() -> None:
    out = _render(BoardState.loading_state())

    assert LOADING_TEXT in out
    assert "[Lilleküla → Klooga]" in out
    assert "Last refresh: 14:05 (Europe/Tallinn)" in out


def test_error_state_shows_raw_message_and_hint() -> None:
    out = _render(BoardState.failed('{"error":"Missing TRANSITLAND_API_KEY"}'))

    assert 'Error: {"error":"Missing TRANSITLAND_API_KEY"}' in out
    assert ERROR_HINT in out
    assert LOADING_TEXT not in out


def test_failed_without_message_says_unknown_error() -> None:
    assert BoardState.failed("").error == "Unknown error"


def test_empty_day_message() -> None:
    out = _render(BoardState.loaded(()))

    assert EMPTY_TEXT in out


def test_departures_are_listed_in_order_with_minutes_only() -> None:
    state = BoardState.loaded(
        (
            Departure("14:32:00", "15:10:00", route_name="R11", headsign="Klooga"),
            Departure("15:02:00", "15:40:00", route_onestop_id="r-ud9-r12"),
        )
    )

    lines = _render(state).splitlines()
    first = lines.index("Departs 14:32  Arrives 15:10  R11  Klooga")
    second = lines.index("Departs 15:02  Arrives 15:40  r-ud9-r12")

    assert first < second
    assert EMPTY_TEXT not in lines


def test_render_departure_without_route_or_headsign() -> None:
    assert render_departure(Departure("06:01:30", "06:40:00")) == "Departs 06:01  Arrives 06:40"
