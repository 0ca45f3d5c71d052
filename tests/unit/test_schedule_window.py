from __future__ import annotations

from datetime import datetime

from klooga_departures.domain.algorithms.schedule_window import (
    departure_window,
    pick_stop_candidate,
    remaining_departures,
    window_start,
)
from klooga_departures.domain.models import Departure, Stop


def _dep(t: str) -> Departure:
    return Departure(origin_departure_time=t, destination_arrival_time=t)


def test_window_start_zeroes_seconds() -> None:
    assert window_start(datetime(2026, 10, 19, 14, 5, 59)) == "14:05:00"
    assert window_start(datetime(2026, 10, 19, 7, 3, 0)) == "07:03:00"


def test_departure_window_runs_to_end_of_day() -> None:
    assert departure_window(datetime(2026, 10, 19, 14, 5, 12)) == "14:05:00,23:59:59"


def test_remaining_departures_filters_past_and_sorts() -> None:
    out = remaining_departures(
        [_dep("15:40:00"), _dep("14:02:00"), _dep("14:05:00"), _dep("09:00:00")],
        not_before="14:05:00",
    )

    assert [d.origin_departure_time for d in out] == ["14:05:00", "15:40:00"]


def test_remaining_departures_keeps_after_midnight_times_last() -> None:
    out = remaining_departures(
        [_dep("24:10:00"), _dep("23:50:00")], not_before="23:00:00"
    )

    assert [d.origin_departure_time for d in out] == ["23:50:00", "24:10:00"]


def test_remaining_departures_is_empty_for_empty_input() -> None:
    assert remaining_departures([], not_before="00:00:00") == ()


def test_pick_stop_candidate_prefers_name_hint_case_insensitive() -> None:
    stops = (
        Stop(onestop_id="s-a", name="Tondi"),
        Stop(onestop_id="s-b", name="LILLEKÜLA"),
        Stop(onestop_id="s-c", name="Lilleküla bussipeatus"),
    )

    assert pick_stop_candidate(stops, "lille") == stops[1]


def test_pick_stop_candidate_falls_back_to_first() -> None:
    stops = (Stop(onestop_id="s-a", name="Tondi"), Stop(onestop_id="s-b", name="Kristiine"))

    assert pick_stop_candidate(stops, "lille") == stops[0]


def test_pick_stop_candidate_none_without_stops() -> None:
    assert pick_stop_candidate((), "lille") is None
