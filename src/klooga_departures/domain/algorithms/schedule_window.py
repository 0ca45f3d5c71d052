from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from klooga_departures.domain.models import Departure, Stop

END_OF_SERVICE_DAY = "23:59:59"


def window_start(now: datetime) -> str:
    """Lower departure bound: the current minute with seconds zeroed."""

    return f"{now.hour:02d}:{now.minute:02d}:00"


def departure_window(now: datetime) -> str:
    return f"{window_start(now)},{END_OF_SERVICE_DAY}"


def remaining_departures(
    departures: Iterable[Departure], *, not_before: str
) -> tuple[Departure, ...]:
    """Drop departures before ``not_before`` and sort the rest by departure time.

    ``HH:MM:SS`` is fixed width and zero padded, so string order is time order.
    """

    kept = [d for d in departures if d.origin_departure_time >= not_before]
    kept.sort(key=lambda d: d.origin_departure_time)
    return tuple(kept)


def pick_stop_candidate(stops: Iterable[Stop], name_hint: str) -> Stop | None:
    """First stop whose name contains the hint, else the first stop at all."""

    stops = tuple(stops)
    if not stops:
        return None

    hint = name_hint.lower()
    for stop in stops:
        if hint and hint in (stop.name or "").lower():
            return stop
    return stops[0]
