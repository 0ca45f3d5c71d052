from __future__ import annotations

from dataclasses import dataclass

from .geo import GeoPoint


@dataclass(frozen=True, slots=True)
class Stop:
    onestop_id: str | None
    name: str
    location: GeoPoint | None = None
