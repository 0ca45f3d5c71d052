from __future__ import annotations

from dataclasses import dataclass

from .geo import GeoPoint

KLOOGA = "s-ud932p00sp-kloogaraudteejaam"
KLOOGARANNA = "s-ud91xepqe7-kloogaranna"
LILLEKYLA_TOKEN = "LILLEKYLA"


@dataclass(frozen=True, slots=True)
class PlaceholderStation:
    """A station whose Onestop ID is discovered by a proximity search."""

    token: str
    location: GeoPoint
    radius_m: int
    name_hint: str

    def __post_init__(self) -> None:
        if not self.token:
            raise ValueError("Placeholder token must not be empty")
        if self.radius_m <= 0:
            raise ValueError(f"Invalid search radius: {self.radius_m}")


@dataclass(frozen=True, slots=True)
class RouteChoice:
    label: str
    origin: str
    destination: str


@dataclass(frozen=True, slots=True)
class StationDirectory:
    placeholder: PlaceholderStation
    routes: tuple[RouteChoice, ...] = ()


def default_station_directory() -> StationDirectory:
    """Lilleküla ↔ Klooga / Kloogaranna on the Elron western branch."""

    lillekyla = PlaceholderStation(
        token=LILLEKYLA_TOKEN,
        # Lilleküla halt, coordinates as published on Wikipedia.
        location=GeoPoint(lat=59.42484, lon=24.72806),
        radius_m=800,
        name_hint="lille",
    )
    return StationDirectory(
        placeholder=lillekyla,
        routes=(
            RouteChoice("Lilleküla → Klooga", LILLEKYLA_TOKEN, KLOOGA),
            RouteChoice("Lilleküla → Kloogaranna", LILLEKYLA_TOKEN, KLOOGARANNA),
            RouteChoice("Klooga → Lilleküla", KLOOGA, LILLEKYLA_TOKEN),
            RouteChoice("Kloogaranna → Lilleküla", KLOOGARANNA, LILLEKYLA_TOKEN),
        ),
    )
