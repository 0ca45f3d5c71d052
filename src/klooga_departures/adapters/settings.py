from __future__ import annotations

import json
import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo

from pydantic import BaseModel, Field

from klooga_departures.domain.exceptions import MissingApiKey
from klooga_departures.domain.models import (
    GeoPoint,
    PlaceholderStation,
    RouteChoice,
    StationDirectory,
    default_station_directory,
)

DEFAULT_V1_URL = "https://transit.land/api/v1"
DEFAULT_V2_URL = "https://transit.land/api/v2/rest"
DEFAULT_TZ_LABEL = "Europe/Tallinn"


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_str(name: str) -> str | None:
    raw = os.getenv(name)
    if raw is None:
        return None
    return raw.strip() or None


@dataclass(frozen=True, slots=True)
class RuntimeSettings:
    api_key: str | None
    tz_label: str
    v1_url: str
    v2_url: str
    timeout_s: float | None
    per_page: int
    station_directory_file: str | None
    reveal_errors: bool

    @staticmethod
    def from_env() -> "RuntimeSettings":
        timeout_raw = _env_str("TRANSITLAND_TIMEOUT_S")
        per_page_raw = _env_str("TRANSITLAND_PER_PAGE")

        return RuntimeSettings(
            api_key=_env_str("TRANSITLAND_API_KEY"),
            tz_label=_env_str("TZ_LABEL") or DEFAULT_TZ_LABEL,
            v1_url=(_env_str("TRANSITLAND_V1_URL") or DEFAULT_V1_URL).rstrip("/"),
            v2_url=(_env_str("TRANSITLAND_V2_URL") or DEFAULT_V2_URL).rstrip("/"),
            timeout_s=float(timeout_raw) if timeout_raw else None,
            per_page=int(per_page_raw) if per_page_raw else 200,
            station_directory_file=_env_str("STATION_DIRECTORY_FILE"),
            reveal_errors=_env_bool("KLOOGA_REVEAL_ERRORS", False),
        )

    def require_api_key(self) -> str:
        """Return the Transitland key.

        The key is checked per request, not at startup, so a missing key only
        fails the requests that need it.
        """

        if not self.api_key:
            raise MissingApiKey("Missing TRANSITLAND_API_KEY")
        return self.api_key

    def zone(self) -> ZoneInfo:
        return ZoneInfo(self.tz_label)

    def now(self) -> datetime:
        return datetime.now(self.zone())


class _GeoPointFile(BaseModel):
    lat: float = Field(..., ge=-90.0, le=90.0)
    lon: float = Field(..., ge=-180.0, le=180.0)


class _PlaceholderFile(BaseModel):
    token: str = Field(..., min_length=1)
    location: _GeoPointFile
    radius_m: int = Field(800, gt=0)
    name_hint: str = ""


class _RouteFile(BaseModel):
    label: str
    origin: str = Field(..., alias="from", min_length=1)
    destination: str = Field(..., alias="to", min_length=1)


class StationDirectoryFile(BaseModel):
    """On-disk form of the station directory.

    Example::

        {
          "placeholder": {
            "token": "LILLEKYLA",
            "location": {"lat": 59.42484, "lon": 24.72806},
            "radius_m": 800,
            "name_hint": "lille"
          },
          "routes": [
            {"label": "Lilleküla → Klooga", "from": "LILLEKYLA",
             "to": "s-ud932p00sp-kloogaraudteejaam"}
          ]
        }
    """

    placeholder: _PlaceholderFile
    routes: list[_RouteFile] = []

    def to_directory(self) -> StationDirectory:
        p = self.placeholder
        return StationDirectory(
            placeholder=PlaceholderStation(
                token=p.token,
                location=GeoPoint(lat=p.location.lat, lon=p.location.lon),
                radius_m=p.radius_m,
                name_hint=p.name_hint,
            ),
            routes=tuple(
                RouteChoice(label=r.label, origin=r.origin, destination=r.destination)
                for r in self.routes
            ),
        )


def load_station_directory(settings: RuntimeSettings) -> StationDirectory:
    if not settings.station_directory_file:
        return default_station_directory()

    raw = json.loads(Path(settings.station_directory_file).read_text(encoding="utf-8"))
    return StationDirectoryFile.model_validate(raw).to_directory()
