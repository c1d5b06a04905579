from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel


# ── Upstream payloads ────────────────────────────────────────────────────────

class GeocodingMatch(BaseModel):
    latitude: float
    longitude: float
    name: Optional[str] = None
    country: Optional[str] = None


class GeocodingPayload(BaseModel):
    results: Optional[List[GeocodingMatch]] = None


class ForecastCurrent(BaseModel):
    temperature_2m: float
    wind_speed_10m: Optional[float] = None


class ForecastPayload(BaseModel):
    current: ForecastCurrent


# ── Pipeline values ──────────────────────────────────────────────────────────

class Coordinates(BaseModel):
    latitude: float
    longitude: float


class CurrentConditions(BaseModel):
    temperature: float
    wind_speed: Optional[float] = None


class Stage(str, Enum):
    GEOCODING = "geocoding"
    FORECAST = "forecast"


@dataclass(frozen=True)
class Success:
    temperature: str
    windspeed: Optional[str] = None


@dataclass(frozen=True)
class NotFound:
    city: str


@dataclass(frozen=True)
class UpstreamFailure:
    stage: Stage


ResolutionOutcome = Union[Success, NotFound, UpstreamFailure]


# ── HTTP surface ─────────────────────────────────────────────────────────────

class WeatherResponse(BaseModel):
    temperature: str
    windspeed: str
