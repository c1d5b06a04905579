import logging
from typing import Any, Dict, Optional, Sequence

import httpx
from pydantic import ValidationError

from weather_app.models import (
    Coordinates,
    CurrentConditions,
    ForecastPayload,
    GeocodingPayload,
    Stage,
)

logger = logging.getLogger(__name__)

DEFAULT_CURRENT_FIELDS = ("temperature_2m", "wind_speed_10m")


class WeatherLookupError(Exception):
    pass


class CityNotFound(WeatherLookupError):
    def __init__(self, city: str):
        super().__init__(f"City not found: {city!r}")
        self.city = city


class UpstreamError(WeatherLookupError):
    def __init__(self, stage: Stage, detail: str):
        super().__init__(f"{stage.value} request failed: {detail}")
        self.stage = stage
        self.detail = detail


class _OpenMeteoClient:
    stage: Stage

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout_seconds
        self.transport = transport

    async def _get_json(self, path: str, params: Dict[str, Any]) -> Any:
        url = f"{self.base_url}/{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                r = await client.get(url, params=params)
                r.raise_for_status()
                return r.json()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise UpstreamError(self.stage, str(exc) or exc.__class__.__name__) from exc
        except ValueError as exc:
            raise UpstreamError(self.stage, f"invalid json: {exc}") from exc


class GeocodingClient(_OpenMeteoClient):
    """Resolves a place name to the coordinates of its first geocoding match."""

    stage = Stage.GEOCODING

    async def resolve(self, city: str) -> Coordinates:
        params = {"name": city, "count": 1}
        data = await self._get_json("search", params)
        try:
            payload = GeocodingPayload.model_validate(data)
        except ValidationError as exc:
            raise UpstreamError(self.stage, str(exc)) from exc

        if not payload.results:
            raise CityNotFound(city)

        match = payload.results[0]
        return Coordinates(latitude=match.latitude, longitude=match.longitude)


class ForecastClient(_OpenMeteoClient):
    """Reads the current conditions for a coordinate pair.

    ``current_fields`` selects which Open-Meteo ``current`` variables are
    requested. Every requested variable must be present in the reply.
    """

    stage = Stage.FORECAST

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        current_fields: Sequence[str] = DEFAULT_CURRENT_FIELDS,
    ):
        super().__init__(base_url, timeout_seconds, transport)
        self.current_fields = tuple(current_fields)

    async def fetch(self, coords: Coordinates) -> CurrentConditions:
        params = {
            "latitude": coords.latitude,
            "longitude": coords.longitude,
            "current": ",".join(self.current_fields),
        }
        data = await self._get_json("forecast", params)
        try:
            current = ForecastPayload.model_validate(data).current
        except ValidationError as exc:
            raise UpstreamError(self.stage, str(exc)) from exc

        if "wind_speed_10m" in self.current_fields and current.wind_speed_10m is None:
            raise UpstreamError(self.stage, "missing wind_speed_10m in current block")

        return CurrentConditions(temperature=current.temperature_2m, wind_speed=current.wind_speed_10m)
