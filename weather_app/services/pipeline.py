import logging
from decimal import Decimal
from typing import Sequence

from weather_app.config import Settings
from weather_app.models import (
    CurrentConditions,
    NotFound,
    ResolutionOutcome,
    Stage,
    Success,
    UpstreamFailure,
)
from weather_app.services.openmeteo import (
    DEFAULT_CURRENT_FIELDS,
    CityNotFound,
    ForecastClient,
    GeocodingClient,
    UpstreamError,
)

logger = logging.getLogger(__name__)


def format_number(value: float) -> str:
    """Shortest round-trip decimal form, no exponent, no trailing ``.0``."""
    return format(Decimal(repr(float(value))).normalize(), "f")


def format_conditions(conditions: CurrentConditions) -> Success:
    windspeed = None
    if conditions.wind_speed is not None:
        windspeed = f"{format_number(conditions.wind_speed)} km/h"
    return Success(temperature=f"{format_number(conditions.temperature)}°C", windspeed=windspeed)


def display_text(city: str, outcome: ResolutionOutcome) -> str:
    if isinstance(outcome, Success):
        return f"The current temperature in {city} is {outcome.temperature}"
    if isinstance(outcome, NotFound):
        return f"Could not find a city named '{outcome.city}'"
    return f"Error fetching {outcome.stage.value} data"


class WeatherPipeline:
    """Geocodes a city, then reads its current conditions.

    ``run`` never raises for lookup failures: every stage error comes back as a
    ``NotFound`` or ``UpstreamFailure`` outcome.
    """

    def __init__(self, resolver, fetcher):
        self.resolver = resolver
        self.fetcher = fetcher

    async def run(self, city: str) -> ResolutionOutcome:
        try:
            coords = await self.resolver.resolve(city)
        except CityNotFound:
            logger.info("No geocoding match for %r", city)
            return NotFound(city)
        except UpstreamError as exc:
            logger.warning("Geocoding failed for %r: %s", city, exc.detail)
            return UpstreamFailure(Stage.GEOCODING)
        except Exception:
            logger.exception("Unexpected geocoding error for %r", city)
            return UpstreamFailure(Stage.GEOCODING)

        try:
            conditions = await self.fetcher.fetch(coords)
        except UpstreamError as exc:
            logger.warning(
                "Forecast failed for %r at (%s, %s): %s",
                city, coords.latitude, coords.longitude, exc.detail,
            )
            return UpstreamFailure(Stage.FORECAST)
        except Exception:
            logger.exception("Unexpected forecast error for %r", city)
            return UpstreamFailure(Stage.FORECAST)

        return format_conditions(conditions)


def build_pipeline(
    settings: Settings,
    current_fields: Sequence[str] = DEFAULT_CURRENT_FIELDS,
    transport=None,
) -> WeatherPipeline:
    return WeatherPipeline(
        GeocodingClient(settings.geocoding_url, settings.http_timeout_seconds, transport),
        ForecastClient(
            settings.forecast_url,
            settings.http_timeout_seconds,
            transport,
            current_fields=current_fields,
        ),
    )
