"""Tests for the resolution pipeline and its formatting helpers."""
import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock

from weather_app.config import settings
from weather_app.models import (
    Coordinates,
    CurrentConditions,
    NotFound,
    Stage,
    Success,
    UpstreamFailure,
)
from weather_app.services.openmeteo import CityNotFound, UpstreamError
from weather_app.services.pipeline import (
    WeatherPipeline,
    build_pipeline,
    display_text,
    format_conditions,
    format_number,
)


def _make_pipeline(coords=None, conditions=None, resolve_error=None, fetch_error=None):
    resolver = MagicMock()
    resolver.resolve = AsyncMock(return_value=coords, side_effect=resolve_error)
    fetcher = MagicMock()
    fetcher.fetch = AsyncMock(return_value=conditions, side_effect=fetch_error)
    return WeatherPipeline(resolver, fetcher), resolver, fetcher


# ---------------------------------------------------------------------------
# Sequencing and outcome mapping
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_run_success():
    coords = Coordinates(latitude=52.52, longitude=13.405)
    pipeline, resolver, fetcher = _make_pipeline(
        coords=coords, conditions=CurrentConditions(temperature=21.5, wind_speed=10.0)
    )

    outcome = await pipeline.run("Berlin")

    assert outcome == Success(temperature="21.5°C", windspeed="10 km/h")
    resolver.resolve.assert_awaited_once_with("Berlin")
    fetcher.fetch.assert_awaited_once_with(coords)


@pytest.mark.asyncio
@pytest.mark.parametrize("city", ["Atlantis", "", "  lower case  "])
async def test_run_not_found_keeps_city(city):
    pipeline, _, fetcher = _make_pipeline(resolve_error=CityNotFound(city))

    outcome = await pipeline.run(city)

    assert outcome == NotFound(city)
    fetcher.fetch.assert_not_awaited()


@pytest.mark.asyncio
async def test_run_geocoding_failure_never_fetches():
    pipeline, _, fetcher = _make_pipeline(resolve_error=UpstreamError(Stage.GEOCODING, "timeout"))

    outcome = await pipeline.run("Berlin")

    assert outcome == UpstreamFailure(Stage.GEOCODING)
    assert fetcher.fetch.await_count == 0


@pytest.mark.asyncio
async def test_run_forecast_failure():
    pipeline, _, _ = _make_pipeline(
        coords=Coordinates(latitude=1.0, longitude=2.0),
        fetch_error=UpstreamError(Stage.FORECAST, "502 Bad Gateway"),
    )

    outcome = await pipeline.run("Berlin")

    assert outcome == UpstreamFailure(Stage.FORECAST)


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "value, expected",
    [
        (21.5, "21.5"),
        (10.0, "10"),
        (18.3, "18.3"),
        (-4.25, "-4.25"),
        (0.1 + 0.2, "0.30000000000000004"),
        (100.0, "100"),
        (0.00001, "0.00001"),
        (3, "3"),
    ],
)
def test_format_number_is_literal(value, expected):
    assert format_number(value) == expected


def test_format_conditions_with_and_without_wind():
    assert format_conditions(CurrentConditions(temperature=21.5, wind_speed=10.0)) == Success("21.5°C", "10 km/h")
    assert format_conditions(CurrentConditions(temperature=18.3)) == Success("18.3°C", None)


def test_display_text_variants():
    assert display_text("Berlin", Success("18.3°C")) == "The current temperature in Berlin is 18.3°C"
    assert display_text("Atlantis", NotFound("Atlantis")) == "Could not find a city named 'Atlantis'"
    assert display_text("Berlin", UpstreamFailure(Stage.GEOCODING)) == "Error fetching geocoding data"
    assert display_text("Berlin", UpstreamFailure(Stage.FORECAST)) == "Error fetching forecast data"


# ---------------------------------------------------------------------------
# Unexpected errors stay inside the pipeline
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_run_unexpected_geocoding_error_is_upstream_failure():
    pipeline, _, fetcher = _make_pipeline(resolve_error=RuntimeError("boom"))

    outcome = await pipeline.run("Berlin")

    assert outcome == UpstreamFailure(Stage.GEOCODING)
    fetcher.fetch.assert_not_awaited()


@pytest.mark.asyncio
async def test_run_unexpected_forecast_error_is_upstream_failure():
    pipeline, _, _ = _make_pipeline(
        coords=Coordinates(latitude=1.0, longitude=2.0),
        fetch_error=KeyError("current"),
    )

    outcome = await pipeline.run("Berlin")

    assert outcome == UpstreamFailure(Stage.FORECAST)


@pytest.mark.asyncio
async def test_run_oversized_city_is_geocoding_failure():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"results": []})

    pipeline = build_pipeline(settings, transport=httpx.MockTransport(handler))

    outcome = await pipeline.run("x" * 70000)

    assert outcome == UpstreamFailure(Stage.GEOCODING)
    assert requests == []
