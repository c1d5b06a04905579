import logging
from pathlib import Path

import uvicorn
from fastapi import FastAPI, Response, status
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from weather_app.config import settings
from weather_app.logging_config import setup_logging
from weather_app.models import NotFound, Success, WeatherResponse
from weather_app.services.pipeline import build_pipeline

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name)

pipeline = build_pipeline(settings)


@app.get("/health")
def health():
    return {"status": "ok", "service": settings.app_name}


@app.get(
    "/api/weather/{city}",
    response_model=WeatherResponse,
    responses={404: {"description": "City not found"}, 500: {"description": "Upstream failure"}},
)
async def weather_api(city: str):
    outcome = await pipeline.run(city)

    if isinstance(outcome, Success):
        # the HTTP surface always asks for wind speed
        return WeatherResponse(temperature=outcome.temperature, windspeed=outcome.windspeed or "")
    if isinstance(outcome, NotFound):
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    logger.error("Weather lookup for %r failed at %s stage", city, outcome.stage.value)
    return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


# ── Frontend ─────────────────────────────────────────────────────────────────

_static_dir = Path(settings.static_dir)

if _static_dir.is_dir():
    app.mount("/", StaticFiles(directory=str(_static_dir), html=True), name="static")
else:
    @app.get("/")
    def root():
        return JSONResponse({"service": settings.app_name, "docs": "/docs"})


def serve() -> None:
    setup_logging()
    logger.info("Weather app listening on http://%s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    serve()
