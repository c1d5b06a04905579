from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # App
    app_name: str = "weather-app"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = Field(3000, ge=0, le=65535)
    static_dir: str = "static"

    # Provider
    geocoding_url: str = "https://geocoding-api.open-meteo.com/v1"
    forecast_url: str = "https://api.open-meteo.com/v1"
    http_timeout_seconds: float = 5.0

    # Desktop
    poll_interval_ms: int = 100


settings = Settings()
