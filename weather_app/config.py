"""Service configuration pulled from the environment (and .env) via pydantic."""
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="weather_app/config")

OPENWEATHER_CURRENT_URL = "https://api.openweathermap.org/data/2.5/weather"
DEFAULT_PORT = 3000


class Settings(BaseSettings):
    """Environment-driven configuration for the weather lookup service."""
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    openweather_api_key: str | None = None
    openweather_base_url: str = OPENWEATHER_CURRENT_URL
    port: int = DEFAULT_PORT
    # None keeps the HTTP client's default (requests: wait indefinitely).
    request_timeout_seconds: float | None = Field(
        default=None,
        validation_alias=AliasChoices("weather_request_timeout_seconds", "request_timeout_seconds"),
    )
    # None renders sunrise/sunset in the server's local time.
    display_timezone: str | None = Field(
        default=None,
        validation_alias=AliasChoices("weather_display_timezone", "display_timezone"),
    )
    log_level: str = "INFO"

    @field_validator("openweather_base_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the provider URL so query strings attach cleanly."""
        return str(v).rstrip("/")

    @field_validator("display_timezone", mode="after")
    @classmethod
    def check_timezone(cls, v: str | None) -> str | None:
        """Reject timezone names zoneinfo cannot resolve."""
        if v is None:
            return v
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown timezone: {v}")
        return v

    @property
    def display_tz(self) -> ZoneInfo | None:
        """ZoneInfo for display_timezone, or None for server local time."""
        return ZoneInfo(self.display_timezone) if self.display_timezone else None


@lru_cache
def get_settings() -> Settings:
    """Return the process settings; used as a FastAPI dependency."""
    return Settings()


if __name__ == "__main__":
    logger.logger.setLevel("DEBUG")
    logger.debug(f"Loaded settings: {get_settings().model_dump_json(indent=4, exclude={'openweather_api_key'})}")
