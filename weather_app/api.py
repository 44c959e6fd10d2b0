"""JSON API mirroring the weather page."""

import requests
from fastapi import APIRouter, Depends, Query

from .config import Settings, get_settings
from .data_sources import get_http_session
from .models import WeatherView
from .weather_service import lookup_weather
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="weather_app/api")

router = APIRouter()


@router.get("/weather", response_model=WeatherView)
def get_weather(
    city: str = Query(default=""),
    settings: Settings = Depends(get_settings),
    http_session: requests.Session = Depends(get_http_session),
):
    """Return the same view model the page renders, as JSON.

    Always 200: failures show up in `error`, as they do on the page.
    """
    logger.debug(f"API weather lookup for {city!r}")
    return lookup_weather(city, settings, http_session=http_session)


@router.get("/health")
def health(settings: Settings = Depends(get_settings)):
    """Liveness probe; reports whether a provider key is configured."""
    return {
        "status": "ok",
        "api_key_configured": bool(settings.openweather_api_key),
    }
