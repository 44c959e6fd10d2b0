"""Single-shot client for the OpenWeatherMap current-weather endpoint."""
from __future__ import annotations

from typing import Any, Dict, Optional

import requests

from weather_app.config import OPENWEATHER_CURRENT_URL
from weather_app.errors import MalformedResponse, NetworkFailure, ProviderRejected
from utils.logging_utils import get_tagged_logger, mask_url_secrets
logger = get_tagged_logger(__name__, tag='openweather_client')

# Shared across requests; requests.Session is safe for concurrent simple GETs.
session = requests.Session()

DEFAULT_UNITS = "metric"


def build_query_params(city: str, api_key: str | None, units: str = DEFAULT_UNITS) -> Dict[str, Any]:
    """Query string for a current-weather lookup by city name."""
    return {
        "q": city,
        "units": units,
        "appid": api_key,
    }


def fetch_current_weather(
    city: str,
    *,
    api_key: str | None,
    base_url: str = OPENWEATHER_CURRENT_URL,
    timeout: Optional[float] = None,
    http_session: Optional[requests.Session] = None,
) -> Dict[str, Any]:
    """
    GET the provider's current weather for `city` and return the decoded body.

    Exactly one attempt is made. `timeout=None` leaves the HTTP client's own
    default in place. Failures are raised as WeatherLookupError subclasses:
    NetworkFailure, ProviderRejected or MalformedResponse.
    """
    if not city or not city.strip():
        raise ProviderRejected("City name is blank")

    http = http_session or session
    params = build_query_params(city, api_key)

    try:
        resp = http.get(base_url, params=params, timeout=timeout)
    except requests.exceptions.RequestException as exc:
        raise NetworkFailure(f"Request to weather provider failed: {exc}") from exc

    url = mask_url_secrets(getattr(resp, "url", base_url) or base_url)
    status_code = getattr(resp, "status_code", None)
    logger.debug("OpenWeather response", extra={"url": url, "status": status_code})

    try:
        resp.raise_for_status()
    except requests.exceptions.HTTPError as exc:
        raise ProviderRejected(
            f"Weather provider returned HTTP {status_code} for {url}",
            status_code=status_code,
        ) from exc

    try:
        data = resp.json()
    except ValueError as exc:
        raise MalformedResponse(f"Weather provider body is not JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise MalformedResponse(f"Expected a JSON object, got {type(data).__name__}")

    return data
