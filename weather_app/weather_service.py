"""Turn a city name into the page model: a WeatherResult or the generic error."""
from __future__ import annotations

import datetime as dt
import math
from decimal import ROUND_FLOOR, Decimal
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo

import requests

from weather_app.config import Settings
from weather_app.data_sources.openweather_client import fetch_current_weather
from weather_app.errors import GENERIC_ERROR_MESSAGE, MalformedResponse, WeatherLookupError
from weather_app.models import Coordinates, WeatherResult, WeatherView
from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="weather_app/weather_service")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward +inf (21.5 -> 22, -2.5 -> -2)."""
    if isinstance(value, float) and not math.isfinite(value):
        raise MalformedResponse(f"Non-finite temperature: {value}")
    return int((Decimal(str(value)) + Decimal("0.5")).to_integral_value(rounding=ROUND_FLOOR))


def format_local_time(epoch_seconds: float, tz: Optional[ZoneInfo] = None) -> str:
    """Render epoch seconds as a time of day like '6:42:13 AM'.

    `tz=None` uses the server's local timezone. NaN, infinite and
    out-of-range values raise MalformedResponse.
    """
    if isinstance(epoch_seconds, float) and not math.isfinite(epoch_seconds):
        raise MalformedResponse(f"Non-finite timestamp: {epoch_seconds}")
    try:
        if tz is None:
            moment = dt.datetime.fromtimestamp(epoch_seconds).astimezone()
        else:
            moment = dt.datetime.fromtimestamp(epoch_seconds, tz=tz)
    except (OverflowError, OSError, ValueError) as exc:
        raise MalformedResponse(f"Timestamp out of range: {epoch_seconds}") from exc
    hour = moment.hour % 12 or 12
    return f"{hour}:{moment:%M:%S} {'AM' if moment.hour < 12 else 'PM'}"


def _number(value: Any, field: str) -> int | float:
    """Accept ints and floats only (bool is not a measurement)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedResponse(f"Field '{field}' is not numeric: {value!r}")
    return value


def _text(value: Any, field: str) -> str:
    if not isinstance(value, str):
        raise MalformedResponse(f"Field '{field}' is not a string: {value!r}")
    return value


def build_weather_result(payload: Dict[str, Any], *, tz: Optional[ZoneInfo] = None) -> WeatherResult:
    """
    Map an OpenWeather current-weather payload to a WeatherResult.

    Reads name, sys.country, main.temp, main.feels_like, weather[0].description,
    weather[0].icon, main.humidity, wind.speed, main.pressure, sys.sunrise,
    sys.sunset and coord. Any missing or mistyped field raises MalformedResponse.
    """
    try:
        main = payload["main"]
        sys_block = payload["sys"]
        condition = payload["weather"][0]
        coord = payload["coord"]
        return WeatherResult(
            city=_text(payload["name"], "name"),
            country=_text(sys_block["country"], "sys.country"),
            temperature=round_half_up(_number(main["temp"], "main.temp")),
            feels_like=round_half_up(_number(main["feels_like"], "main.feels_like")),
            description=_text(condition["description"], "weather[0].description"),
            icon=_text(condition["icon"], "weather[0].icon"),
            humidity=_number(main["humidity"], "main.humidity"),
            wind=_number(payload["wind"]["speed"], "wind.speed"),
            pressure=_number(main["pressure"], "main.pressure"),
            sunrise=format_local_time(_number(sys_block["sunrise"], "sys.sunrise"), tz),
            sunset=format_local_time(_number(sys_block["sunset"], "sys.sunset"), tz),
            coordinates=Coordinates(
                lat=_number(coord["lat"], "coord.lat"),
                lon=_number(coord["lon"], "coord.lon"),
            ),
        )
    except (KeyError, IndexError, TypeError) as exc:
        raise MalformedResponse(f"Weather payload is missing or mistyped: {exc!r}") from exc


def lookup_weather(
    city: str,
    settings: Settings,
    *,
    http_session: Optional[requests.Session] = None,
) -> WeatherView:
    """
    Fetch and map current weather for `city`.

    Returns WeatherView(weather=<result>) on success. Every WeatherLookupError
    becomes WeatherView(error=GENERIC_ERROR_MESSAGE); the failure kind is only
    visible in the logs.
    """
    try:
        payload = fetch_current_weather(
            city,
            api_key=settings.openweather_api_key,
            base_url=settings.openweather_base_url,
            timeout=settings.request_timeout_seconds,
            http_session=http_session,
        )
        result = build_weather_result(payload, tz=settings.display_tz)
    except WeatherLookupError as exc:
        logger.warning(
            f"Weather lookup failed ({exc.kind}): {exc}",
            extra={"city": city, "kind": exc.kind},
        )
        return WeatherView(weather=None, error=GENERIC_ERROR_MESSAGE)

    logger.info(f"Weather lookup succeeded for {result.city}, {result.country}")
    return WeatherView(weather=result, error=None)
