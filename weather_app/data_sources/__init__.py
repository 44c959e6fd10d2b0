"""Outbound weather provider access."""

from .openweather_client import build_query_params, fetch_current_weather
from .factory import get_http_session

__all__ = [
    "build_query_params",
    "fetch_current_weather",
    "get_http_session",
]
