"""Hands out the HTTP session used for provider calls."""

from __future__ import annotations

import requests

from weather_app.data_sources import openweather_client


def get_http_session() -> requests.Session:
    """FastAPI dependency returning the shared provider session.

    Looked up at call time so tests can swap `openweather_client.session`.
    """
    return openweather_client.session
