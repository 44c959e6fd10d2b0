"""FastAPI application: the weather page, its static assets and the JSON API."""

from pathlib import Path

import requests
from fastapi import Depends, FastAPI, Form, Request
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from .api import router as api_router
from .config import Settings, get_settings
from .data_sources import get_http_session
from .models import WeatherView
from .weather_service import lookup_weather

app = FastAPI(title="Weather Lookup")

_ROOT_DIR = Path(__file__).resolve().parent.parent
_STATIC_DIR = _ROOT_DIR / "static"
_TEMPLATES_DIR = _ROOT_DIR / "templates"

templates = Jinja2Templates(directory=str(_TEMPLATES_DIR))

app.mount("/static", StaticFiles(directory=_STATIC_DIR), name="static")


def render_index(request: Request, view: WeatherView) -> HTMLResponse:
    """Render the single page with either a result or an error (or neither)."""
    return templates.TemplateResponse(
        request,
        "index.html",
        {"weather": view.weather, "error": view.error},
    )


@app.get("/", response_class=HTMLResponse)
def index(request: Request):
    """Empty search form."""
    return render_index(request, WeatherView())


@app.post("/weather", response_class=HTMLResponse)
def weather(
    request: Request,
    city: str = Form(default=""),
    settings: Settings = Depends(get_settings),
    http_session: requests.Session = Depends(get_http_session),
):
    """Look up `city` and render the result or the generic error."""
    view = lookup_weather(city, settings, http_session=http_session)
    return render_index(request, view)


app.include_router(api_router, prefix="/v1")
