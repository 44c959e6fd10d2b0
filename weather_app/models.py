"""Pydantic models for the weather page and JSON API."""

from pydantic import BaseModel, ConfigDict


class Coordinates(BaseModel):
    """Provider `coord` object, passed through unchanged."""
    model_config = ConfigDict(frozen=True)

    lat: float
    lon: float


class WeatherResult(BaseModel):
    """Presentation-ready current weather for one city."""
    model_config = ConfigDict(frozen=True)

    city: str
    country: str
    temperature: int  # °C, rounded
    feels_like: int  # °C, rounded
    description: str
    icon: str
    humidity: int | float  # %
    wind: int | float  # provider units (m/s for metric)
    pressure: int | float  # provider units (hPa)
    sunrise: str  # local time of day
    sunset: str
    coordinates: Coordinates


class WeatherView(BaseModel):
    """What the index page renders: a result, an error, or neither."""
    weather: WeatherResult | None = None
    error: str | None = None
