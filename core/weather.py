"""
OpenWeather current-conditions client.
"""
from __future__ import annotations
from typing import Optional
import logging

import requests

from core.config import Settings
from core.errors import ConfigurationError, ProviderError
from core.models import Weather

logger = logging.getLogger(__name__)

WEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"


class WeatherClient:
    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        self.settings = settings
        self._session = session or requests.Session()

    def current(self,
                lat: Optional[float] = None,
                lon: Optional[float] = None,
                city: Optional[str] = None) -> Weather:
        """
        Current weather for coordinates (preferred) or a city name.

        Raises:
            ValueError: neither a full coordinate pair nor a city was given.
            ConfigurationError: no API key configured.
            ProviderError: the provider failed or returned an unusable payload.
        """
        if (lat is None or lon is None) and not city:
            raise ValueError("Either coordinates (lat, lon) or city name is required")
        if not self.settings.weather_configured():
            logger.error("[weather] API key not configured")
            raise ConfigurationError(
                "Weather API key not configured. Please check your .env file.",
                details="Missing OPENWEATHER_API_KEY",
            )

        params = {"units": "metric", "appid": self.settings.OPENWEATHER_API_KEY}
        if lat is not None and lon is not None:
            params.update(lat=lat, lon=lon)
        else:
            params["q"] = city

        try:
            resp = self._session.get(WEATHER_URL, params=params, timeout=self.settings.HTTP_TIMEOUT)
        except requests.RequestException as e:
            logger.exception("[weather] request failed")
            raise ProviderError("Failed to fetch weather data", details=str(e)) from e
        if not resp.ok:
            logger.error(f"[weather] status={resp.status_code} body={resp.text[:200]}")
            raise ProviderError("Failed to fetch weather data")

        try:
            data = resp.json()
            conditions = data["weather"][0]
            return Weather(
                temperature=round(float(data["main"]["temp"])),
                condition=conditions["main"],
                location=data.get("name", ""),
                icon=conditions.get("icon", ""),
            )
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.exception("[weather] unexpected payload")
            raise ProviderError("Failed to fetch weather data") from e
