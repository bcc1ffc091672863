from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import httpx

from app.application.exceptions import ForecastProviderError
from app.application.ports.forecast_provider import ForecastProviderPort
from app.core.config import settings
from app.domain.entities.weather import ForecastSample


class OpenWeatherForecastProvider(ForecastProviderPort):
    """5-day / 3-hour forecast from OpenWeatherMap (`/forecast`, metric units)."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key if api_key is not None else settings.WEATHER_API_KEY
        self._base_url = (base_url or settings.WEATHER_API_BASE_URL).rstrip("/")
        self._timeout = timeout or settings.WEATHER_TIMEOUT_SECONDS
        self._transport = transport
        self._logger = logging.getLogger(__name__)

    async def fetch_forecast(self, location: str) -> list[ForecastSample]:
        if not self._api_key:
            raise ForecastProviderError("Weather API key not configured on server.")

        url = f"{self._base_url}/forecast"
        params = {"q": location, "appid": self._api_key, "units": "metric"}
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.get(url, params=params)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            self._logger.error(
                "Forecast request rejected",
                extra={"location": location, "status": e.response.status_code, "error": e.response.text},
            )
            raise ForecastProviderError("Failed to fetch weather data.") from e
        except (httpx.HTTPError, ValueError) as e:
            self._logger.error("Forecast request failed", extra={"location": location, "error": str(e)})
            raise ForecastProviderError("Failed to fetch weather data.") from e

        samples: list[ForecastSample] = []
        for entry in data.get("list") or []:
            sample = _parse_entry(entry)
            if sample is not None:
                samples.append(sample)
        return samples


def _parse_entry(entry: dict[str, Any]) -> ForecastSample | None:
    try:
        timestamp = datetime.fromtimestamp(int(entry["dt"]), tz=timezone.utc)
    except (KeyError, TypeError, ValueError, OverflowError):
        return None

    weather = entry.get("weather") or [{}]
    description = weather[0].get("description") if isinstance(weather[0], dict) else None
    main = entry.get("main") or {}
    temperature = main.get("temp")

    return ForecastSample(
        timestamp_utc=timestamp,
        condition_text=description or None,
        temperature_celsius=float(temperature) if temperature is not None else None,
        raw=dict(entry),
    )
