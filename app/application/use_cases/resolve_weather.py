from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from zoneinfo import ZoneInfo

from app.application.ports.forecast_provider import ForecastProviderPort
from app.application.use_cases.forecast_resolver import resolve_forecast
from app.application.use_cases.seating_advisor import advise_seating
from app.domain.entities.booking import SeatingPreference
from app.domain.entities.weather import WeatherSnapshot


@dataclass(frozen=True)
class WeatherAdvice:
    weather_info: WeatherSnapshot
    seating_suggestion: SeatingPreference
    suggestion_text: str


class ResolveWeatherUseCase:
    def __init__(self, provider: ForecastProviderPort, timezone: ZoneInfo) -> None:
        self._provider = provider
        self._timezone = timezone
        self._logger = logging.getLogger(__name__)

    async def execute(self, target_date: date, location: str) -> WeatherAdvice:
        """Forecast nearest to local noon of `target_date` plus the derived seating advice.

        Raises ForecastProviderError or NoForecastDataError; callers decide how to recover.
        """
        samples = await self._provider.fetch_forecast(location)
        snapshot = resolve_forecast(samples, target_date, self._timezone)
        advice = advise_seating(snapshot.condition)
        self._logger.info(
            "Weather resolved",
            extra={"location": location, "condition": snapshot.condition.value},
        )
        return WeatherAdvice(
            weather_info=snapshot,
            seating_suggestion=advice.suggestion,
            suggestion_text=advice.text,
        )
