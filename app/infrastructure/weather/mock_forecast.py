from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from app.application.ports.forecast_provider import ForecastProviderPort
from app.domain.entities.weather import ForecastSample


class MockForecastProvider(ForecastProviderPort):
    """Offline provider for local runs: 3-hourly samples over the next five days."""

    def __init__(
        self,
        samples: list[ForecastSample] | None = None,
        description: str = "clear sky",
        temperature: float = 27.0,
        now: datetime | None = None,
    ) -> None:
        self._samples = samples
        self._description = description
        self._temperature = temperature
        self._now = now
        self._logger = logging.getLogger(__name__)

    async def fetch_forecast(self, location: str) -> list[ForecastSample]:
        self._logger.info("Mock forecast served", extra={"location": location})
        if self._samples is not None:
            return list(self._samples)

        now = self._now or datetime.now(timezone.utc)
        start = now.replace(hour=(now.hour // 3) * 3, minute=0, second=0, microsecond=0)
        samples: list[ForecastSample] = []
        for step in range(40):
            ts = start + timedelta(hours=3 * step)
            samples.append(
                ForecastSample(
                    timestamp_utc=ts,
                    condition_text=self._description,
                    temperature_celsius=self._temperature,
                    raw={
                        "dt": int(ts.timestamp()),
                        "main": {"temp": self._temperature},
                        "weather": [{"description": self._description}],
                    },
                )
            )
        return samples
