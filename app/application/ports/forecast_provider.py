from __future__ import annotations

from abc import ABC, abstractmethod

from app.domain.entities.weather import ForecastSample


class ForecastProviderPort(ABC):
    @abstractmethod
    async def fetch_forecast(self, location: str) -> list[ForecastSample]:
        """Fetch time-ordered forecast samples for a location.

        Raises ForecastProviderError when the provider is unreachable or unconfigured.
        """
        raise NotImplementedError
