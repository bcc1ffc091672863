from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class WeatherCondition(str, Enum):
    SUNNY = "sunny"
    RAINY = "rainy"
    OTHER = "other"


@dataclass(frozen=True)
class ForecastSample:
    timestamp_utc: datetime
    condition_text: str | None = None
    temperature_celsius: float | None = None
    raw: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class WeatherSnapshot:
    raw: dict[str, Any]
    condition: WeatherCondition
    description: str = "N/A"
    temperature: float | None = None  # Celsius
