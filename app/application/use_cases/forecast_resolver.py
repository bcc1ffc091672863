from __future__ import annotations

from datetime import date, datetime, time
from typing import Iterable
from zoneinfo import ZoneInfo

from app.application.exceptions import NoForecastDataError
from app.domain.entities.weather import ForecastSample, WeatherCondition, WeatherSnapshot

# Evaluated in order; the first rule with a matching keyword wins.
CONDITION_RULES: tuple[tuple[tuple[str, ...], WeatherCondition], ...] = (
    (("sun", "clear"), WeatherCondition.SUNNY),
    (("rain", "storm"), WeatherCondition.RAINY),
)

UTC = ZoneInfo("UTC")


def target_noon(target_date: date, timezone: ZoneInfo = UTC) -> datetime:
    return datetime.combine(target_date, time(12, 0, 0, 0), tzinfo=timezone)


def select_nearest_sample(samples: Iterable[ForecastSample], noon: datetime) -> ForecastSample:
    """Sample closest to `noon`. On equal distance the earlier sample in input order is kept."""
    best: ForecastSample | None = None
    best_diff: float | None = None

    for sample in samples:
        diff = abs((sample.timestamp_utc - noon).total_seconds())
        if best_diff is None or diff < best_diff:
            best = sample
            best_diff = diff

    if best is None:
        raise NoForecastDataError("No forecast data available for the given date.")
    return best


def classify_condition(description: str | None) -> WeatherCondition:
    text = (description or "").lower()
    for keywords, condition in CONDITION_RULES:
        if any(keyword in text for keyword in keywords):
            return condition
    return WeatherCondition.OTHER


def resolve_forecast(
    samples: Iterable[ForecastSample],
    target_date: date,
    timezone: ZoneInfo = UTC,
) -> WeatherSnapshot:
    best = select_nearest_sample(samples, target_noon(target_date, timezone))
    return WeatherSnapshot(
        raw=dict(best.raw),
        condition=classify_condition(best.condition_text),
        description=best.condition_text or "N/A",
        temperature=best.temperature_celsius,
    )
