from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from app.application.exceptions import NoForecastDataError
from app.application.use_cases.forecast_resolver import (
    classify_condition,
    resolve_forecast,
    select_nearest_sample,
    target_noon,
)
from app.domain.entities.weather import ForecastSample, WeatherCondition

TARGET = date(2025, 12, 25)
NOON_UTC = datetime(2025, 12, 25, 12, 0, tzinfo=timezone.utc)


def _sample(offset_hours: float, text: str = "clear sky", temp: float | None = 25.0) -> ForecastSample:
    ts = NOON_UTC + timedelta(hours=offset_hours)
    return ForecastSample(
        timestamp_utc=ts,
        condition_text=text,
        temperature_celsius=temp,
        raw={"dt": int(ts.timestamp())},
    )


def test_target_noon_is_local_noon():
    noon = target_noon(TARGET, ZoneInfo("Asia/Kolkata"))
    assert noon.astimezone(timezone.utc) == datetime(2025, 12, 25, 6, 30, tzinfo=timezone.utc)


def test_nearest_sample_wins():
    samples = [_sample(-3, "a"), _sample(-1, "b"), _sample(2, "c")]
    assert select_nearest_sample(samples, NOON_UTC).condition_text == "b"


def test_input_order_does_not_matter_for_distinct_diffs():
    samples = [_sample(2, "c"), _sample(-3, "a"), _sample(-1, "b")]
    assert select_nearest_sample(samples, NOON_UTC).condition_text == "b"


def test_tie_keeps_first_sample():
    samples = [_sample(1.5, "later"), _sample(-1.5, "earlier")]
    assert select_nearest_sample(samples, NOON_UTC).condition_text == "later"


def test_empty_list_signals_no_data():
    with pytest.raises(NoForecastDataError):
        resolve_forecast([], TARGET, ZoneInfo("UTC"))


def test_condition_precedence():
    assert classify_condition("sunny with light rain") == WeatherCondition.SUNNY
    assert classify_condition("Clear Sky") == WeatherCondition.SUNNY
    assert classify_condition("heavy storm") == WeatherCondition.RAINY
    assert classify_condition("light rain") == WeatherCondition.RAINY
    assert classify_condition("overcast") == WeatherCondition.OTHER
    assert classify_condition(None) == WeatherCondition.OTHER


def test_snapshot_carries_sample_fields():
    snapshot = resolve_forecast([_sample(0, "moderate rain", 21.5)], TARGET, ZoneInfo("UTC"))
    assert snapshot.condition == WeatherCondition.RAINY
    assert snapshot.description == "moderate rain"
    assert snapshot.temperature == 21.5
    assert snapshot.raw == {"dt": int(NOON_UTC.timestamp())}


def test_missing_description_and_temperature():
    snapshot = resolve_forecast([_sample(0, "", None)], TARGET, ZoneInfo("UTC"))
    assert snapshot.description == "N/A"
    assert snapshot.temperature is None
    assert snapshot.condition == WeatherCondition.OTHER
