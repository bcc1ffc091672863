import asyncio
from datetime import datetime, timezone

import httpx
import pytest

from app.application.exceptions import ForecastProviderError
from app.infrastructure.weather.openweather_client import OpenWeatherForecastProvider

FORECAST_BODY = {
    "cod": "200",
    "list": [
        {"dt": 1766642400, "main": {"temp": 27.1}, "weather": [{"main": "Clear", "description": "clear sky"}]},
        {"dt": 1766653200, "main": {"temp": 29.8}, "weather": [{"main": "Rain", "description": "light rain"}]},
        {"main": {"temp": 20.0}, "weather": []},
        {"dt": 1766664000, "weather": []},
    ],
}


def _provider(handler, api_key: str = "test-key") -> OpenWeatherForecastProvider:
    return OpenWeatherForecastProvider(
        api_key=api_key,
        base_url="https://weather.test/data/2.5/",
        timeout=5.0,
        transport=httpx.MockTransport(handler),
    )


def test_parses_forecast_list():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=FORECAST_BODY)

    samples = asyncio.run(_provider(handler).fetch_forecast("Mumbai,IN"))

    assert seen[0].url.path == "/data/2.5/forecast"
    assert seen[0].url.params["q"] == "Mumbai,IN"
    assert seen[0].url.params["units"] == "metric"
    assert seen[0].url.params["appid"] == "test-key"

    assert len(samples) == 3
    assert samples[0].timestamp_utc == datetime.fromtimestamp(1766642400, tz=timezone.utc)
    assert samples[0].condition_text == "clear sky"
    assert samples[0].temperature_celsius == 27.1
    assert samples[0].raw == FORECAST_BODY["list"][0]
    assert samples[1].condition_text == "light rain"
    assert samples[2].condition_text is None
    assert samples[2].temperature_celsius is None


def test_error_status_raises_provider_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"cod": 401, "message": "Invalid API key"})

    with pytest.raises(ForecastProviderError):
        asyncio.run(_provider(handler).fetch_forecast("Mumbai,IN"))


def test_network_error_raises_provider_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ForecastProviderError):
        asyncio.run(_provider(handler).fetch_forecast("Mumbai,IN"))


def test_missing_api_key():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    with pytest.raises(ForecastProviderError, match="not configured"):
        asyncio.run(_provider(handler, api_key="").fetch_forecast("Mumbai,IN"))


def test_empty_list():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"cod": "200", "list": []})

    assert asyncio.run(_provider(handler).fetch_forecast("Nowhere")) == []
