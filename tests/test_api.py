"""
HTTP tests for /api/bookings and /api/weather.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest
from fastapi.testclient import TestClient

from app.application.exceptions import ForecastProviderError
from app.application.ports.forecast_provider import ForecastProviderPort
from app.application.use_cases.bookings import BookingsUseCase
from app.application.use_cases.resolve_weather import ResolveWeatherUseCase
from app.domain.entities.weather import ForecastSample
from app.infrastructure.store.memory_store import MemoryBookingStore
from app.infrastructure.weather.mock_forecast import MockForecastProvider
from app.main import app
from app.wiring.dependencies import get_bookings_use_case, get_resolve_weather_use_case, get_timezone

TZ = ZoneInfo("Asia/Kolkata")

BOOKING_PAYLOAD = {
    "customerName": "John Doe",
    "numberOfGuests": 4,
    "bookingDate": "2025-12-25T00:00:00.000Z",
    "bookingTime": "19:30",
    "cuisinePreference": "Italian",
    "location": "Mumbai,IN",
}


def _sample(hour: int, text: str) -> ForecastSample:
    ts = datetime(2025, 12, 25, hour, 0, tzinfo=timezone.utc)
    return ForecastSample(
        timestamp_utc=ts,
        condition_text=text,
        temperature_celsius=28.4,
        raw={"dt": int(ts.timestamp()), "weather": [{"description": text}], "main": {"temp": 28.4}},
    )


SAMPLES = [_sample(0, "overcast clouds"), _sample(6, "clear sky"), _sample(12, "light rain")]


class DownProvider(ForecastProviderPort):
    async def fetch_forecast(self, location: str) -> list[ForecastSample]:
        raise ForecastProviderError("Failed to fetch weather data.")


@pytest.fixture
def client():
    bookings = BookingsUseCase(store=MemoryBookingStore(), timezone=TZ)
    app.dependency_overrides[get_bookings_use_case] = lambda: bookings
    app.dependency_overrides[get_resolve_weather_use_case] = lambda: ResolveWeatherUseCase(
        provider=MockForecastProvider(samples=SAMPLES), timezone=TZ
    )
    app.dependency_overrides[get_timezone] = lambda: TZ
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/").json()["status"] == "ok"


def test_create_booking(client):
    resp = client.post("/api/bookings", json=BOOKING_PAYLOAD)
    assert resp.status_code == 201

    data = resp.json()
    assert re.match(r"^BK-[0-9A-Z]{4}-[0-9A-Z]{6}$", data["bookingId"])
    assert data["id"]
    assert data["customerName"] == "John Doe"
    assert data["bookingDate"] == "2025-12-25"
    assert data["seatingPreference"] == "unspecified"
    assert data["status"] == "confirmed"
    assert data["specialRequests"] == ""
    assert data["weatherInfo"] is None
    assert data["createdAt"]


@pytest.mark.parametrize("field", ["customerName", "numberOfGuests", "bookingDate", "bookingTime", "cuisinePreference", "location"])
def test_missing_required_field_is_400(client, field):
    payload = {k: v for k, v in BOOKING_PAYLOAD.items() if k != field}
    resp = client.post("/api/bookings", json=payload)
    assert resp.status_code == 400
    assert field in resp.json()["detail"]


def test_malformed_body_is_400(client):
    assert client.post("/api/bookings", json={**BOOKING_PAYLOAD, "numberOfGuests": "many"}).status_code == 400
    assert client.post("/api/bookings", json={**BOOKING_PAYLOAD, "numberOfGuests": 0}).status_code == 400
    assert client.post("/api/bookings", json={**BOOKING_PAYLOAD, "seatingPreference": "rooftop"}).status_code == 400
    assert client.post("/api/bookings", json={**BOOKING_PAYLOAD, "bookingDate": "soon"}).status_code == 400


def test_list_get_and_cancel(client):
    first = client.post("/api/bookings", json=BOOKING_PAYLOAD).json()
    second = client.post("/api/bookings", json={**BOOKING_PAYLOAD, "customerName": "Asha"}).json()
    assert first["bookingId"] != second["bookingId"]

    listed = client.get("/api/bookings").json()
    assert [b["id"] for b in listed] == [second["id"], first["id"]]

    assert client.get(f"/api/bookings/{first['bookingId']}").json() == first
    assert client.get(f"/api/bookings/{first['id']}").json() == first
    assert client.get("/api/bookings/does-not-exist").status_code == 404

    resp = client.delete(f"/api/bookings/{first['bookingId']}")
    assert resp.status_code == 200
    cancelled = resp.json()
    assert cancelled == {**first, "status": "cancelled"}

    again = client.delete(f"/api/bookings/{first['id']}")
    assert again.status_code == 200
    assert again.json()["status"] == "cancelled"

    assert client.delete("/api/bookings/does-not-exist").status_code == 404


def test_weather_requires_params(client):
    assert client.get("/api/weather").status_code == 400
    assert client.get("/api/weather", params={"date": "2025-12-25"}).status_code == 400
    assert client.get("/api/weather", params={"location": "Mumbai,IN"}).status_code == 400
    assert client.get("/api/weather", params={"date": "not-a-date", "location": "Mumbai,IN"}).status_code == 400


def test_weather_provider_down_is_500(client):
    app.dependency_overrides[get_resolve_weather_use_case] = lambda: ResolveWeatherUseCase(
        provider=DownProvider(), timezone=TZ
    )
    resp = client.get("/api/weather", params={"date": "2025-12-25", "location": "Mumbai,IN"})
    assert resp.status_code == 500
    assert resp.json()["detail"] == "Failed to fetch weather data."


def test_weather_without_samples_is_404(client):
    app.dependency_overrides[get_resolve_weather_use_case] = lambda: ResolveWeatherUseCase(
        provider=MockForecastProvider(samples=[]), timezone=TZ
    )
    resp = client.get("/api/weather", params={"date": "2025-12-25", "location": "Mumbai,IN"})
    assert resp.status_code == 404


def test_weather_then_booking_end_to_end(client):
    resp = client.get("/api/weather", params={"date": "2025-12-25T00:00:00.000Z", "location": "Mumbai,IN"})
    assert resp.status_code == 200
    weather = resp.json()
    assert weather["seatingSuggestion"] == "outdoor"
    assert weather["weatherInfo"]["condition"] == "sunny"
    assert weather["weatherInfo"]["description"] == "clear sky"
    assert weather["weatherInfo"]["temperature"] == 28.4
    assert weather["suggestionText"] == "The weather looks great! Outdoor seating should be perfect."

    payload = {
        **BOOKING_PAYLOAD,
        "weatherInfo": weather["weatherInfo"],
        "seatingPreference": weather["seatingSuggestion"],
    }
    created = client.post("/api/bookings", json=payload).json()
    assert created["seatingPreference"] == "outdoor"
    assert created["weatherInfo"]["condition"] == "sunny"
    assert created["weatherInfo"]["raw"]["dt"] == int(datetime(2025, 12, 25, 6, tzinfo=timezone.utc).timestamp())
