#!/usr/bin/env python3
"""Smoke test for a running booking API (weather lookup, create, fetch, cancel)."""

import sys

import httpx


BASE_URL = "http://127.0.0.1:8000"


def check_weather(date: str, location: str):
    """GET /api/weather and print the seating suggestion."""
    print("=" * 60)
    print(f"Testing GET /api/weather ({date}, {location})")
    print("=" * 60)

    try:
        response = httpx.get(
            f"{BASE_URL}/api/weather",
            params={"date": date, "location": location},
            timeout=30.0,
        )
        response.raise_for_status()

        data = response.json()
        info = data["weatherInfo"]
        print(f"✅ {info['condition']} ({info['description']}, {info['temperature']}°C)")
        print(f"   Suggestion: {data['seatingSuggestion']} - {data['suggestionText']}")
        return data
    except httpx.HTTPStatusError as e:
        print(f"❌ HTTP Error: {e.response.status_code}")
        print(f"Response: {e.response.text}")
        return None
    except httpx.HTTPError as e:
        print(f"❌ Error: {e}")
        return None


def check_booking_lifecycle(weather: dict | None):
    """POST a booking, read it back by bookingId, then cancel it."""
    print("\n" + "=" * 60)
    print("Testing POST/GET/DELETE /api/bookings")
    print("=" * 60)

    payload = {
        "customerName": "Smoke Test",
        "numberOfGuests": 2,
        "bookingDate": "2025-12-25T00:00:00.000Z",
        "bookingTime": "19:30",
        "cuisinePreference": "Italian",
        "location": "Mumbai,IN",
        "specialRequests": "window seat",
    }
    if weather:
        payload["weatherInfo"] = weather["weatherInfo"]
        payload["seatingPreference"] = weather["seatingSuggestion"]

    try:
        created = httpx.post(f"{BASE_URL}/api/bookings", json=payload, timeout=10.0)
        created.raise_for_status()
        booking = created.json()
        print(f"✅ Created {booking['bookingId']} ({booking['seatingPreference']})")

        fetched = httpx.get(f"{BASE_URL}/api/bookings/{booking['bookingId']}", timeout=10.0)
        fetched.raise_for_status()
        print(f"✅ Fetched {fetched.json()['customerName']}")

        cancelled = httpx.delete(f"{BASE_URL}/api/bookings/{booking['bookingId']}", timeout=10.0)
        cancelled.raise_for_status()
        print(f"✅ Status now {cancelled.json()['status']}")
        return True
    except httpx.HTTPStatusError as e:
        print(f"❌ HTTP Error: {e.response.status_code}")
        print(f"Response: {e.response.text}")
        return False
    except httpx.HTTPError as e:
        print(f"❌ Error: {e}")
        return False


def main():
    print("\n🚀 Smoke testing Booking API\n")

    try:
        httpx.get(f"{BASE_URL}/health", timeout=5.0)
        print("✅ Server is running\n")
    except httpx.HTTPError:
        print("❌ Server is not running!")
        print("   Please start it with: uvicorn app.main:app --reload --port 8000")
        sys.exit(1)

    date = sys.argv[1] if len(sys.argv) > 1 else "2025-12-25"
    location = sys.argv[2] if len(sys.argv) > 2 else "Mumbai,IN"

    weather = check_weather(date, location)
    check_booking_lifecycle(weather)

    print("\n" + "=" * 60)
    print("✅ Smoke test complete!")
    print("=" * 60 + "\n")


if __name__ == "__main__":
    main()
