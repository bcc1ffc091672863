from __future__ import annotations

import json
import logging
import threading
from datetime import date, datetime
from pathlib import Path
from typing import Any

from app.application.exceptions import BookingConflictError
from app.application.ports.booking_repository import BookingRepositoryPort
from app.domain.entities.booking import Booking, BookingStatus, SeatingPreference
from app.domain.entities.weather import WeatherCondition, WeatherSnapshot
from app.infrastructure.store.memory_store import newest_first


class JsonBookingStore(BookingRepositoryPort):
    def __init__(self, data_dir: str = "./data", file_name: str = "bookings.json") -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._file_path = self._data_dir / file_name
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def _load_data(self) -> dict[str, Any]:
        """Load store data from JSON file, return default if missing."""
        if not self._file_path.exists():
            return {"bookings": [], "version": 1}

        try:
            with open(self._file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
                if "version" not in data:
                    data["version"] = 1
                data.setdefault("bookings", [])
                return data
        except (json.JSONDecodeError, IOError) as e:
            # Corrupted file: start over rather than failing every request
            self._logger.error("Booking store unreadable", extra={"error": str(e)})
            return {"bookings": [], "version": 1}

    def _save_data(self, data: dict[str, Any]) -> None:
        """Save store data to JSON file atomically."""
        temp_path = self._file_path.with_suffix(".json.tmp")

        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            temp_path.replace(self._file_path)
        except Exception:
            if temp_path.exists():
                temp_path.unlink(missing_ok=True)
            raise

    def add(self, booking: Booking) -> Booking:
        with self._lock:
            data = self._load_data()
            for item in data["bookings"]:
                if item.get("id") == booking.id or item.get("bookingId") == booking.booking_id:
                    raise BookingConflictError(f"Booking id already exists: {booking.booking_id}")
            data["bookings"].append(serialize_booking(booking))
            self._save_data(data)
            return booking

    def list_all(self) -> list[Booking]:
        with self._lock:
            data = self._load_data()
        return newest_first([deserialize_booking(item) for item in data["bookings"]])

    def find(self, identifier: str) -> Booking | None:
        with self._lock:
            data = self._load_data()
        items = data["bookings"]
        for key in ("id", "bookingId"):
            for item in items:
                if item.get(key) == identifier:
                    return deserialize_booking(item)
        return None

    def save(self, booking: Booking) -> Booking:
        with self._lock:
            data = self._load_data()
            items = data["bookings"]
            for index, item in enumerate(items):
                if item.get("id") == booking.id:
                    items[index] = serialize_booking(booking)
                    break
            else:
                items.append(serialize_booking(booking))
            self._save_data(data)
            return booking


def serialize_weather(snapshot: WeatherSnapshot | None) -> dict[str, Any] | None:
    if snapshot is None:
        return None
    return {
        "raw": snapshot.raw,
        "condition": snapshot.condition.value,
        "description": snapshot.description,
        "temperature": snapshot.temperature,
    }


def deserialize_weather(data: dict[str, Any] | None) -> WeatherSnapshot | None:
    if not data:
        return None
    try:
        condition = WeatherCondition(data.get("condition") or WeatherCondition.OTHER.value)
    except ValueError:
        condition = WeatherCondition.OTHER
    return WeatherSnapshot(
        raw=data.get("raw") or {},
        condition=condition,
        description=data.get("description") or "N/A",
        temperature=data.get("temperature"),
    )


def serialize_booking(booking: Booking) -> dict[str, Any]:
    return {
        "id": booking.id,
        "bookingId": booking.booking_id,
        "customerName": booking.customer_name,
        "numberOfGuests": booking.number_of_guests,
        "bookingDate": booking.booking_date.isoformat(),
        "bookingTime": booking.booking_time,
        "cuisinePreference": booking.cuisine_preference,
        "specialRequests": booking.special_requests,
        "location": booking.location,
        "weatherInfo": serialize_weather(booking.weather_info),
        "seatingPreference": booking.seating_preference.value,
        "status": booking.status.value,
        "createdAt": booking.created_at.isoformat(),
    }


def deserialize_booking(data: dict[str, Any]) -> Booking:
    return Booking(
        id=data["id"],
        booking_id=data["bookingId"],
        customer_name=data.get("customerName", ""),
        number_of_guests=int(data.get("numberOfGuests", 1)),
        booking_date=date.fromisoformat(data["bookingDate"]),
        booking_time=data.get("bookingTime", ""),
        cuisine_preference=data.get("cuisinePreference", ""),
        location=data.get("location", ""),
        created_at=datetime.fromisoformat(data["createdAt"]),
        special_requests=data.get("specialRequests") or "",
        weather_info=deserialize_weather(data.get("weatherInfo")),
        seating_preference=SeatingPreference(data.get("seatingPreference", SeatingPreference.UNSPECIFIED.value)),
        status=BookingStatus(data.get("status", BookingStatus.CONFIRMED.value)),
    )
