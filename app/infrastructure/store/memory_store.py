from __future__ import annotations

import threading

from app.application.exceptions import BookingConflictError
from app.application.ports.booking_repository import BookingRepositoryPort
from app.domain.entities.booking import Booking


class MemoryBookingStore(BookingRepositoryPort):
    def __init__(self) -> None:
        self._bookings: dict[str, Booking] = {}
        self._lock = threading.Lock()

    def add(self, booking: Booking) -> Booking:
        with self._lock:
            if booking.id in self._bookings or any(
                b.booking_id == booking.booking_id for b in self._bookings.values()
            ):
                raise BookingConflictError(f"Booking id already exists: {booking.booking_id}")
            self._bookings[booking.id] = booking
            return booking

    def list_all(self) -> list[Booking]:
        with self._lock:
            bookings = list(self._bookings.values())
        return newest_first(bookings)

    def find(self, identifier: str) -> Booking | None:
        with self._lock:
            booking = self._bookings.get(identifier)
            if booking is not None:
                return booking
            for candidate in self._bookings.values():
                if candidate.booking_id == identifier:
                    return candidate
            return None

    def save(self, booking: Booking) -> Booking:
        with self._lock:
            self._bookings[booking.id] = booking
            return booking


def newest_first(bookings: list[Booking]) -> list[Booking]:
    """Most recent first; bookings created in the same instant keep reverse insertion order."""
    return sorted(reversed(bookings), key=lambda b: b.created_at, reverse=True)
