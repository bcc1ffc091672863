from __future__ import annotations

from abc import ABC, abstractmethod

from app.domain.entities.booking import Booking


class BookingRepositoryPort(ABC):
    @abstractmethod
    def add(self, booking: Booking) -> Booking:
        """Persist a new booking. Raises BookingConflictError if booking_id or id is taken."""
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> list[Booking]:
        """All bookings, most recently created first."""
        raise NotImplementedError

    @abstractmethod
    def find(self, identifier: str) -> Booking | None:
        """Look up by internal id first, then by booking_id."""
        raise NotImplementedError

    @abstractmethod
    def save(self, booking: Booking) -> Booking:
        """Replace an existing booking (matched on internal id)."""
        raise NotImplementedError
