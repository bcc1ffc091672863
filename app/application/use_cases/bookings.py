from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import date, datetime, timezone as dt_timezone
from typing import Callable
from zoneinfo import ZoneInfo

from app.application.exceptions import BookingConflictError, BookingNotFoundError, BookingValidationError
from app.application.ports.booking_repository import BookingRepositoryPort
from app.application.utils.booking_id import generate_booking_id
from app.application.utils.date_parser import parse_booking_date
from app.domain.entities.booking import Booking, BookingStatus, CreateBookingCommand, SeatingPreference

REQUIRED_FIELDS = (
    ("customer_name", "customerName"),
    ("number_of_guests", "numberOfGuests"),
    ("booking_date", "bookingDate"),
    ("booking_time", "bookingTime"),
    ("cuisine_preference", "cuisinePreference"),
    ("location", "location"),
)


class BookingsUseCase:
    def __init__(
        self,
        store: BookingRepositoryPort,
        timezone: ZoneInfo,
        id_factory: Callable[[], str] = generate_booking_id,
    ) -> None:
        self._store = store
        self._timezone = timezone
        self._id_factory = id_factory
        self._logger = logging.getLogger(__name__)

    def create(self, command: CreateBookingCommand) -> Booking:
        missing = [wire for attr, wire in REQUIRED_FIELDS if not _present(getattr(command, attr))]
        if missing:
            raise BookingValidationError(f"Missing required fields: {', '.join(missing)}.")

        guests = command.number_of_guests
        if isinstance(guests, bool) or not isinstance(guests, int) or guests < 1:
            raise BookingValidationError("numberOfGuests must be a positive integer.")

        booking_date = self._resolve_date(command.booking_date)

        booking = Booking(
            id=uuid.uuid4().hex,
            booking_id=self._id_factory(),
            customer_name=command.customer_name.strip(),
            number_of_guests=guests,
            booking_date=booking_date,
            booking_time=command.booking_time.strip(),
            cuisine_preference=command.cuisine_preference.strip(),
            location=command.location.strip(),
            created_at=datetime.now(dt_timezone.utc),
            special_requests=command.special_requests or "",
            weather_info=command.weather_info,
            seating_preference=command.seating_preference or SeatingPreference.UNSPECIFIED,
            status=command.status or BookingStatus.CONFIRMED,
        )

        try:
            saved = self._store.add(booking)
        except BookingConflictError:
            self._logger.error("Booking id collision", extra={"booking_id": booking.booking_id})
            raise

        self._logger.info("Booking created", extra={"booking_id": saved.booking_id, "status": saved.status.value})
        return saved

    def list_all(self) -> list[Booking]:
        return self._store.list_all()

    def get(self, identifier: str) -> Booking:
        booking = self._store.find(identifier)
        if booking is None:
            raise BookingNotFoundError("Booking not found.")
        return booking

    def cancel(self, identifier: str) -> Booking:
        booking = self.get(identifier)
        if booking.status == BookingStatus.CANCELLED:
            return booking
        cancelled = self._store.save(replace(booking, status=BookingStatus.CANCELLED))
        self._logger.info("Booking cancelled", extra={"booking_id": cancelled.booking_id})
        return cancelled

    def _resolve_date(self, value: str | date) -> date:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        parsed = parse_booking_date(str(value), self._timezone)
        if parsed is None:
            raise BookingValidationError("Invalid bookingDate.")
        return parsed


def _present(value: object) -> bool:
    if isinstance(value, str):
        return bool(value.strip())
    return bool(value)
