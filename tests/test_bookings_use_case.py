from dataclasses import replace
from datetime import date
from zoneinfo import ZoneInfo

import pytest

from app.application.exceptions import BookingConflictError, BookingNotFoundError, BookingValidationError
from app.application.use_cases.bookings import BookingsUseCase
from app.domain.entities.booking import BookingStatus, CreateBookingCommand, SeatingPreference
from app.infrastructure.store.memory_store import MemoryBookingStore

TZ = ZoneInfo("Asia/Kolkata")

VALID = CreateBookingCommand(
    customer_name="John Doe",
    number_of_guests=4,
    booking_date="2025-12-25",
    booking_time="19:30",
    cuisine_preference="Italian",
    location="Mumbai,IN",
)


def _use_case(**kwargs) -> BookingsUseCase:
    return BookingsUseCase(store=MemoryBookingStore(), timezone=TZ, **kwargs)


def test_create_applies_defaults():
    booking = _use_case().create(VALID)
    assert booking.booking_date == date(2025, 12, 25)
    assert booking.special_requests == ""
    assert booking.seating_preference == SeatingPreference.UNSPECIFIED
    assert booking.status == BookingStatus.CONFIRMED
    assert booking.weather_info is None
    assert booking.id != booking.booking_id


@pytest.mark.parametrize(
    "field",
    ["customer_name", "number_of_guests", "booking_date", "booking_time", "cuisine_preference", "location"],
)
def test_missing_required_field(field):
    with pytest.raises(BookingValidationError):
        _use_case().create(replace(VALID, **{field: None}))


def test_blank_strings_count_as_missing():
    with pytest.raises(BookingValidationError):
        _use_case().create(replace(VALID, customer_name="   "))


def test_guest_count_must_be_positive():
    with pytest.raises(BookingValidationError):
        _use_case().create(replace(VALID, number_of_guests=-2))


def test_invalid_date():
    with pytest.raises(BookingValidationError):
        _use_case().create(replace(VALID, booking_date="someday"))


def test_nothing_stored_on_validation_error():
    uc = _use_case()
    with pytest.raises(BookingValidationError):
        uc.create(replace(VALID, location=""))
    assert uc.list_all() == []


def test_get_by_either_identifier():
    uc = _use_case()
    booking = uc.create(VALID)
    assert uc.get(booking.id) == booking
    assert uc.get(booking.booking_id) == booking
    with pytest.raises(BookingNotFoundError):
        uc.get("BK-NOPE-000000")


def test_cancel_only_changes_status_and_is_idempotent():
    uc = _use_case()
    booking = uc.create(VALID)

    cancelled = uc.cancel(booking.booking_id)
    assert cancelled == replace(booking, status=BookingStatus.CANCELLED)

    again = uc.cancel(booking.id)
    assert again == cancelled
    assert uc.get(booking.id).status == BookingStatus.CANCELLED


def test_cancel_unknown():
    with pytest.raises(BookingNotFoundError):
        _use_case().cancel("missing")


def test_list_is_newest_first():
    uc = _use_case()
    first = uc.create(VALID)
    second = uc.create(replace(VALID, customer_name="Second"))
    assert [b.id for b in uc.list_all()] == [second.id, first.id]


def test_duplicate_booking_id_is_a_conflict():
    uc = _use_case(id_factory=lambda: "BK-AAAA-000000")
    uc.create(VALID)
    with pytest.raises(BookingConflictError):
        uc.create(VALID)
    assert len(uc.list_all()) == 1
