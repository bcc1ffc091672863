from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from app.domain.entities.weather import WeatherSnapshot


class SeatingPreference(str, Enum):
    INDOOR = "indoor"
    OUTDOOR = "outdoor"
    UNSPECIFIED = "unspecified"


class BookingStatus(str, Enum):
    CONFIRMED = "confirmed"
    PENDING = "pending"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class Booking:
    id: str  # internal store key
    booking_id: str  # human-readable, e.g. BK-1A2B-XY12Z3
    customer_name: str
    number_of_guests: int
    booking_date: date
    booking_time: str
    cuisine_preference: str
    location: str
    created_at: datetime
    special_requests: str = ""
    weather_info: WeatherSnapshot | None = None
    seating_preference: SeatingPreference = SeatingPreference.UNSPECIFIED
    status: BookingStatus = BookingStatus.CONFIRMED


@dataclass(frozen=True)
class CreateBookingCommand:
    customer_name: str | None = None
    number_of_guests: int | None = None
    booking_date: str | date | None = None  # ISO date/instant or free text
    booking_time: str | None = None
    cuisine_preference: str | None = None
    location: str | None = None
    special_requests: str | None = None
    weather_info: WeatherSnapshot | None = None
    seating_preference: SeatingPreference | None = None
    status: BookingStatus | None = None
