from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.application.use_cases.resolve_weather import WeatherAdvice
from app.domain.entities.booking import Booking, BookingStatus, CreateBookingCommand, SeatingPreference
from app.domain.entities.weather import WeatherCondition, WeatherSnapshot


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WeatherInfoSchema(ApiModel):
    raw: dict[str, Any] = Field(default_factory=dict)
    condition: WeatherCondition = WeatherCondition.OTHER
    description: str = "N/A"
    temperature: float | None = None

    @classmethod
    def from_entity(cls, snapshot: WeatherSnapshot) -> "WeatherInfoSchema":
        return cls(
            raw=snapshot.raw,
            condition=snapshot.condition,
            description=snapshot.description,
            temperature=snapshot.temperature,
        )

    def to_entity(self) -> WeatherSnapshot:
        return WeatherSnapshot(
            raw=dict(self.raw),
            condition=self.condition,
            description=self.description,
            temperature=self.temperature,
        )


class CreateBookingRequestSchema(ApiModel):
    # Required fields are checked by BookingsUseCase so every omission maps to 400.
    customer_name: str | None = None
    number_of_guests: int | None = None
    booking_date: str | None = None
    booking_time: str | None = None
    cuisine_preference: str | None = None
    location: str | None = None
    special_requests: str | None = None
    weather_info: WeatherInfoSchema | None = None
    seating_preference: SeatingPreference | None = None
    status: BookingStatus | None = None

    def to_command(self) -> CreateBookingCommand:
        return CreateBookingCommand(
            customer_name=self.customer_name,
            number_of_guests=self.number_of_guests,
            booking_date=self.booking_date,
            booking_time=self.booking_time,
            cuisine_preference=self.cuisine_preference,
            location=self.location,
            special_requests=self.special_requests,
            weather_info=self.weather_info.to_entity() if self.weather_info else None,
            seating_preference=self.seating_preference,
            status=self.status,
        )


class BookingSchema(ApiModel):
    id: str
    booking_id: str
    customer_name: str
    number_of_guests: int
    booking_date: date
    booking_time: str
    cuisine_preference: str
    special_requests: str = ""
    location: str
    weather_info: WeatherInfoSchema | None = None
    seating_preference: SeatingPreference = SeatingPreference.UNSPECIFIED
    status: BookingStatus = BookingStatus.CONFIRMED
    created_at: datetime

    @classmethod
    def from_entity(cls, booking: Booking) -> "BookingSchema":
        return cls(
            id=booking.id,
            booking_id=booking.booking_id,
            customer_name=booking.customer_name,
            number_of_guests=booking.number_of_guests,
            booking_date=booking.booking_date,
            booking_time=booking.booking_time,
            cuisine_preference=booking.cuisine_preference,
            special_requests=booking.special_requests,
            location=booking.location,
            weather_info=WeatherInfoSchema.from_entity(booking.weather_info) if booking.weather_info else None,
            seating_preference=booking.seating_preference,
            status=booking.status,
            created_at=booking.created_at,
        )


class WeatherResponseSchema(ApiModel):
    weather_info: WeatherInfoSchema
    seating_suggestion: SeatingPreference
    suggestion_text: str

    @classmethod
    def from_advice(cls, advice: WeatherAdvice) -> "WeatherResponseSchema":
        return cls(
            weather_info=WeatherInfoSchema.from_entity(advice.weather_info),
            seating_suggestion=advice.seating_suggestion,
            suggestion_text=advice.suggestion_text,
        )
