from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Slot:
    key: str
    prompt: str


CUSTOMER_NAME = "customerName"
NUMBER_OF_GUESTS = "numberOfGuests"
BOOKING_DATE = "bookingDate"
BOOKING_TIME = "bookingTime"
CUISINE_PREFERENCE = "cuisinePreference"
SPECIAL_REQUESTS = "specialRequests"
LOCATION = "location"

BOOKING_SLOTS: tuple[Slot, ...] = (
    Slot(CUSTOMER_NAME, "What is your name?"),
    Slot(NUMBER_OF_GUESTS, "How many guests are you booking for?"),
    Slot(
        BOOKING_DATE,
        "On which date would you like to book the table? For example, say 25 December 2025.",
    ),
    Slot(BOOKING_TIME, "At what time should I book the table?"),
    Slot(CUISINE_PREFERENCE, "What type of cuisine do you prefer? Indian, Italian or Chinese?"),
    Slot(SPECIAL_REQUESTS, "Any special requests such as birthday celebration or dietary restrictions?"),
    Slot(LOCATION, "Which city are you in? I will check the weather for that location."),
)
