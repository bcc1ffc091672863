from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

DAY_NAMES = {
    "monday": 0,
    "tuesday": 1,
    "wednesday": 2,
    "thursday": 3,
    "friday": 4,
    "saturday": 5,
    "sunday": 6,
}

MONTH_NAMES = {
    "january": 1,
    "february": 2,
    "march": 3,
    "april": 4,
    "may": 5,
    "june": 6,
    "july": 7,
    "august": 8,
    "september": 9,
    "october": 10,
    "november": 11,
    "december": 12,
}

# Full names and three-letter abbreviations.
MONTH_TOKENS = {**MONTH_NAMES, **{name[:3]: num for name, num in MONTH_NAMES.items()}}
_MONTHS = "|".join(sorted(MONTH_TOKENS, key=len, reverse=True))

# A month name only counts next to a day number, so "I may come" is not May.
_DAY_MONTH = re.compile(rf"\b(\d{{1,2}})(?:st|nd|rd|th)?\s+(?:of\s+)?({_MONTHS})\b")
_MONTH_DAY = re.compile(rf"\b({_MONTHS})\.?\s+(\d{{1,2}})(?:st|nd|rd|th)?\b")
_YEAR = re.compile(r"\b(\d{4})\b")


def parse_instant(value: str, timezone: ZoneInfo) -> datetime | None:
    """Parse an ISO-8601 date or instant. Naive values are taken to be in `timezone`."""
    text = (value or "").strip()
    if not text:
        return None
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone)
    return parsed


def parse_booking_date(text: str, timezone: ZoneInfo, reference_date: date | None = None) -> date | None:
    """Parse a spoken or typed booking date. Returns date or None if not understood."""
    if reference_date is None:
        reference_date = datetime.now(timezone).date()

    instant = parse_instant(text, timezone)
    if instant is not None:
        return instant.astimezone(timezone).date()

    normalized = text.lower().strip()

    if "day after tomorrow" in normalized:
        return reference_date + timedelta(days=2)

    if "today" in normalized or "tonight" in normalized:
        return reference_date

    if "tomorrow" in normalized:
        return reference_date + timedelta(days=1)

    month_day = _match_month_day(normalized)
    if month_day is not None:
        month_num, day = month_day
        year_match = _YEAR.search(normalized)
        if year_match:
            year = int(year_match.group(1))
        else:
            year = reference_date.year
            if month_num < reference_date.month or (month_num == reference_date.month and day < reference_date.day):
                year += 1
        try:
            return date(year, month_num, day)
        except ValueError:
            pass

    for day_name, day_num in DAY_NAMES.items():
        if day_name in normalized:
            days_ahead = (day_num - reference_date.weekday()) % 7
            if days_ahead == 0:
                days_ahead = 7
            if "next" in normalized:
                days_ahead += 7
            return reference_date + timedelta(days=days_ahead)

    match = re.search(r"\b(\d{1,2})[/.-](\d{1,2})(?:[/.-](\d{2,4}))?\b", normalized)
    if match:
        first = int(match.group(1))
        second = int(match.group(2))
        # day-first when the first number cannot be a month
        month, day = (second, first) if first > 12 else (first, second)
        if match.group(3):
            year = int(match.group(3))
            if year < 100:
                year += 2000
        else:
            year = reference_date.year
            if month < reference_date.month or (month == reference_date.month and day < reference_date.day):
                year += 1
        try:
            return date(year, month, day)
        except ValueError:
            pass

    return None


def _match_month_day(text: str) -> tuple[int, int] | None:
    """(month, day) from "25 december", "2nd of jan" or "december 25th"."""
    match = _DAY_MONTH.search(text)
    if match:
        return MONTH_TOKENS[match.group(2)], int(match.group(1))
    match = _MONTH_DAY.search(text)
    if match:
        return MONTH_TOKENS[match.group(1)], int(match.group(2))
    return None
