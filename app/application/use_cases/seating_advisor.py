from __future__ import annotations

from dataclasses import dataclass

from app.domain.entities.booking import SeatingPreference
from app.domain.entities.weather import WeatherCondition


@dataclass(frozen=True)
class SeatingAdvice:
    suggestion: SeatingPreference
    text: str


SEATING_ADVICE: dict[WeatherCondition, SeatingAdvice] = {
    WeatherCondition.SUNNY: SeatingAdvice(
        SeatingPreference.OUTDOOR,
        "The weather looks great! Outdoor seating should be perfect.",
    ),
    WeatherCondition.RAINY: SeatingAdvice(
        SeatingPreference.INDOOR,
        "It might rain. Indoor seating would be more comfortable.",
    ),
    WeatherCondition.OTHER: SeatingAdvice(
        SeatingPreference.INDOOR,
        "I recommend indoor seating.",
    ),
}


def advise_seating(condition: WeatherCondition) -> SeatingAdvice:
    return SEATING_ADVICE[condition]
