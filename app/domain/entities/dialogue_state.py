from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from app.domain.entities.booking import SeatingPreference
from app.domain.entities.weather import WeatherSnapshot


class DialoguePhase(str, Enum):
    IDLE = "idle"
    AWAITING_ANSWER = "awaiting_answer"
    RESOLVING = "resolving"
    COMPLETED = "completed"


@dataclass(frozen=True)
class TranscriptEntry:
    tag: str  # "agent", "user", "system"
    message: str
    ts: float


@dataclass(frozen=True)
class DialogueState:
    run_id: int = 0
    phase: DialoguePhase = DialoguePhase.IDLE
    question_index: int = -1
    answers: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))  # read-only view
    weather_snapshot: WeatherSnapshot | None = None
    seating_suggestion: SeatingPreference = SeatingPreference.UNSPECIFIED
    suggestion_text: str | None = None
    transcript: tuple[TranscriptEntry, ...] = ()
    notice: str | None = None
