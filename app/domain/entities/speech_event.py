from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SpeechEventType(str, Enum):
    UTTERANCE_RECEIVED = "utterance_received"
    RECOGNITION_ERROR = "recognition_error"
    RECOGNITION_ENDED = "recognition_ended"


@dataclass(frozen=True)
class SpeechEvent:
    type: SpeechEventType
    text: str | None = None
    error: str | None = None  # e.g. "no-speech", "not-allowed"

    @classmethod
    def utterance(cls, text: str) -> "SpeechEvent":
        return cls(type=SpeechEventType.UTTERANCE_RECEIVED, text=text)

    @classmethod
    def recognition_error(cls, error: str) -> "SpeechEvent":
        return cls(type=SpeechEventType.RECOGNITION_ERROR, error=error)

    @classmethod
    def ended(cls) -> "SpeechEvent":
        return cls(type=SpeechEventType.RECOGNITION_ENDED)
