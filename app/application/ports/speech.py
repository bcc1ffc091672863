from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Awaitable, Callable

from app.domain.entities.speech_event import SpeechEvent

SpeechEventHandler = Callable[[SpeechEvent], Awaitable[None]]


class SpeechPort(ABC):
    @abstractmethod
    async def speak(self, text: str) -> None:
        """Render text as speech. Returns once the output command has been dispatched."""
        raise NotImplementedError

    @abstractmethod
    def on_event(self, handler: SpeechEventHandler) -> None:
        """Register the handler that receives recognition events, one at a time."""
        raise NotImplementedError

    @abstractmethod
    def start_listening(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def stop_listening(self) -> None:
        raise NotImplementedError
