from __future__ import annotations

import logging

from app.application.ports.speech import SpeechEventHandler, SpeechPort
from app.domain.entities.speech_event import SpeechEvent


class RecordingSpeech(SpeechPort):
    def __init__(self) -> None:
        self.spoken: list[str] = []
        self.listening = False
        self._handler: SpeechEventHandler | None = None
        self._logger = logging.getLogger(__name__)

    async def speak(self, text: str) -> None:
        self.spoken.append(text)
        self._logger.debug("Mock speak: %s", text)

    def on_event(self, handler: SpeechEventHandler) -> None:
        self._handler = handler

    def start_listening(self) -> None:
        self.listening = True

    def stop_listening(self) -> None:
        self.listening = False

    async def emit(self, event: SpeechEvent) -> None:
        if self._handler is not None:
            await self._handler(event)
