from __future__ import annotations

import logging

from app.application.ports.speech import SpeechEventHandler, SpeechPort
from app.domain.entities.speech_event import SpeechEvent


class ConsoleSpeech(SpeechPort):
    """Typed stand-in for speech I/O: prompts are printed, typed lines are delivered as utterances."""

    def __init__(self, language: str = "en-IN") -> None:
        self.language = language
        self._handler: SpeechEventHandler | None = None
        self._listening = False
        self._logger = logging.getLogger(__name__)

    async def speak(self, text: str) -> None:
        print(f"[AGENT] {text}", flush=True)

    def on_event(self, handler: SpeechEventHandler) -> None:
        self._handler = handler

    def start_listening(self) -> None:
        self._listening = True

    def stop_listening(self) -> None:
        self._listening = False

    async def deliver(self, text: str) -> None:
        """Deliver one typed line as a recognition result; blank input counts as no speech."""
        text = text.strip()
        if not text:
            await self._emit(SpeechEvent.recognition_error("no-speech"))
            return
        await self._emit(SpeechEvent.utterance(text))

    async def _emit(self, event: SpeechEvent) -> None:
        if self._handler is None:
            self._logger.warning("Speech event dropped, no handler registered", extra={"reason": event.type.value})
            return
        await self._handler(event)
