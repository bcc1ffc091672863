from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import replace
from types import MappingProxyType
from typing import Any, Callable, Mapping
from zoneinfo import ZoneInfo

from app.application.exceptions import (
    DialogueStateError,
    ForecastProviderError,
    NoForecastDataError,
)
from app.application.ports.speech import SpeechPort
from app.application.use_cases.bookings import BookingsUseCase
from app.application.use_cases.resolve_weather import ResolveWeatherUseCase
from app.application.utils.answer_normalizer import normalize_answer
from app.application.utils.date_parser import parse_booking_date
from app.domain.entities.booking import Booking, CreateBookingCommand, SeatingPreference
from app.domain.entities.dialogue_state import DialoguePhase, DialogueState, TranscriptEntry
from app.domain.entities.slot import (
    BOOKING_DATE,
    BOOKING_SLOTS,
    BOOKING_TIME,
    CUISINE_PREFERENCE,
    CUSTOMER_NAME,
    LOCATION,
    NUMBER_OF_GUESTS,
    SPECIAL_REQUESTS,
    Slot,
)
from app.domain.entities.speech_event import SpeechEvent, SpeechEventType

GREETING = "Hello! I am your AI assistant. I will help you book a table."
MISSING_DETAILS_TEXT = "Some details like date or city are missing. Please fill them and then save the booking."
MISSING_DETAILS_NOTICE = "Fill missing fields and save manually."
UNREADABLE_DATE_TEXT = "I could not understand the booking date. Please correct it and then save the booking."
UNREADABLE_DATE_NOTICE = "Booking date not understood. Fix the date and save manually."
WEATHER_FAILED_TEXT = "I could not fetch the weather. You can still review details and save the booking."
WEATHER_FAILED_NOTICE = "Weather fetch failed. You can still save the booking."
WEATHER_APPLIED_NOTICE = "Weather fetched, suggestion applied."
REVIEW_TEXT = "You can now review details and hit save booking."
BOOKING_FAILED_NOTICE = "Failed to create booking."
BOOKING_CREATED_NOTICE = "Booking created."

# Phases in which the user may edit slots by hand and commit.
MANUAL_PHASES = (DialoguePhase.IDLE, DialoguePhase.COMPLETED)


class DialogueController:
    """Slot-filling state machine: idle -> awaiting_answer(i) -> resolving -> completed.

    All state lives in an immutable DialogueState that is only replaced through
    `_transition`. Answers are handled one at a time under `_answer_lock`, from
    storing the slot through asking the next question. The forecast step runs
    outside the lock and is superseded by `start()` through `run_id`.
    """

    def __init__(
        self,
        speech: SpeechPort,
        weather: ResolveWeatherUseCase,
        bookings: BookingsUseCase,
        timezone: ZoneInfo,
        slots: tuple[Slot, ...] = BOOKING_SLOTS,
        prompt_delay_seconds: float = 0.3,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._speech = speech
        self._weather = weather
        self._bookings = bookings
        self._timezone = timezone
        self._slots = slots
        # Minimum pause before the next prompt, for speech platforms that
        # cannot acknowledge that an output command was dispatched.
        self._prompt_delay_seconds = prompt_delay_seconds
        self._clock = clock
        self._is_listening = False
        # One answer at a time: store, pause, ask the next question.
        self._answer_lock = asyncio.Lock()
        self._state = DialogueState(answers=self._empty_answers())
        self._logger = logging.getLogger(__name__)
        speech.on_event(self.handle_event)

    @property
    def state(self) -> DialogueState:
        return self._state

    @property
    def slots(self) -> tuple[Slot, ...]:
        return self._slots

    @property
    def is_listening(self) -> bool:
        return self._is_listening

    async def start(self) -> None:
        run_id = self._state.run_id + 1
        self._transition(
            run_id=run_id,
            phase=DialoguePhase.AWAITING_ANSWER if self._slots else DialoguePhase.RESOLVING,
            question_index=0,
            answers=self._empty_answers(),
            weather_snapshot=None,
            seating_suggestion=SeatingPreference.UNSPECIFIED,
            suggestion_text=None,
            transcript=(),
            notice=None,
        )
        self._logger.info("Dialogue started", extra={"run_id": run_id})
        await self._say(GREETING)
        if self._is_current(run_id):
            await self._ask_or_resolve(run_id)

    async def submit_answer(self, raw_text: str) -> None:
        async with self._answer_lock:
            state = self._state
            run_id = state.run_id
            index = state.question_index
            if state.phase != DialoguePhase.AWAITING_ANSWER or not 0 <= index < len(self._slots):
                self._logger.debug("Answer ignored", extra={"run_id": run_id, "reason": state.phase.value})
                return

            slot = self._slots[index]
            answers = dict(state.answers)
            answers[slot.key] = normalize_answer(slot.key, raw_text)
            next_index = index + 1
            self._transition(
                answers=answers,
                question_index=next_index,
                phase=DialoguePhase.AWAITING_ANSWER if next_index < len(self._slots) else DialoguePhase.RESOLVING,
            )
            self._logger.info("Slot filled", extra={"run_id": run_id, "slot": slot.key})

            if self._prompt_delay_seconds > 0:
                await asyncio.sleep(self._prompt_delay_seconds)
            if not self._is_current(run_id):
                return
            if next_index < len(self._slots):
                await self._say(self._slots[next_index].prompt)
                return

        await self._resolve_weather(run_id)

    async def handle_event(self, event: SpeechEvent) -> None:
        if event.type == SpeechEventType.UTTERANCE_RECEIVED:
            text = (event.text or "").strip()
            self._log("user", text)
            self.stop_listening()
            await self.submit_answer(text)
        elif event.type == SpeechEventType.RECOGNITION_ERROR:
            self._log("system", f"Speech error: {event.error}")
            self._is_listening = False
        elif event.type == SpeechEventType.RECOGNITION_ENDED:
            self._is_listening = False

    def start_listening(self) -> None:
        self._speech.start_listening()
        self._is_listening = True
        self._log("system", "Listening...")

    def stop_listening(self) -> None:
        self._speech.stop_listening()
        self._is_listening = False

    def edit_slot(self, key: str, value: Any) -> None:
        self._require_manual_phase("edit")
        if key not in self._state.answers:
            raise ValueError(f"Unknown slot: {key}")
        answers = dict(self._state.answers)
        answers[key] = value
        self._transition(answers=answers)

    def set_seating_preference(self, preference: SeatingPreference | str) -> None:
        self._require_manual_phase("edit")
        self._transition(seating_suggestion=SeatingPreference(preference))

    async def commit(self) -> Booking:
        self._require_manual_phase("commit")
        try:
            booking = self._bookings.create(self._build_command())
        except Exception:
            self._transition(notice=BOOKING_FAILED_NOTICE)
            raise
        self._transition(notice=BOOKING_CREATED_NOTICE)
        await self._say(f"Your table is booked, {booking.customer_name}. Your booking ID is {booking.booking_id}.")
        return booking

    async def _ask_or_resolve(self, run_id: int) -> None:
        index = self._state.question_index
        if index < len(self._slots):
            await self._say(self._slots[index].prompt)
        else:
            await self._resolve_weather(run_id)

    async def _resolve_weather(self, run_id: int) -> None:
        answers = self._state.answers
        date_text = str(answers.get(BOOKING_DATE) or "").strip()
        location = str(answers.get(LOCATION) or "").strip()

        if not date_text or not location:
            self._transition(phase=DialoguePhase.COMPLETED, notice=MISSING_DETAILS_NOTICE)
            await self._say(MISSING_DETAILS_TEXT)
            return

        target_date = parse_booking_date(date_text, self._timezone)
        if target_date is None:
            self._transition(phase=DialoguePhase.COMPLETED, notice=UNREADABLE_DATE_NOTICE)
            await self._say(UNREADABLE_DATE_TEXT)
            return

        try:
            advice = await self._weather.execute(target_date, location)
        except (ForecastProviderError, NoForecastDataError) as e:
            if not self._is_current(run_id):
                return
            self._logger.warning("Weather fetch failed", extra={"run_id": run_id, "error": str(e)})
            self._transition(phase=DialoguePhase.COMPLETED, notice=WEATHER_FAILED_NOTICE)
            await self._say(WEATHER_FAILED_TEXT)
            return

        if not self._is_current(run_id):
            self._logger.info("Stale forecast discarded", extra={"run_id": run_id})
            return

        self._transition(
            phase=DialoguePhase.COMPLETED,
            weather_snapshot=advice.weather_info,
            seating_suggestion=advice.seating_suggestion,
            suggestion_text=advice.suggestion_text,
            notice=WEATHER_APPLIED_NOTICE,
        )
        await self._say(advice.suggestion_text)
        await self._say(REVIEW_TEXT)

    def _build_command(self) -> CreateBookingCommand:
        answers = self._state.answers
        return CreateBookingCommand(
            customer_name=_text(answers.get(CUSTOMER_NAME)),
            number_of_guests=_guest_count(answers.get(NUMBER_OF_GUESTS)),
            booking_date=_text(answers.get(BOOKING_DATE)),
            booking_time=_text(answers.get(BOOKING_TIME)),
            cuisine_preference=_text(answers.get(CUISINE_PREFERENCE)),
            location=_text(answers.get(LOCATION)),
            special_requests=_text(answers.get(SPECIAL_REQUESTS)),
            weather_info=self._state.weather_snapshot,
            seating_preference=self._state.seating_suggestion,
        )

    def _require_manual_phase(self, action: str) -> None:
        if self._state.phase not in MANUAL_PHASES:
            raise DialogueStateError(f"Cannot {action} while the dialogue is {self._state.phase.value}.")

    def _is_current(self, run_id: int) -> bool:
        return self._state.run_id == run_id

    async def _say(self, text: str) -> None:
        self._log("agent", text)
        await self._speech.speak(text)

    def _log(self, tag: str, message: str) -> None:
        entry = TranscriptEntry(tag=tag, message=message, ts=self._clock())
        self._transition(transcript=self._state.transcript + (entry,))

    def _transition(self, **changes: Any) -> DialogueState:
        if "answers" in changes:
            changes["answers"] = MappingProxyType(dict(changes["answers"]))
        self._state = replace(self._state, **changes)
        return self._state

    def _empty_answers(self) -> Mapping[str, Any]:
        return MappingProxyType({slot.key: "" for slot in self._slots})


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _guest_count(value: Any) -> int | None:
    text = _text(value)
    if not text:
        return 1
    try:
        return int(text)
    except ValueError:
        return None
