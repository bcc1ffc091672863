from __future__ import annotations

#!/usr/bin/env python3
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

"""
Interactive local booking harness (no HTTP, no microphone).

Usage:
  python3 scripts/chat_local.py

What it does:
- Runs the same DialogueController the voice UI drives, with typed utterances
- Speaks prompts as [AGENT] lines, answers are read from stdin
- After the last question, fetches the forecast (WEATHER_PROVIDER=mock works offline)
- Lets you edit fields and save the booking through the configured store
"""

import asyncio

from dotenv import load_dotenv

load_dotenv()

from app.application.exceptions import BookingConflictError, BookingValidationError, DialogueStateError
from app.domain.entities.dialogue_state import DialoguePhase
from app.infrastructure.speech.console_speech import ConsoleSpeech
from app.core.config import settings
from app.wiring.dependencies import get_bookings_use_case, get_dialogue_controller


def _print_header() -> None:
    print("\nLocal Booking Harness")
    print("-" * 60)
    print("Answer each question and press Enter.")
    print("Commands: /start, /edit key=value, /seat indoor|outdoor|unspecified,")
    print("          /save, /state, /bookings, /mute (simulate speech error), /quit, /help")
    print("-" * 60)


def _print_state(controller) -> None:
    state = controller.state
    print(f"\nphase={state.phase.value} question_index={state.question_index} run_id={state.run_id}")
    for key, value in state.answers.items():
        print(f"  {key}: {value!r}")
    print(f"  seating: {state.seating_suggestion.value}")
    if state.weather_snapshot:
        snap = state.weather_snapshot
        print(f"  weather: {snap.condition.value} ({snap.description}, {snap.temperature}°C)")
    if state.notice:
        print(f"  notice: {state.notice}")


async def _run() -> None:
    speech = ConsoleSpeech(language=settings.SPEECH_LANGUAGE)
    controller = get_dialogue_controller(speech=speech)
    bookings = get_bookings_use_case()
    _print_header()
    print(f"Recognition language: {speech.language}")

    while True:
        try:
            user_text = (await asyncio.to_thread(input, "\n> ")).strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return

        cmd = user_text.lower()
        if cmd in ("/quit", "/exit"):
            print("Bye!")
            return
        if cmd == "/help":
            _print_header()
            continue
        if cmd == "/start":
            await controller.start()
            continue
        if cmd == "/state":
            _print_state(controller)
            continue
        if cmd == "/bookings":
            for b in bookings.list_all():
                print(f"  {b.booking_id} {b.customer_name} x{b.number_of_guests} {b.booking_date} {b.booking_time} [{b.status.value}]")
            continue
        if cmd == "/mute":
            await speech.deliver("")
            continue
        if cmd.startswith("/edit "):
            key, _, value = user_text[len("/edit "):].partition("=")
            try:
                controller.edit_slot(key.strip(), value.strip())
            except (DialogueStateError, ValueError) as e:
                print(f"! {e}")
            continue
        if cmd.startswith("/seat "):
            try:
                controller.set_seating_preference(cmd[len("/seat "):].strip())
            except (DialogueStateError, ValueError) as e:
                print(f"! {e}")
            continue
        if cmd == "/save":
            try:
                booking = await controller.commit()
                print(f"Saved {booking.booking_id}")
            except (DialogueStateError, BookingValidationError, BookingConflictError) as e:
                print(f"! {e}")
            continue

        if not user_text:
            await speech.deliver("")
            continue

        if controller.state.phase != DialoguePhase.AWAITING_ANSWER:
            print("(no question pending; use /start or a command)")
            continue

        controller.start_listening()
        await speech.deliver(user_text)


def main() -> None:
    asyncio.run(_run())


if __name__ == "__main__":
    main()
