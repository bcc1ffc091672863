from __future__ import annotations

import re

from app.domain.entities.slot import CUSTOMER_NAME, NUMBER_OF_GUESTS

NAME_FILLERS = (
    "my name is",
    "this is",
    "i am",
    "mera naam",
)

_NON_LETTERS = re.compile(r"[^a-zA-Z ]")
_DIGITS = re.compile(r"\d+")


def normalize_answer(slot_key: str, raw_text: str) -> str:
    """Clean a raw utterance for the given slot. Never raises."""
    value = (raw_text or "").strip()

    if slot_key == CUSTOMER_NAME:
        return normalize_name(value)
    if slot_key == NUMBER_OF_GUESTS:
        return str(extract_guest_count(value))
    return value


def normalize_name(text: str) -> str:
    value = text
    for filler in NAME_FILLERS:
        value = re.sub(re.escape(filler), "", value, count=1, flags=re.IGNORECASE)
    value = _NON_LETTERS.sub("", value.strip())
    return " ".join(word[:1].upper() + word[1:] for word in value.split())


def extract_guest_count(text: str) -> int:
    match = _DIGITS.search(text)
    if not match:
        return 1
    count = int(match.group(0))
    return count if count >= 1 else 1
