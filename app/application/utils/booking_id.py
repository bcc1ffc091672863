from __future__ import annotations

import secrets
import time

BOOKING_ID_PREFIX = "BK"
_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


def to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits: list[str] = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_ALPHABET[remainder])
    return "".join(reversed(digits))


def generate_booking_id(now_ms: int | None = None) -> str:
    """Human-readable booking id: BK-<last 4 base36 chars of epoch ms>-<6 random base36 chars>."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    timestamp = to_base36(now_ms)[-4:]
    random_part = "".join(secrets.choice(_ALPHABET) for _ in range(6))
    return f"{BOOKING_ID_PREFIX}-{timestamp}-{random_part}".upper()
