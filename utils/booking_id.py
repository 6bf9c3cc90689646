import secrets
import time

_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
PREFIX = "HS"
RANDOM_LENGTH = 5


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError("value must be non-negative")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_ALPHABET[rem])
    return "".join(reversed(digits))


def new_booking_id(now_ms: int | None = None) -> str:
    """
    Public booking code, e.g. HS-MKX3Q9ZC-4F7QA.
    Uniqueness is probabilistic; the store checks for collisions before insert.
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    random_part = "".join(secrets.choice(_ALPHABET) for _ in range(RANDOM_LENGTH))
    return f"{PREFIX}-{to_base36(now_ms)}-{random_part}".upper()
