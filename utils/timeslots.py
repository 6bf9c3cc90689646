"""
Wall-clock arithmetic, overlap checks and start-slot generation.

Times are zero-padded 24-hour "HH:MM" strings in the studio's single
timezone. Existing bookings are any objects or mappings that carry
start_time, duration_hours and additional_hour.
"""

import re

from utils.errors import MalformedTimeError

OPENING_HOUR = 8
CLOSING_HOUR = 18
SLOT_STEP_MINUTES = 30

_TWO_DIGITS = re.compile(r"[0-9]{2}")


def parse_clock(value: str) -> tuple[int, int]:
    if not isinstance(value, str):
        raise MalformedTimeError(value)
    parts = value.split(":")
    if len(parts) != 2:
        raise MalformedTimeError(value)
    hh, mm = parts
    if not _TWO_DIGITS.fullmatch(hh) or not _TWO_DIGITS.fullmatch(mm):
        raise MalformedTimeError(value)

    hour, minute = int(hh), int(mm)
    if hour > 23 or minute > 59:
        raise MalformedTimeError(value)
    return hour, minute


def to_minutes(hour: int, minute: int) -> int:
    return hour * 60 + minute


def clock_to_minutes(value: str) -> int:
    return to_minutes(*parse_clock(value))


def format_clock(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def end_time(start: str, duration_hours: int) -> str:
    """
    End of a session as HH:MM. Wraps past midnight (23:00 + 3h -> 02:00);
    callers that need to detect day overflow must compare minutes themselves.
    """
    end_minutes = clock_to_minutes(start) + duration_hours * 60
    return f"{(end_minutes // 60) % 24:02d}:{end_minutes % 60:02d}"


def effective_duration(duration_hours: int, additional_hour) -> int:
    return int(duration_hours) + (1 if additional_hour else 0)


def _field(booking, name):
    if isinstance(booking, dict):
        return booking.get(name)
    return getattr(booking, name)


def _interval(start: str, duration_hours: int, additional_hour) -> tuple[int, int]:
    start_minutes = clock_to_minutes(start)
    return start_minutes, start_minutes + effective_duration(duration_hours, additional_hour) * 60


def overlaps(existing, start: str, duration_hours: int, additional_hour: bool) -> bool:
    """
    Returns True when the candidate is free, False when it collides with
    any existing booking. Cancelled bookings must be filtered out first.
    """
    new_start, new_end = _interval(start, duration_hours, additional_hour)

    for booking in existing:
        cur_start, cur_end = _interval(
            _field(booking, "start_time"),
            _field(booking, "duration_hours"),
            _field(booking, "additional_hour"),
        )
        if (
            (cur_start <= new_start < cur_end)
            or (cur_start < new_end <= cur_end)
            or (new_start <= cur_start and new_end >= cur_end)
        ):
            return False

    return True


# reads better at call sites that ask "is it free?"
is_slot_available = overlaps


def available_slots(date, existing, duration_hours: int, additional_hour: bool) -> list[str]:
    # date is accepted for call-site symmetry; business hours do not vary by day
    total = effective_duration(duration_hours, additional_hour)
    closing = CLOSING_HOUR * 60
    slots = []

    for start_minutes in range(OPENING_HOUR * 60, closing, SLOT_STEP_MINUTES):
        if start_minutes + total * 60 > closing:
            continue
        candidate = format_clock(start_minutes)
        if overlaps(existing, candidate, duration_hours, additional_hour):
            slots.append(candidate)

    return slots


def booked_intervals(existing) -> list[dict]:
    return [
        {
            "start": _field(b, "start_time"),
            "end": end_time(
                _field(b, "start_time"),
                effective_duration(_field(b, "duration_hours"), _field(b, "additional_hour")),
            ),
        }
        for b in existing
    ]
