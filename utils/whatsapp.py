from datetime import date, datetime
from urllib.parse import quote

from utils.timeslots import effective_duration, end_time, parse_clock

REQUEST_ACTIONS = {"reschedule", "cancel"}

# characters encodeURIComponent leaves alone
_URI_SAFE = "!~*'()"


def format_currency(amount: int, prefix: str = "Rp") -> str:
    # id-ID grouping: 1500000 -> 1.500.000
    return f"{prefix} {int(amount):,}".replace(",", ".")


def format_time(value: str) -> str:
    hour, minute = parse_clock(value)
    suffix = "PM" if hour >= 12 else "AM"
    return f"{hour % 12 or 12}:{minute:02d} {suffix}"


def format_date(value) -> str:
    if isinstance(value, str):
        value = date.fromisoformat(value)
    elif isinstance(value, datetime):
        value = value.date()
    return f"{value.strftime('%A, %B')} {value.day}, {value.year}"


def confirmation_message(booking, studio_name: str, addons, currency_prefix: str = "Rp") -> str:
    """
    addons: iterable of (name, quantity) pairs.
    """
    total_hours = effective_duration(booking.duration_hours, booking.additional_hour)
    finish = end_time(booking.start_time, total_hours)

    lines = [
        "Hi! I would like to confirm my booking:",
        "",
        f"Booking ID: {booking.id}",
        f"Studio: {studio_name}",
        f"Date: {format_date(booking.booking_date)}",
        f"Time: {format_time(booking.start_time)} - {format_time(finish)}",
        f"Duration: {total_hours} hours",
    ]

    addons = list(addons or [])
    if addons:
        lines.append("")
        lines.append("Add-ons:")
        lines.extend(f"- {name} (x{quantity})" for name, quantity in addons)

    lines += [
        "",
        f"Total: {format_currency(booking.total_price, currency_prefix)}",
        "",
        f"Name: {booking.customer_name}",
        f"Phone: {booking.customer_phone}",
    ]
    return "\n".join(lines)


def request_message(booking, studio_name: str, action: str) -> str:
    if action not in REQUEST_ACTIONS:
        raise ValueError(f"action must be one of {sorted(REQUEST_ACTIONS)}")

    return "\n".join([
        f"Hi! I would like to {action} my booking:",
        "",
        f"Booking ID: {booking.id}",
        f"Studio: {studio_name}",
        f"Date: {format_date(booking.booking_date)}",
        f"Time: {format_time(booking.start_time)}",
        "",
        "Please assist me with this request.",
    ])


def deep_link(base_url: str, number: str, message: str) -> str:
    return f"{base_url.rstrip('/')}/{number}?text={quote(message, safe=_URI_SAFE)}"
