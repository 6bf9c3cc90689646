from datetime import date
from types import SimpleNamespace
from urllib.parse import unquote

import pytest

from utils.whatsapp import (
    confirmation_message,
    deep_link,
    format_currency,
    format_date,
    format_time,
    request_message,
)


def _booking(**overrides):
    fields = dict(
        id="HS-ABC123-XY9Z0",
        booking_date=date(2026, 11, 2),
        start_time="10:00",
        duration_hours=2,
        additional_hour=True,
        total_price=550000,
        customer_name="Dewi",
        customer_phone="0812000111",
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


def test_format_currency():
    assert format_currency(550000) == "Rp 550.000"
    assert format_currency(1500000) == "Rp 1.500.000"
    assert format_currency(0) == "Rp 0"


@pytest.mark.parametrize("value,expected", [
    ("00:30", "12:30 AM"),
    ("09:00", "9:00 AM"),
    ("12:00", "12:00 PM"),
    ("17:30", "5:30 PM"),
])
def test_format_time(value, expected):
    assert format_time(value) == expected


def test_format_date():
    assert format_date(date(2026, 11, 2)) == "Monday, November 2, 2026"
    assert format_date("2026-11-02") == "Monday, November 2, 2026"


def test_confirmation_message():
    message = confirmation_message(_booking(), "Studio A", [("Backdrop", 2)])
    assert message.splitlines() == [
        "Hi! I would like to confirm my booking:",
        "",
        "Booking ID: HS-ABC123-XY9Z0",
        "Studio: Studio A",
        "Date: Monday, November 2, 2026",
        "Time: 10:00 AM - 1:00 PM",
        "Duration: 3 hours",
        "",
        "Add-ons:",
        "- Backdrop (x2)",
        "",
        "Total: Rp 550.000",
        "",
        "Name: Dewi",
        "Phone: 0812000111",
    ]


def test_confirmation_message_without_addons():
    message = confirmation_message(_booking(additional_hour=False), "Studio A", [])
    assert "Add-ons:" not in message
    assert "Duration: 2 hours" in message


def test_request_message():
    message = request_message(_booking(), "Studio A", "reschedule")
    assert message.startswith("Hi! I would like to reschedule my booking:")
    assert "Time: 10:00 AM" in message
    assert message.endswith("Please assist me with this request.")


def test_request_message_rejects_unknown_action():
    with pytest.raises(ValueError):
        request_message(_booking(), "Studio A", "refund")


def test_deep_link():
    url = deep_link("https://wa.me/", "628123456789", "Hi! Total: Rp 1.000\nName: A&B")
    assert url.startswith("https://wa.me/628123456789?text=")
    encoded = url.split("?text=", 1)[1]
    assert " " not in encoded and "\n" not in encoded and "&" not in encoded
    assert "!" in encoded
    assert unquote(encoded) == "Hi! Total: Rp 1.000\nName: A&B"
