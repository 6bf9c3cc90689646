"""
Customer booking flow: availability, quotes, placing bookings and the
WhatsApp links shown after booking.

Request payloads arrive as parsed JSON; everything is validated here and
turned into InvalidBookingRequest before touching the store. A start time
already held by another booking raises SlotUnavailable.
"""
from datetime import date

from flask import current_app

from models.booking import Booking
from utils import store
from utils.errors import InvalidBookingRequest, MalformedTimeError, RecordNotFound, SlotUnavailable
from utils.pricing import price_breakdown
from utils.timeslots import (
    available_slots,
    booked_intervals,
    effective_duration,
    end_time,
    parse_clock,
)
from utils.whatsapp import confirmation_message, deep_link, request_message


def json_object(data) -> dict:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidBookingRequest("Request body must be a JSON object")
    return data


def _text(value, field: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise InvalidBookingRequest(f"{field} must be a string")
    return value.strip()


def parse_date(value) -> date:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(_text(value, "date"))
    except (TypeError, ValueError, AttributeError):
        raise InvalidBookingRequest("Invalid date. Use YYYY-MM-DD") from None


def _whole_number(value, message: str) -> int:
    if isinstance(value, bool):
        raise InvalidBookingRequest(message)
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        raise InvalidBookingRequest(message) from None
    if isinstance(value, float) and number != value:
        raise InvalidBookingRequest(message)
    return number


def parse_positive_int(value, field: str) -> int:
    number = _whole_number(value, f"{field} must be a positive integer")
    if number <= 0:
        raise InvalidBookingRequest(f"{field} must be a positive integer")
    return number


def parse_flag(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def parse_addon_selection(raw) -> dict:
    """
    Accepts {"3": 1, "5": 2}, [{"addon_id": 3, "quantity": 1}] or [3, 5].
    Returns {addon_id: quantity} with zero quantities dropped.
    """
    if not raw:
        return {}

    pairs = []
    if isinstance(raw, dict):
        pairs = list(raw.items())
    elif isinstance(raw, list):
        for item in raw:
            if isinstance(item, dict):
                pairs.append((item.get("addon_id"), item.get("quantity", 1)))
            else:
                pairs.append((item, 1))
    else:
        raise InvalidBookingRequest("addons must be an object or a list")

    selection = {}
    for addon_id, quantity in pairs:
        addon_id = parse_positive_int(addon_id, "addon_id")
        quantity = _whole_number(quantity, "quantity must be an integer")
        if quantity < 0:
            raise InvalidBookingRequest("quantity must not be negative")
        if quantity:
            selection[addon_id] = selection.get(addon_id, 0) + quantity
    return selection


def _active_studio(studio_id):
    studio = store.get_studio(parse_positive_int(studio_id, "studio_id"))
    if not studio.is_active:
        raise RecordNotFound("studio", studio.id)
    return studio


def _offered_duration(duration_hours, tiers: dict) -> int:
    duration_hours = parse_positive_int(duration_hours, "duration_hours")
    if duration_hours not in tiers:
        raise InvalidBookingRequest(f"No pricing for a {duration_hours} hour session")
    return duration_hours


def catalog() -> dict:
    settings = store.load_settings()
    return {
        "pricing": [t.to_dict() for t in store.list_pricing_tiers()],
        "addons": [a.to_dict() for a in store.list_active_addons()],
        "additional_hour_price": settings.additional_hour_price,
    }


def availability(studio_id, booking_date, duration_hours, additional_hour=False) -> dict:
    studio = _active_studio(studio_id)
    day = parse_date(booking_date)
    duration_hours = parse_positive_int(duration_hours, "duration_hours")
    additional_hour = parse_flag(additional_hour)

    existing = store.list_bookings(studio.id, day)
    return {
        "studio_id": studio.id,
        "date": day.isoformat(),
        "duration_hours": duration_hours,
        "additional_hour": additional_hour,
        "slots": available_slots(day, existing, duration_hours, additional_hour),
        "booked": booked_intervals(existing),
    }


def quote(duration_hours, additional_hour=False, addons=None):
    tiers = store.pricing_tier_map()
    duration_hours = _offered_duration(duration_hours, tiers)
    settings = store.load_settings()
    catalog_by_id = {a.id: a for a in store.list_active_addons()}

    return price_breakdown(
        duration_hours,
        parse_flag(additional_hour),
        settings.additional_hour_price,
        tiers,
        parse_addon_selection(addons),
        catalog_by_id,
    )


def place_booking(payload: dict) -> Booking:
    payload = json_object(payload)
    studio = _active_studio(payload.get("studio_id"))
    day = parse_date(payload.get("booking_date"))
    if day < date.today():
        raise InvalidBookingRequest("Booking date is in the past")

    start_time = _text(payload.get("start_time"), "start_time")
    try:
        parse_clock(start_time)
    except MalformedTimeError as exc:
        raise InvalidBookingRequest(str(exc)) from None

    customer_name = _text(payload.get("customer_name"), "customer_name")
    customer_phone = _text(payload.get("customer_phone"), "customer_phone")
    customer_email = _text(payload.get("customer_email"), "customer_email") or None
    if not customer_name or not customer_phone:
        raise InvalidBookingRequest("customer_name and customer_phone are required")
    if customer_email and "@" not in customer_email:
        raise InvalidBookingRequest("Invalid email")
    notes = _text(payload.get("notes"), "notes") or None

    additional_hour = parse_flag(payload.get("additional_hour"))
    breakdown = quote(payload.get("duration_hours"), additional_hour, payload.get("addons"))
    duration_hours = parse_positive_int(payload.get("duration_hours"), "duration_hours")

    # off-grid or past closing is a bad request; taken by another booking is a conflict
    if start_time not in available_slots(day, [], duration_hours, additional_hour):
        raise InvalidBookingRequest("Selected time is outside bookable hours")
    existing = store.list_bookings(studio.id, day)
    if start_time not in available_slots(day, existing, duration_hours, additional_hour):
        raise SlotUnavailable("Selected time is not available")

    fields = {
        "studio_id": studio.id,
        "booking_date": day,
        "start_time": start_time,
        "duration_hours": duration_hours,
        "additional_hour": additional_hour,
        "customer_name": customer_name,
        "customer_phone": customer_phone,
        "customer_email": customer_email,
        "notes": notes,
        "total_price": breakdown.total,
    }
    lines = [(addon_id, quantity, unit_price) for addon_id, _, unit_price, quantity, _ in breakdown.addons]
    return store.create_booking(fields, lines)


def _addon_summary(booking: Booking):
    return [
        {
            "addon_id": line.addon_id,
            "name": line.addon.name if line.addon else None,
            "quantity": line.quantity,
            "price": line.price,
        }
        for line in store.list_booking_addons(booking.id)
    ]


def _contact_link(message: str):
    number = store.load_settings().whatsapp_number
    if not number:
        return None
    return deep_link(current_app.config.get("WHATSAPP_BASE_URL", "https://wa.me"), number, message)


def booking_summary(booking: Booking) -> dict:
    addons = _addon_summary(booking)
    studio_name = booking.studio.name if booking.studio else ""
    total_hours = effective_duration(booking.duration_hours, booking.additional_hour)

    message = confirmation_message(
        booking,
        studio_name,
        [(a["name"], a["quantity"]) for a in addons],
        current_app.config.get("CURRENCY_PREFIX", "Rp"),
    )
    return {
        "id": booking.id,
        "studio_id": booking.studio_id,
        "studio_name": studio_name,
        "booking_date": booking.booking_date.isoformat(),
        "start_time": booking.start_time,
        "end_time": end_time(booking.start_time, total_hours),
        "duration_hours": booking.duration_hours,
        "additional_hour": booking.additional_hour,
        "customer_name": booking.customer_name,
        "customer_phone": booking.customer_phone,
        "customer_email": booking.customer_email,
        "notes": booking.notes,
        "total_price": booking.total_price,
        "status": booking.status,
        "addons": addons,
        "whatsapp_url": _contact_link(message),
    }


def contact_link(booking: Booking, action: str):
    studio_name = booking.studio.name if booking.studio else ""
    try:
        message = request_message(booking, studio_name, action)
    except ValueError as exc:
        raise InvalidBookingRequest(str(exc)) from None
    return _contact_link(message)
