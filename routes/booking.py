from flask import Blueprint, request, jsonify

from utils import booking_service, store
from utils.audit import log_event
from utils.errors import SlotUnavailable

booking_bp = Blueprint("booking", __name__)


# ---------- CUSTOMERS: browse ----------
@booking_bp.get("/studios")
def list_studios():
    return jsonify([s.to_dict() for s in store.list_active_studios()]), 200


@booking_bp.get("/catalog")
def get_catalog():
    return jsonify(booking_service.catalog()), 200


@booking_bp.get("/availability")
def get_availability():
    args = request.args
    result = booking_service.availability(
        args.get("studio_id"),
        args.get("date"),
        args.get("duration_hours"),
        args.get("additional_hour", "false"),
    )
    return jsonify(result), 200


@booking_bp.post("/quote")
def get_quote():
    data = booking_service.json_object(request.get_json(silent=True))
    breakdown = booking_service.quote(
        data.get("duration_hours"),
        data.get("additional_hour", False),
        data.get("addons"),
    )
    return jsonify(breakdown.to_dict()), 200


# ---------- CUSTOMERS: book ----------
@booking_bp.post("/bookings")
def create_booking():
    data = booking_service.json_object(request.get_json(silent=True))
    try:
        booking = booking_service.place_booking(data)
    except SlotUnavailable:
        log_event(
            "BOOKING_FAIL_SLOT_TAKEN",
            actor="customer",
            entity="studio",
            entity_id=data.get("studio_id"),
            metadata={"date": data.get("booking_date"), "start_time": data.get("start_time")},
        )
        raise

    log_event(
        "BOOKING_CREATE",
        actor="customer",
        entity="booking",
        entity_id=booking.id,
        metadata={"total_price": booking.total_price},
    )
    return jsonify(id=booking.id, status=booking.status, total_price=booking.total_price), 201


@booking_bp.get("/bookings/<booking_id>")
def get_booking(booking_id: str):
    booking = store.get_booking(booking_id)
    return jsonify(booking_service.booking_summary(booking)), 200


@booking_bp.get("/bookings/<booking_id>/contact")
def booking_contact_link(booking_id: str):
    action = (request.args.get("action") or "").strip().lower()
    booking = store.get_booking(booking_id)
    url = booking_service.contact_link(booking, action)
    return jsonify(id=booking.id, action=action, whatsapp_url=url), 200
