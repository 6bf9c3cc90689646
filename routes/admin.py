from flask import Blueprint, jsonify, request, current_app

from security.admin import admin_required
from utils import booking_service, store
from utils.audit import log_event
from models.booking import BOOKING_STATUSES
from models.setting import ADDITIONAL_HOUR_PRICE, WHATSAPP_NUMBER

admin_bp = Blueprint("admin", __name__, url_prefix="/admin")

EDITABLE_SETTINGS = (ADDITIONAL_HOUR_PRICE, WHATSAPP_NUMBER)


def _pick(data: dict, *names):
    return {k: data[k] for k in names if k in data}


# ---------- bookings ----------
@admin_bp.get("/bookings")
@admin_required
def list_bookings():
    status = (request.args.get("status") or "").strip().lower()
    if status in ("", "all"):
        status = None
    elif status not in BOOKING_STATUSES:
        return jsonify(error=f"status must be one of all, {', '.join(BOOKING_STATUSES)}"), 400

    date_str = request.args.get("date")
    day = booking_service.parse_date(date_str) if date_str else None
    page = request.args.get("page", default=1, type=int)
    per_page = current_app.config.get("ADMIN_BOOKINGS_PER_PAGE", 10)

    rows, matching, total = store.list_admin_bookings(status=status, booking_date=day, page=page, per_page=per_page)
    return jsonify(
        bookings=[
            {
                "id": b.id,
                "studio_id": b.studio_id,
                "studio_name": b.studio.name if b.studio else None,
                "booking_date": b.booking_date.isoformat(),
                "start_time": b.start_time,
                "duration_hours": b.duration_hours,
                "additional_hour": b.additional_hour,
                "customer_name": b.customer_name,
                "customer_phone": b.customer_phone,
                "customer_email": b.customer_email,
                "total_price": b.total_price,
                "status": b.status,
                "created_at": b.created_at.isoformat(),
            }
            for b in rows
        ],
        page=max(page, 1),
        per_page=per_page,
        matching=matching,
        total=total,
    ), 200


@admin_bp.get("/bookings/<booking_id>")
@admin_required
def get_booking(booking_id: str):
    return jsonify(booking_service.booking_summary(store.get_booking(booking_id))), 200


@admin_bp.patch("/bookings/<booking_id>/status")
@admin_required
def update_booking_status(booking_id: str):
    data = request.get_json(silent=True) or {}
    new_status = (data.get("status") or "").strip().lower()

    booking = store.get_booking(booking_id)
    old_status = booking.status
    booking = store.update_booking_status(booking.id, new_status)

    log_event(
        "BOOKING_STATUS_UPDATE",
        actor="admin",
        entity="booking",
        entity_id=booking.id,
        metadata={"from": old_status, "to": booking.status},
    )
    return jsonify(id=booking.id, status=booking.status), 200


# ---------- pricing ----------
@admin_bp.get("/pricing")
@admin_required
def list_pricing():
    return jsonify([t.to_dict() for t in store.list_pricing_tiers()]), 200


@admin_bp.put("/pricing/<int:duration_hours>")
@admin_required
def upsert_pricing(duration_hours: int):
    data = request.get_json(silent=True) or {}
    if "price" not in data:
        return jsonify(error="price required"), 400

    tier = store.upsert_pricing_tier(duration_hours, data["price"])
    log_event("PRICING_UPSERT", actor="admin", entity="pricing", entity_id=duration_hours, metadata={"price": tier.price})
    return jsonify(tier.to_dict()), 200


@admin_bp.delete("/pricing/<int:duration_hours>")
@admin_required
def delete_pricing(duration_hours: int):
    store.delete_pricing_tier(duration_hours)
    log_event("PRICING_DELETE", actor="admin", entity="pricing", entity_id=duration_hours)
    return jsonify(message="Deleted"), 200


# ---------- add-ons ----------
@admin_bp.get("/addons")
@admin_required
def list_addons():
    return jsonify([a.to_dict() for a in store.list_addons()]), 200


@admin_bp.post("/addons")
@admin_required
def create_addon():
    data = request.get_json(silent=True) or {}
    if "price" not in data:
        return jsonify(error="name and price are required"), 400

    addon = store.create_addon(
        data.get("name"),
        data["price"],
        description=data.get("description"),
        is_active=data.get("is_active", True),
    )
    log_event("ADDON_CREATE", actor="admin", entity="addon", entity_id=addon.id)
    return jsonify(addon.to_dict()), 201


@admin_bp.patch("/addons/<int:addon_id>")
@admin_required
def update_addon(addon_id: int):
    data = request.get_json(silent=True) or {}
    changes = _pick(data, "name", "description", "price", "is_active")
    if not changes:
        return jsonify(error="Nothing to update"), 400

    addon = store.update_addon(addon_id, **changes)
    log_event("ADDON_UPDATE", actor="admin", entity="addon", entity_id=addon.id, metadata=changes)
    return jsonify(addon.to_dict()), 200


@admin_bp.delete("/addons/<int:addon_id>")
@admin_required
def delete_addon(addon_id: int):
    store.delete_addon(addon_id)
    log_event("ADDON_DELETE", actor="admin", entity="addon", entity_id=addon_id)
    return jsonify(message="Deleted"), 200


# ---------- studios ----------
@admin_bp.get("/studios")
@admin_required
def list_studios():
    return jsonify([s.to_dict() for s in store.list_studios()]), 200


@admin_bp.post("/studios")
@admin_required
def create_studio():
    data = booking_service.json_object(request.get_json(silent=True))
    studio = store.create_studio(
        data.get("name"),
        description=data.get("description"),
        is_active=data.get("is_active", True),
    )
    log_event("STUDIO_CREATE", actor="admin", entity="studio", entity_id=studio.id, metadata={"name": studio.name})
    return jsonify(studio.to_dict()), 201


@admin_bp.patch("/studios/<int:studio_id>")
@admin_required
def update_studio(studio_id: int):
    data = request.get_json(silent=True) or {}
    changes = _pick(data, "name", "description", "is_active")
    if not changes:
        return jsonify(error="Nothing to update"), 400

    studio = store.update_studio(studio_id, **changes)
    log_event("STUDIO_UPDATE", actor="admin", entity="studio", entity_id=studio.id, metadata=changes)
    return jsonify(studio.to_dict()), 200


# ---------- settings ----------
@admin_bp.get("/settings")
@admin_required
def get_settings():
    return jsonify(store.load_settings().to_dict()), 200


@admin_bp.put("/settings")
@admin_required
def update_settings():
    data = request.get_json(silent=True) or {}
    values = _pick(data, *EDITABLE_SETTINGS)
    if not values:
        return jsonify(error=f"Provide at least one of {', '.join(EDITABLE_SETTINGS)}"), 400

    store.upsert_settings(values)
    log_event("SETTINGS_UPDATE", actor="admin", entity="settings", metadata=values)
    return jsonify(store.load_settings().to_dict()), 200
