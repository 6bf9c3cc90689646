"""
Record store for studios, pricing, add-ons, settings and bookings.

Every write goes through _commit(), which rolls the session back and
raises StoreWriteFailure on database errors, so callers never see a
half-written booking.
"""
from dataclasses import dataclass
from datetime import datetime

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from models import db
from models.addon import Addon
from models.booking import (
    BOOKING_STATUSES,
    CANCELLED,
    Booking,
    BookingAddon,
    BookingDayLock,
)
from models.pricing import PricingTier
from models.setting import ADDITIONAL_HOUR_PRICE, WHATSAPP_NUMBER, Setting
from models.studio import Studio
from utils.booking_id import new_booking_id
from utils.errors import (
    InvalidBookingRequest,
    RecordInUse,
    RecordNotFound,
    SlotUnavailable,
    StoreWriteFailure,
)
from utils.timeslots import is_slot_available

DEFAULT_ADDITIONAL_HOUR_PRICE = 150000


def _commit(action: str):
    try:
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.exception("store write failed: %s", action)
        raise StoreWriteFailure(f"{action} failed") from exc


def _non_negative_int(value, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise InvalidBookingRequest(f"{field} must be an integer")
    try:
        number = int(value)
    except ValueError:
        raise InvalidBookingRequest(f"{field} must be an integer") from None
    if number < 0:
        raise InvalidBookingRequest(f"{field} must not be negative")
    return number


def _name(value, label: str) -> str:
    name = value.strip() if isinstance(value, str) else ""
    if not name:
        raise InvalidBookingRequest(f"{label} name required")
    return name


def _description(value):
    if value is not None and not isinstance(value, str):
        raise InvalidBookingRequest("description must be a string")
    return (value or "").strip() or None


# ---------- studios ----------
def list_active_studios():
    return Studio.query.filter_by(is_active=True).order_by(Studio.id.asc()).all()


def list_studios():
    return Studio.query.order_by(Studio.id.asc()).all()


def get_studio(studio_id: int) -> Studio:
    studio = db.session.get(Studio, studio_id)
    if not studio:
        raise RecordNotFound("studio", studio_id)
    return studio


def create_studio(name: str, description=None, is_active: bool = True) -> Studio:
    studio = Studio(
        name=_name(name, "Studio"),
        description=_description(description),
        is_active=bool(is_active),
    )
    db.session.add(studio)
    _commit("create studio")
    return studio


def update_studio(studio_id: int, **fields) -> Studio:
    studio = get_studio(studio_id)
    if "name" in fields:
        studio.name = _name(fields["name"], "Studio")
    if "description" in fields:
        studio.description = _description(fields["description"])
    if "is_active" in fields:
        studio.is_active = bool(fields["is_active"])
    _commit("update studio")
    return studio


def set_studio_active(studio_id: int, is_active: bool) -> Studio:
    return update_studio(studio_id, is_active=is_active)


# ---------- pricing ----------
def list_pricing_tiers():
    return PricingTier.query.order_by(PricingTier.duration_hours.asc()).all()


def pricing_tier_map() -> dict:
    return {t.duration_hours: t.price for t in list_pricing_tiers()}


def upsert_pricing_tier(duration_hours, price) -> PricingTier:
    duration_hours = _non_negative_int(duration_hours, "duration_hours")
    if duration_hours == 0:
        raise InvalidBookingRequest("duration_hours must be positive")
    price = _non_negative_int(price, "price")

    tier = PricingTier.query.filter_by(duration_hours=duration_hours).first()
    if tier is None:
        tier = PricingTier(duration_hours=duration_hours, price=price)
        db.session.add(tier)
    else:
        tier.price = price
    _commit("upsert pricing tier")
    return tier


def delete_pricing_tier(duration_hours: int):
    tier = PricingTier.query.filter_by(duration_hours=duration_hours).first()
    if not tier:
        raise RecordNotFound("pricing tier", duration_hours)
    db.session.delete(tier)
    _commit("delete pricing tier")


# ---------- add-ons ----------
def list_active_addons():
    return Addon.query.filter_by(is_active=True).order_by(Addon.name.asc()).all()


def list_addons():
    return Addon.query.order_by(Addon.name.asc()).all()


def get_addon(addon_id: int) -> Addon:
    addon = db.session.get(Addon, addon_id)
    if not addon:
        raise RecordNotFound("addon", addon_id)
    return addon


def create_addon(name: str, price, description=None, is_active: bool = True) -> Addon:
    addon = Addon(
        name=_name(name, "Add-on"),
        description=_description(description),
        price=_non_negative_int(price, "price"),
        is_active=bool(is_active),
    )
    db.session.add(addon)
    _commit("create addon")
    return addon


def update_addon(addon_id: int, **fields) -> Addon:
    addon = get_addon(addon_id)
    if "name" in fields:
        addon.name = _name(fields["name"], "Add-on")
    if "description" in fields:
        addon.description = _description(fields["description"])
    if "price" in fields:
        # existing booking lines keep their own snapshot price
        addon.price = _non_negative_int(fields["price"], "price")
    if "is_active" in fields:
        addon.is_active = bool(fields["is_active"])
    _commit("update addon")
    return addon


def delete_addon(addon_id: int):
    addon = get_addon(addon_id)
    if BookingAddon.query.filter_by(addon_id=addon.id).first():
        raise RecordInUse("Add-on is used by existing bookings; deactivate it instead")
    db.session.delete(addon)
    _commit("delete addon")


# ---------- settings ----------
@dataclass
class BookingSettings:
    additional_hour_price: int = DEFAULT_ADDITIONAL_HOUR_PRICE
    whatsapp_number: str = ""

    def to_dict(self):
        return {
            ADDITIONAL_HOUR_PRICE: self.additional_hour_price,
            WHATSAPP_NUMBER: self.whatsapp_number,
        }


def list_settings() -> dict:
    return {s.key: s.value for s in Setting.query.all()}


def get_setting(key: str) -> str:
    row = Setting.query.filter_by(key=key).first()
    if not row:
        raise RecordNotFound("setting", key)
    return row.value


def load_settings() -> BookingSettings:
    raw = list_settings()
    default_price = current_app.config.get("DEFAULT_ADDITIONAL_HOUR_PRICE", DEFAULT_ADDITIONAL_HOUR_PRICE)
    out = BookingSettings(additional_hour_price=default_price)

    if ADDITIONAL_HOUR_PRICE in raw:
        try:
            out.additional_hour_price = int(raw[ADDITIONAL_HOUR_PRICE].strip())
        except ValueError:
            current_app.logger.warning(
                "ignoring non-integer %s setting: %r", ADDITIONAL_HOUR_PRICE, raw[ADDITIONAL_HOUR_PRICE]
            )
    if WHATSAPP_NUMBER in raw:
        out.whatsapp_number = raw[WHATSAPP_NUMBER].strip()
    return out


def upsert_settings(values: dict) -> dict:
    if ADDITIONAL_HOUR_PRICE in values:
        values = dict(values)
        values[ADDITIONAL_HOUR_PRICE] = str(_non_negative_int(values[ADDITIONAL_HOUR_PRICE], ADDITIONAL_HOUR_PRICE))

    existing = {s.key: s for s in Setting.query.filter(Setting.key.in_(list(values))).all()}
    for key, value in values.items():
        value = "" if value is None else str(value).strip()
        row = existing.get(key)
        if row is None:
            db.session.add(Setting(key=key, value=value))
        else:
            row.value = value
    _commit("upsert settings")
    return list_settings()


# ---------- bookings ----------
def list_bookings(studio_id: int, booking_date, status_excluding=CANCELLED):
    q = Booking.query.filter_by(studio_id=studio_id, booking_date=booking_date)
    if status_excluding:
        q = q.filter(Booking.status != status_excluding)
    return q.order_by(Booking.start_time.asc()).all()


def get_booking(booking_id: str) -> Booking:
    booking = db.session.get(Booking, (booking_id or "").strip().upper())
    if not booking:
        raise RecordNotFound("booking", booking_id)
    return booking


def list_booking_addons(booking_id: str):
    return (
        BookingAddon.query
        .filter_by(booking_id=booking_id)
        .order_by(BookingAddon.id.asc())
        .all()
    )


def _lock_day(studio_id: int, booking_date) -> BookingDayLock:
    """
    Serializes booking writes for one studio/day. Row lock where the
    backend supports FOR UPDATE; the version bump makes the write
    transaction hold the day row either way.
    """
    q = BookingDayLock.query.filter_by(studio_id=studio_id, booking_date=booking_date)
    lock = q.with_for_update().first()
    if lock is None:
        lock = BookingDayLock(studio_id=studio_id, booking_date=booking_date, version=0)
        db.session.add(lock)
        try:
            db.session.flush()
        except IntegrityError:
            # another writer created it first
            db.session.rollback()
            lock = q.with_for_update().one()

    lock.version += 1
    db.session.flush()
    return lock


def _unused_booking_id() -> str:
    attempts = current_app.config.get("BOOKING_ID_MAX_ATTEMPTS", 5)
    for _ in range(attempts):
        candidate = new_booking_id()
        if db.session.get(Booking, candidate) is None:
            return candidate
    raise StoreWriteFailure("could not allocate a unique booking id")


def create_booking(fields: dict, addon_lines) -> Booking:
    """
    Persist a booking and its add-on lines in one transaction.

    fields: studio_id, booking_date, start_time, duration_hours,
    additional_hour, customer_name, customer_phone, customer_email,
    notes, total_price.
    addon_lines: iterable of (addon_id, quantity, unit_price); lines with
    quantity <= 0 are dropped.

    The day lock is taken before the overlap re-check, so a slot that was
    free when the customer picked it but was taken since raises
    SlotUnavailable instead of double-booking.
    """
    studio_id = fields["studio_id"]
    booking_date = fields["booking_date"]

    try:
        _lock_day(studio_id, booking_date)

        existing = list_bookings(studio_id, booking_date)
        if not is_slot_available(
            existing, fields["start_time"], fields["duration_hours"], fields.get("additional_hour", False)
        ):
            raise SlotUnavailable("Selected time is no longer available")

        booking = Booking(
            id=_unused_booking_id(),
            studio_id=studio_id,
            booking_date=booking_date,
            start_time=fields["start_time"],
            duration_hours=fields["duration_hours"],
            additional_hour=bool(fields.get("additional_hour", False)),
            customer_name=fields["customer_name"],
            customer_phone=fields["customer_phone"],
            customer_email=fields.get("customer_email"),
            notes=fields.get("notes"),
            total_price=fields["total_price"],
        )
        db.session.add(booking)

        for addon_id, quantity, unit_price in addon_lines:
            if quantity <= 0:
                continue
            db.session.add(BookingAddon(
                booking_id=booking.id,
                addon_id=addon_id,
                quantity=quantity,
                price=unit_price,
            ))
    except (SlotUnavailable, StoreWriteFailure):
        db.session.rollback()
        raise
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.exception("store write failed: create booking")
        raise StoreWriteFailure("create booking failed") from exc

    _commit("create booking")
    return booking


def update_booking_status(booking_id: str, new_status: str) -> Booking:
    if new_status not in BOOKING_STATUSES:
        raise InvalidBookingRequest(f"status must be one of {', '.join(BOOKING_STATUSES)}")

    booking = get_booking(booking_id)
    if booking.status == new_status:
        return booking

    if booking.status == CANCELLED:
        # reviving a cancelled booking must not collide with what was booked since
        try:
            _lock_day(booking.studio_id, booking.booking_date)
            others = [b for b in list_bookings(booking.studio_id, booking.booking_date) if b.id != booking.id]
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise StoreWriteFailure("update booking status failed") from exc
        if not is_slot_available(others, booking.start_time, booking.duration_hours, booking.additional_hour):
            db.session.rollback()
            raise SlotUnavailable("Time slot has been booked by someone else")

    booking.status = new_status
    booking.updated_at = datetime.utcnow()
    _commit("update booking status")
    return booking


def list_admin_bookings(status=None, booking_date=None, page: int = 1, per_page: int = 10):
    """
    Returns (rows, matching_count, total_count); newest date first, then
    latest start time first.
    """
    total = Booking.query.count()

    q = Booking.query
    if status:
        q = q.filter(Booking.status == status)
    if booking_date:
        q = q.filter(Booking.booking_date == booking_date)

    matching = q.count()
    page = max(int(page or 1), 1)
    rows = (
        q.order_by(Booking.booking_date.desc(), Booking.start_time.desc())
        .offset((page - 1) * per_page)
        .limit(per_page)
        .all()
    )
    return rows, matching, total
