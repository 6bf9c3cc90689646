from datetime import datetime
from models.db import db

PENDING = "pending"
CONFIRMED = "confirmed"
CANCELLED = "cancelled"
BOOKING_STATUSES = (PENDING, CONFIRMED, CANCELLED)

class Booking(db.Model):
    __tablename__ = "bookings"

    # public booking code, e.g. HS-MKX3Q9ZC-4F7QA
    id = db.Column(db.String(40), primary_key=True)

    studio_id = db.Column(db.Integer, db.ForeignKey("studios.id"), nullable=False)
    booking_date = db.Column(db.Date, nullable=False)
    start_time = db.Column(db.String(5), nullable=False)  # HH:MM
    duration_hours = db.Column(db.Integer, nullable=False)
    additional_hour = db.Column(db.Boolean, default=False, nullable=False)

    customer_name = db.Column(db.String(120), nullable=False)
    customer_phone = db.Column(db.String(30), nullable=False)
    customer_email = db.Column(db.String(255), nullable=True)
    notes = db.Column(db.Text, nullable=True)

    total_price = db.Column(db.Integer, nullable=False)
    status = db.Column(db.String(20), nullable=False, default=PENDING)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    studio = db.relationship("Studio")
    addon_lines = db.relationship("BookingAddon", back_populates="booking", order_by="BookingAddon.id")

    __table_args__ = (
        db.Index("ix_bookings_studio_date", "studio_id", "booking_date"),
        db.CheckConstraint("duration_hours > 0", name="ck_bookings_duration_positive"),
        db.CheckConstraint("total_price >= 0", name="ck_bookings_total_non_negative"),
    )


class BookingAddon(db.Model):
    __tablename__ = "booking_addons"

    id = db.Column(db.Integer, primary_key=True)
    booking_id = db.Column(db.String(40), db.ForeignKey("bookings.id"), nullable=False, index=True)
    addon_id = db.Column(db.Integer, db.ForeignKey("addons.id"), nullable=False)
    quantity = db.Column(db.Integer, nullable=False, default=1)

    # unit price at booking time; later catalog edits must not change it
    price = db.Column(db.Integer, nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    booking = db.relationship("Booking", back_populates="addon_lines")
    addon = db.relationship("Addon")

    __table_args__ = (
        db.CheckConstraint("quantity > 0", name="ck_booking_addons_quantity_positive"),
    )


class BookingDayLock(db.Model):
    """One row per studio/day; locked while a booking for that day is written."""
    __tablename__ = "booking_day_locks"

    id = db.Column(db.Integer, primary_key=True)
    studio_id = db.Column(db.Integer, db.ForeignKey("studios.id"), nullable=False)
    booking_date = db.Column(db.Date, nullable=False)
    # bumped on each booking write so concurrent writers conflict on the row
    version = db.Column(db.Integer, nullable=False, default=0)

    __table_args__ = (
        db.UniqueConstraint("studio_id", "booking_date", name="uq_booking_day_lock"),
    )
