from datetime import datetime
from models.db import db

class PricingTier(db.Model):
    __tablename__ = "pricing"

    id = db.Column(db.Integer, primary_key=True)
    duration_hours = db.Column(db.Integer, unique=True, nullable=False, index=True)
    price = db.Column(db.Integer, nullable=False)  # smallest currency unit

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        db.CheckConstraint("duration_hours > 0", name="ck_pricing_duration_positive"),
        db.CheckConstraint("price >= 0", name="ck_pricing_price_non_negative"),
    )

    def to_dict(self):
        return {"duration_hours": self.duration_hours, "price": self.price}
