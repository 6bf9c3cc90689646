from models import db
from models.pricing import PricingTier
from models.setting import ADDITIONAL_HOUR_PRICE, WHATSAPP_NUMBER, Setting
from models.studio import Studio

# hours -> price, smallest currency unit
DEFAULT_PRICING = {
    1: 150000,
    2: 300000,
    3: 400000,
    4: 500000,
    5: 600000,
    6: 700000,
    7: 800000,
    8: 900000,
}

DEFAULT_SETTINGS = {
    ADDITIONAL_HOUR_PRICE: "150000",
    WHATSAPP_NUMBER: "",
}

def seed_defaults():
    """Idempotent: only fills in what is missing."""
    existing_tiers = {t.duration_hours for t in PricingTier.query.all()}
    for hours, price in DEFAULT_PRICING.items():
        if hours not in existing_tiers:
            db.session.add(PricingTier(duration_hours=hours, price=price))

    existing_keys = {s.key for s in Setting.query.all()}
    for key, value in DEFAULT_SETTINGS.items():
        if key not in existing_keys:
            db.session.add(Setting(key=key, value=value))

    if Studio.query.count() == 0:
        db.session.add(Studio(name="Studio 1", description="Main photo studio"))

    db.session.commit()
