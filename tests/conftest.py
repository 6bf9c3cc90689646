from datetime import date, timedelta

import pytest

from app import create_app
from config import TestConfig
from models import db
from models.addon import Addon
from models.pricing import PricingTier
from models.setting import ADDITIONAL_HOUR_PRICE, WHATSAPP_NUMBER, Setting
from models.studio import Studio
from security.csrf import CSRF_COOKIE, CSRF_HEADER


@pytest.fixture()
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def booking_day():
    return date.today() + timedelta(days=7)


@pytest.fixture()
def catalog(app):
    studio = Studio(name="Studio A", description="Daylight studio")
    hidden = Studio(name="Old Studio", is_active=False)
    db.session.add_all([studio, hidden])

    for hours, price in {1: 150000, 2: 300000, 3: 400000, 4: 500000}.items():
        db.session.add(PricingTier(duration_hours=hours, price=price))

    backdrop = Addon(name="Backdrop", price=50000)
    lighting = Addon(name="Lighting Kit", price=75000)
    retired = Addon(name="Fog Machine", price=90000, is_active=False)
    db.session.add_all([backdrop, lighting, retired])

    db.session.add(Setting(key=ADDITIONAL_HOUR_PRICE, value="150000"))
    db.session.add(Setting(key=WHATSAPP_NUMBER, value="628123456789"))
    db.session.commit()

    return {
        "studio_id": studio.id,
        "inactive_studio_id": hidden.id,
        "backdrop_id": backdrop.id,
        "lighting_id": lighting.id,
        "retired_addon_id": retired.id,
    }


@pytest.fixture()
def admin_headers(client):
    resp = client.post("/admin/login", json={"password": TestConfig.ADMIN_PASSWORD})
    assert resp.status_code == 200
    return {CSRF_HEADER: client.get_cookie(CSRF_COOKIE).value}


def booking_payload(catalog, day, **overrides):
    payload = {
        "studio_id": catalog["studio_id"],
        "booking_date": day.isoformat(),
        "start_time": "10:00",
        "duration_hours": 2,
        "additional_hour": False,
        "customer_name": "Dewi Lestari",
        "customer_phone": "0812000111",
        "customer_email": "dewi@example.com",
        "addons": {},
    }
    payload.update(overrides)
    return payload
