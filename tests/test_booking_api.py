from datetime import date, timedelta
from urllib.parse import unquote

from models.audit_log import AuditLog
from models.booking import Booking

from conftest import booking_payload


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.get_json() == {"status": "ok", "database": "ok"}
    assert resp.headers["X-Frame-Options"] == "DENY"


def test_studios_and_catalog(client, catalog):
    studios = client.get("/studios").get_json()
    assert [s["name"] for s in studios] == ["Studio A"]

    data = client.get("/catalog").get_json()
    assert [t["duration_hours"] for t in data["pricing"]] == [1, 2, 3, 4]
    assert [a["name"] for a in data["addons"]] == ["Backdrop", "Lighting Kit"]
    assert data["additional_hour_price"] == 150000


def test_availability(client, catalog, booking_day):
    client.post("/bookings", json=booking_payload(catalog, booking_day))

    resp = client.get(
        f"/availability?studio_id={catalog['studio_id']}&date={booking_day.isoformat()}&duration_hours=2"
    )
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["slots"][0] == "08:00"
    assert "09:00" not in data["slots"] and "10:00" not in data["slots"]
    assert data["slots"][-1] == "16:00"
    assert data["booked"] == [{"start": "10:00", "end": "12:00"}]

    with_extra = client.get(
        f"/availability?studio_id={catalog['studio_id']}&date={booking_day.isoformat()}"
        "&duration_hours=2&additional_hour=true"
    ).get_json()
    assert with_extra["slots"][-1] == "15:00"


def test_availability_validation(client, catalog):
    resp = client.get(f"/availability?studio_id={catalog['studio_id']}&date=02/11/2026&duration_hours=2")
    assert resp.status_code == 400

    resp = client.get(f"/availability?studio_id={catalog['inactive_studio_id']}&date=2026-11-02&duration_hours=2")
    assert resp.status_code == 404


def test_quote(client, catalog):
    resp = client.post("/quote", json={
        "duration_hours": 2,
        "additional_hour": True,
        "addons": {str(catalog["backdrop_id"]): 2},
    })
    assert resp.status_code == 200
    assert resp.get_json()["total"] == 550000


def test_quote_rejects_unpriced_duration(client, catalog):
    resp = client.post("/quote", json={"duration_hours": 7})
    assert resp.status_code == 400


def test_create_booking(client, catalog, booking_day):
    payload = booking_payload(
        catalog, booking_day,
        additional_hour=True,
        addons=[
            {"addon_id": catalog["backdrop_id"], "quantity": 2},
            {"addon_id": catalog["retired_addon_id"], "quantity": 1},
        ],
    )
    resp = client.post("/bookings", json=payload)
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["status"] == "pending"
    assert body["total_price"] == 550000

    booking = Booking.query.get(body["id"])
    assert booking.start_time == "10:00"
    assert [(l.addon_id, l.quantity, l.price) for l in booking.addon_lines] == [(catalog["backdrop_id"], 2, 50000)]
    assert AuditLog.query.filter_by(action="BOOKING_CREATE", entity_id=body["id"]).count() == 1


def test_create_booking_conflict(client, catalog, booking_day):
    assert client.post("/bookings", json=booking_payload(catalog, booking_day)).status_code == 201

    resp = client.post("/bookings", json=booking_payload(catalog, booking_day, start_time="11:00"))
    assert resp.status_code == 409
    assert resp.get_json()["error"] == "Selected time is not available"
    assert AuditLog.query.filter_by(action="BOOKING_FAIL_SLOT_TAKEN").count() == 1
    assert Booking.query.count() == 1


def test_create_booking_validation(client, catalog, booking_day):
    cases = [
        booking_payload(catalog, booking_day, customer_name=""),
        booking_payload(catalog, booking_day, start_time="7:00"),
        booking_payload(catalog, booking_day, start_time="17:00"),   # runs past closing
        booking_payload(catalog, booking_day, start_time="10:15"),   # not a slot boundary
        booking_payload(catalog, booking_day, duration_hours=6),     # no tier
        booking_payload(catalog, booking_day, customer_email="nope"),
        booking_payload(catalog, date.today() - timedelta(days=1)),
    ]
    for payload in cases:
        assert client.post("/bookings", json=payload).status_code == 400, payload

    assert Booking.query.count() == 0


def test_lookup_booking_with_whatsapp_link(client, catalog, booking_day):
    payload = booking_payload(catalog, booking_day, addons={str(catalog["lighting_id"]): 1})
    booking_id = client.post("/bookings", json=payload).get_json()["id"]

    resp = client.get(f"/bookings/{booking_id.lower()}")
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["studio_name"] == "Studio A"
    assert data["end_time"] == "12:00"
    assert data["addons"] == [{"addon_id": catalog["lighting_id"], "name": "Lighting Kit", "quantity": 1, "price": 75000}]

    url = data["whatsapp_url"]
    assert url.startswith("https://wa.me/628123456789?text=")
    message = unquote(url.split("?text=", 1)[1])
    assert f"Booking ID: {booking_id}" in message
    assert "- Lighting Kit (x1)" in message
    assert "Total: Rp 375.000" in message


def test_lookup_unknown_booking(client, catalog):
    resp = client.get("/bookings/HS-NOPE-00000")
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "Booking not found"


def test_contact_link(client, catalog, booking_day):
    booking_id = client.post("/bookings", json=booking_payload(catalog, booking_day)).get_json()["id"]

    resp = client.get(f"/bookings/{booking_id}/contact?action=cancel")
    assert resp.status_code == 200
    assert "cancel%20my%20booking" in resp.get_json()["whatsapp_url"]

    assert client.get(f"/bookings/{booking_id}/contact?action=refund").status_code == 400


def test_create_booking_rejects_wrong_json_types(client, catalog, booking_day):
    cases = [
        booking_payload(catalog, booking_day, start_time=1000),
        booking_payload(catalog, booking_day, start_time="1²:00"),
        booking_payload(catalog, booking_day, start_time="١٠:٠٠"),
        booking_payload(catalog, booking_day, customer_name=42),
        booking_payload(catalog, booking_day, booking_date=20260101),
        booking_payload(catalog, booking_day, notes=["x"]),
        booking_payload(catalog, booking_day, addons={str(catalog["backdrop_id"]): 1.7}),
    ]
    for payload in cases:
        assert client.post("/bookings", json=payload).status_code == 400, payload

    assert client.post("/bookings", json=[1, 2]).status_code == 400
    assert Booking.query.count() == 0


def test_quote_rejects_non_object_body(client, catalog):
    assert client.post("/quote", json=[1, 2]).status_code == 400
    assert client.post("/quote", json={"duration_hours": 2, "addons": {"1": 0.5}}).status_code == 400
    assert client.post("/quote", json={"duration_hours": 2.0}).status_code == 200
