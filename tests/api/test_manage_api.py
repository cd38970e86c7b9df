from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from tests.utils.event import create_test_event

BASE = "/api/v1/acme/events/consultation"


def _book(client: TestClient, time="10:00") -> dict:
    response = client.post(
        f"{BASE}/book",
        json={"date": "2026-11-02", "time": time, "name": "Ada", "email": "ada@example.com"},
    )
    assert response.status_code == 201
    return response.json()


def test_get_managed_booking(client: TestClient, db_session: Session):
    create_test_event(db_session)
    token = _book(client)["management_token"]

    response = client.get(f"/api/v1/bookings/manage/{token}")

    assert response.status_code == 200
    content = response.json()
    assert content["booking"]["status"] == "CONFIRMED"
    assert content["booking"]["customer_email"] == "ada@example.com"
    assert content["event"]["slug"] == "consultation"


def test_unknown_management_token(client: TestClient):
    response = client.get("/api/v1/bookings/manage/unknown")
    assert response.status_code == 404


def test_cancel_is_idempotent_and_frees_slot(client: TestClient, db_session: Session):
    create_test_event(db_session)
    token = _book(client)["management_token"]

    first = client.post(f"/api/v1/bookings/manage/{token}/cancel")
    second = client.post(f"/api/v1/bookings/manage/{token}/cancel")

    assert first.status_code == 200
    assert second.status_code == 200
    assert second.json()["booking"]["status"] == "CANCELLED"

    slots = client.get(f"{BASE}/slots", params={"date": "2026-11-02"}).json()["slots"]
    assert "2026-11-02T09:00:00Z" in slots


def test_cancel_not_allowed(client: TestClient, db_session: Session):
    create_test_event(db_session, allow_customer_cancel=False)
    token = _book(client)["management_token"]

    response = client.post(f"/api/v1/bookings/manage/{token}/cancel")

    assert response.status_code == 403
    assert response.json()["code"] == "AccessDenied"


def test_reschedule(client: TestClient, db_session: Session):
    create_test_event(db_session)
    token = _book(client)["management_token"]

    response = client.post(
        f"/api/v1/bookings/manage/{token}/reschedule",
        json={"date": "2026-11-02", "time": "2026-11-02T13:00:00Z"},
    )

    assert response.status_code == 200
    assert response.json()["booking"]["start_time"].startswith("2026-11-02T13:00:00")
    slots = client.get(f"{BASE}/slots", params={"date": "2026-11-02"}).json()["slots"]
    assert "2026-11-02T09:00:00Z" in slots
    assert "2026-11-02T13:00:00Z" not in slots


def test_reschedule_into_full_slot(client: TestClient, db_session: Session):
    create_test_event(db_session)
    token = _book(client, "10:00")["management_token"]
    _book(client, "11:00")

    response = client.post(
        f"/api/v1/bookings/manage/{token}/reschedule", json={"date": "2026-11-02", "time": "11:00"}
    )

    assert response.status_code == 409
    booking = client.get(f"/api/v1/bookings/manage/{token}").json()["booking"]
    assert booking["start_time"].startswith("2026-11-02T09:00:00")
