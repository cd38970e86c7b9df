from datetime import datetime, timezone

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app import crud
from tests.utils.event import create_test_booking, create_test_event

ADMIN = "/api/v1/admin/acme"
EVENT = f"{ADMIN}/events/consultation"
PUBLIC = "/api/v1/acme/events/consultation"


def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


def slots(client: TestClient, day="2026-11-02"):
    return client.get(f"{PUBLIC}/slots", params={"date": day}).json()["slots"]


class TestOverrides:
    def test_upsert_list_delete(self, client: TestClient, db_session: Session):
        create_test_event(db_session)

        response = client.post(f"{EVENT}/overrides", json={"date": "2026-11-02", "is_unavailable": True})
        assert response.status_code == 200
        assert slots(client) == []

        # Posting the same date again replaces the override
        response = client.post(
            f"{EVENT}/overrides",
            json={
                "date": "2026-11-02",
                "config": {"monday": [{"start": "18:00", "end": "19:00"}]},
                "override_max_participants": 2,
            },
        )
        assert response.status_code == 200
        assert response.json()["is_unavailable"] is False
        assert slots(client) == ["2026-11-02T17:00:00Z"]

        listed = client.get(f"{EVENT}/overrides", params={"start": "2026-11-01", "end": "2026-11-30"}).json()
        assert [o["date"] for o in listed] == ["2026-11-02"]

        assert client.delete(f"{EVENT}/overrides/2026-11-02").status_code == 204
        assert len(slots(client)) == 8
        assert client.delete(f"{EVENT}/overrides/2026-11-02").status_code == 404

    def test_override_bumps_event_version(self, client: TestClient, db_session: Session):
        event = create_test_event(db_session)
        client.post(f"{EVENT}/overrides", json={"date": "2026-11-02", "is_unavailable": True})

        db_session.refresh(event)
        assert event.version == 2


class TestSessions:
    def _manual_event(self, db_session):
        return create_test_event(db_session, schedule_type="MANUAL", config={})

    def test_create_list_update_delete(self, client: TestClient, db_session: Session):
        self._manual_event(db_session)

        response = client.post(
            f"{EVENT}/sessions",
            json={"start_time": "2026-11-02T14:00:00Z", "end_time": "2026-11-02T15:00:00Z", "max_participants": 2},
        )
        assert response.status_code == 201
        session_id = response.json()["id"]
        assert slots(client) == ["2026-11-02T14:00:00Z"]

        response = client.put(
            f"{EVENT}/sessions/{session_id}",
            json={"start_time": "2026-11-02T15:00:00Z", "end_time": "2026-11-02T16:00:00Z"},
        )
        assert response.status_code == 200
        assert slots(client) == ["2026-11-02T15:00:00Z"]

        listed = client.get(f"{EVENT}/sessions").json()
        assert [(s["id"], s["booked_count"]) for s in listed] == [(session_id, 0)]

        assert client.delete(f"{EVENT}/sessions/{session_id}").status_code == 204
        assert slots(client) == []

    def test_invalid_time_order(self, client: TestClient, db_session: Session):
        self._manual_event(db_session)
        response = client.post(
            f"{EVENT}/sessions",
            json={"start_time": "2026-11-02T15:00:00Z", "end_time": "2026-11-02T14:00:00Z"},
        )
        assert response.status_code == 400

    def test_session_with_bookings_is_protected(self, client: TestClient, db_session: Session):
        self._manual_event(db_session)
        session_id = client.post(
            f"{EVENT}/sessions",
            json={"start_time": "2026-11-02T14:00:00Z", "end_time": "2026-11-02T15:00:00Z", "max_participants": 2},
        ).json()["id"]
        for email in ("a@example.com", "b@example.com"):
            response = client.post(
                f"{PUBLIC}/book",
                json={"date": "2026-11-02", "time": "15:00", "name": "Guest", "email": email},
            )
            assert response.status_code == 201

        shrink = client.put(f"{EVENT}/sessions/{session_id}", json={"max_participants": 1})
        delete = client.delete(f"{EVENT}/sessions/{session_id}")

        assert shrink.status_code == 409
        assert delete.status_code == 409
        assert client.get(f"{EVENT}/sessions").json()[0]["booked_count"] == 2


class TestInvitees:
    def test_create_import_update_delete(self, client: TestClient, db_session: Session):
        create_test_event(db_session, access_mode="RESTRICTED")

        single = client.post(f"{EVENT}/invitees", json={"email": "ada@example.com"})
        assert single.status_code == 201
        invitee = single.json()
        assert invitee["status"] == "ACTIVE"

        imported = client.post(
            f"{EVENT}/invitees/import", json={"emails": ["b@example.com", "c@example.com", "b@example.com"]}
        )
        assert imported.status_code == 201
        assert imported.json()["imported"] == 2

        assert len(client.get(f"{EVENT}/invitees").json()) == 3

        revoked = client.put(f"{ADMIN}/invitees/{invitee['id']}", json={"status": "REVOKED"})
        assert revoked.json()["status"] == "REVOKED"

        response = client.post(
            f"{PUBLIC}/book",
            json={"date": "2026-11-02", "time": "10:00", "name": "Ada", "email": "ada@example.com", "token": invitee["token"]},
        )
        assert response.status_code == 403

        assert client.delete(f"{ADMIN}/invitees/{invitee['id']}").status_code == 204
        assert len(client.get(f"{EVENT}/invitees").json()) == 2

    def test_invitee_of_other_tenant(self, client: TestClient, db_session: Session):
        event = create_test_event(db_session, tenant_id="globex", access_mode="RESTRICTED")
        invitee = crud.invitee.create_for_event(db_session, event_id=event.id)
        assert client.put(f"{ADMIN}/invitees/{invitee.id}", json={"status": "REVOKED"}).status_code == 404

    def test_import_rejects_malformed_email(self, client: TestClient, db_session: Session):
        create_test_event(db_session, access_mode="RESTRICTED")

        response = client.post(f"{EVENT}/invitees/import", json={"emails": ["b@example.com", "c@example..com"]})

        assert response.status_code == 400
        assert response.json()["code"] == "ValidationError"
        assert client.get(f"{EVENT}/invitees").json() == []


class TestBookingsAndLabels:
    def test_list_label_and_cancel(self, client: TestClient, db_session: Session):
        event = create_test_event(db_session)
        create_test_event(db_session, tenant_id="globex", slug="consultation")
        booking = create_test_booking(db_session, event, utc(2026, 11, 2, 9, 0), utc(2026, 11, 2, 10, 0))

        label = client.post(f"{ADMIN}/labels", json={"name": "VIP", "color": "#ff9900"})
        assert label.status_code == 201
        label_id = label.json()["id"]

        response = client.put(
            f"{ADMIN}/bookings/{booking.id}", json={"label_id": label_id, "customer_note": "Bring documents"}
        )
        assert response.status_code == 200
        assert response.json()["label_id"] == label_id
        assert response.json()["customer_note"] == "Bring documents"

        # Empty string clears
        response = client.put(f"{ADMIN}/bookings/{booking.id}", json={"customer_note": ""})
        assert response.json()["customer_note"] is None

        assert [b["id"] for b in client.get(f"{ADMIN}/bookings").json()] == [booking.id]
        assert [b["id"] for b in client.get(f"{EVENT}/bookings").json()] == [booking.id]

        cancelled = client.post(f"{ADMIN}/bookings/{booking.id}/cancel")
        assert cancelled.status_code == 200
        assert cancelled.json()["status"] == "CANCELLED"

        assert client.delete(f"{ADMIN}/labels/{label_id}").status_code == 204
        assert client.get(f"{ADMIN}/labels").json() == []
        db_session.refresh(booking)
        assert booking.label_id is None

    def test_admin_cancel_ignores_customer_setting(self, client: TestClient, db_session: Session):
        event = create_test_event(db_session, allow_customer_cancel=False)
        booking = create_test_booking(db_session, event, utc(2026, 11, 2, 9, 0), utc(2026, 11, 2, 10, 0))

        response = client.post(f"{ADMIN}/bookings/{booking.id}/cancel")
        assert response.status_code == 200

    def test_unknown_label_is_404(self, client: TestClient, db_session: Session):
        event = create_test_event(db_session)
        booking = create_test_booking(db_session, event, utc(2026, 11, 2, 9, 0), utc(2026, 11, 2, 10, 0))

        response = client.put(f"{ADMIN}/bookings/{booking.id}", json={"label_id": "lbl_missing"})
        assert response.status_code == 404

    def test_foreign_booking_is_404(self, client: TestClient, db_session: Session):
        other = create_test_event(db_session, tenant_id="globex")
        booking = create_test_booking(db_session, other, utc(2026, 11, 2, 9, 0), utc(2026, 11, 2, 10, 0))

        assert client.post(f"{ADMIN}/bookings/{booking.id}/cancel").status_code == 404


def test_health(client: TestClient):
    assert client.get("/api/v1/health").json()["status"] == "healthy"
    assert client.get("/api/v1/health/db").json()["status"] == "healthy"
    assert client.get("/api/v1/health/redis").json()["status"] == "disabled"
