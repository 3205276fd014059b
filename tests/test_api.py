from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from nonprofit_api.app.core.storage import Storage
from nonprofit_api.app.services.event_service import EventService

API = "/api/v1"

EVENT_PAYLOAD = {
    "title": "Community Park Cleanup",
    "description": "Clean up the park and plant trees.",
    "date": "2025-12-15T09:00:00",
    "location": "Central Park, Main Entrance",
    "capacity": 1,
}


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin(make_user):
    return make_user(role="admin", email="admin@hopefoundation.org")


# -- auth -------------------------------------------------------------------


def test_signup_returns_donor_and_token(client):
    response = client.post(
        f"{API}/auth/signup",
        json={"name": "Emily Rodriguez", "email": "emily@example.com", "password": "password123"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["user"]["role"] == "donor"
    assert body["user"]["email"] == "emily@example.com"
    assert "password" not in body["user"]

    me = client.get(f"{API}/auth/me", headers=auth(body["token"]))
    assert me.status_code == 200
    assert me.json()["id"] == body["user"]["id"]


def test_signup_duplicate_email(client):
    payload = {"name": "Emily", "email": "emily@example.com", "password": "password123"}
    client.post(f"{API}/auth/signup", json=payload)

    response = client.post(f"{API}/auth/signup", json=payload)

    assert response.status_code == 400
    assert response.json() == {"error": "User already exists"}


def test_signup_validation_errors_are_listed(client):
    response = client.post(f"{API}/auth/signup", json={"name": "Emily", "email": "not-an-email"})

    assert response.status_code == 400
    errors = response.json()["error"]
    assert isinstance(errors, list)
    assert {tuple(error["loc"])[-1] for error in errors} >= {"email", "password"}


def test_login(client, make_user):
    user, _ = make_user(email="david@example.com")

    response = client.post(f"{API}/auth/login", json={"email": "david@example.com", "password": "password123"})

    assert response.status_code == 200
    assert response.json()["user"]["id"] == user["id"]
    assert response.json()["token"]


def test_login_matches_signup_normalization(client):
    signup = client.post(
        f"{API}/auth/signup",
        json={"name": "Amy", "email": "Amy@Example.COM", "password": "password123"},
    )
    assert signup.json()["user"]["email"] == "Amy@example.com"

    response = client.post(f"{API}/auth/login", json={"email": "Amy@Example.COM", "password": "password123"})

    assert response.status_code == 200
    assert response.json()["user"]["id"] == signup.json()["user"]["id"]


def test_login_missing_fields(client):
    response = client.post(f"{API}/auth/login", json={"email": "david@example.com"})

    assert response.status_code == 400
    assert response.json() == {"error": "Email and password are required"}


@pytest.mark.parametrize("email,password", [("david@example.com", "wrong"), ("nobody@example.com", "password123")])
def test_login_bad_credentials(client, make_user, email, password):
    make_user(email="david@example.com")

    response = client.post(f"{API}/auth/login", json={"email": email, "password": password})

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid credentials"}


def test_me_requires_token(client):
    response = client.get(f"{API}/auth/me")

    assert response.status_code == 401
    assert response.json() == {"error": "No token provided"}


def test_me_with_invalid_token(client):
    response = client.get(f"{API}/auth/me", headers=auth("garbage"))

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid or expired token"}


# -- events -----------------------------------------------------------------


def test_event_writes_require_admin(client, make_user):
    _, token = make_user(role="donor")

    anonymous = client.post(f"{API}/events", json=EVENT_PAYLOAD)
    donor = client.post(f"{API}/events", json=EVENT_PAYLOAD, headers=auth(token))

    assert anonymous.status_code == 401
    assert donor.status_code == 403
    assert donor.json() == {"error": "Admin access required"}


def test_event_crud(client, admin):
    _, token = admin

    created = client.post(f"{API}/events", json=EVENT_PAYLOAD, headers=auth(token))
    assert created.status_code == 200
    event = created.json()
    assert event["registered"] == 0
    assert event["status"] == "upcoming"

    listed = client.get(f"{API}/events")
    assert [e["id"] for e in listed.json()] == [event["id"]]

    updated = client.put(f"{API}/events/{event['id']}", json={"capacity": 5}, headers=auth(token))
    assert updated.status_code == 200
    assert updated.json()["capacity"] == 5
    assert updated.json()["title"] == EVENT_PAYLOAD["title"]

    deleted = client.delete(f"{API}/events/{event['id']}", headers=auth(token))
    assert deleted.status_code == 200
    assert client.get(f"{API}/events/{event['id']}").status_code == 404


def test_event_schema_is_enforced(client, admin):
    _, token = admin

    response = client.post(f"{API}/events", json={**EVENT_PAYLOAD, "capacity": 0}, headers=auth(token))

    assert response.status_code == 400
    assert isinstance(response.json()["error"], list)


@pytest.mark.parametrize("field", ["title", "capacity", "date", "status"])
def test_event_update_rejects_null(client, admin, make_event, field):
    _, token = admin
    event = make_event(capacity=3)

    response = client.put(f"{API}/events/{event['id']}", json={field: None}, headers=auth(token))

    assert response.status_code == 400
    assert isinstance(response.json()["error"], list)
    assert Storage.get_event(event["id"])[field] == event[field]


def test_event_update_can_clear_image(client, admin, make_event):
    _, token = admin
    event = make_event(image_url="https://example.org/park.jpg")

    response = client.put(f"{API}/events/{event['id']}", json={"image_url": None}, headers=auth(token))

    assert response.status_code == 200
    assert response.json()["image_url"] is None


def test_capacity_cannot_drop_below_registered(client, admin, make_user, make_event):
    _, admin_token = admin
    event = make_event(capacity=3)
    for _ in range(2):
        user, _ = make_user()
        Storage.register_for_event(event["id"], user["id"])

    response = client.put(f"{API}/events/{event['id']}", json={"capacity": 1}, headers=auth(admin_token))

    assert response.status_code == 400
    assert Storage.get_event(event["id"])["capacity"] == 3


def test_registration_scenario(client, admin, make_user):
    _, admin_token = admin
    _, token_a = make_user()
    _, token_b = make_user()
    event = client.post(f"{API}/events", json=EVENT_PAYLOAD, headers=auth(admin_token)).json()
    url = f"{API}/events/{event['id']}/register"

    first = client.post(url, headers=auth(token_a))
    assert first.status_code == 200
    assert first.json()["event_id"] == event["id"]

    full = client.post(url, headers=auth(token_b))
    assert full.status_code == 400
    assert full.json() == {"error": "Event is full"}

    again = client.post(url, headers=auth(token_a))
    assert again.status_code == 400
    assert again.json()["error"].startswith("Already registered")

    assert client.get(f"{API}/events/{event['id']}").json()["registered"] == 1
    registrations = client.get(f"{API}/events/{event['id']}/registrations", headers=auth(admin_token))
    assert len(registrations.json()) == 1


def test_register_requires_auth_and_existing_event(client, make_user):
    _, token = make_user()

    assert client.post(f"{API}/events/1/register").status_code == 401
    missing = client.post(f"{API}/events/404/register", headers=auth(token))
    assert missing.status_code == 404
    assert missing.json() == {"error": "Event not found"}


def test_user_events(client, make_user, make_event):
    _, token = make_user()
    event = make_event(title="Youth Education Workshop")
    client.post(f"{API}/events/{event['id']}/register", headers=auth(token))

    response = client.get(f"{API}/user/events", headers=auth(token))

    assert response.status_code == 200
    assert response.json()[0]["event"]["title"] == "Youth Education Workshop"


# -- donations --------------------------------------------------------------


def test_donation_total(client, make_user):
    _, token = make_user()
    for amount, status in [("100.00", "completed"), ("250.00", "completed"), ("50.00", "pending")]:
        response = client.post(
            f"{API}/donations",
            json={"amount": amount, "status": status, "payment_id": "pay_demo"},
            headers=auth(token),
        )
        assert response.status_code == 200

    total = client.get(f"{API}/donations/total")

    assert total.status_code == 200
    assert Decimal(total.json()["total"]) == Decimal("350.00")
    assert len(client.get(f"{API}/user/donations", headers=auth(token)).json()) == 3


def test_donation_listing_is_admin_only(client, admin, make_user):
    _, donor_token = make_user()
    _, admin_token = admin

    assert client.get(f"{API}/donations", headers=auth(donor_token)).status_code == 403
    assert client.get(f"{API}/donations", headers=auth(admin_token)).status_code == 200


# -- volunteering -----------------------------------------------------------


def test_apply_and_approve(client, admin, make_user):
    _, admin_token = admin
    user, token = make_user()
    payload = {"name": user["name"], "email": user["email"], "availability": "weekends", "interests": ["Food"]}

    applied = client.post(f"{API}/volunteer/apply", json=payload, headers=auth(token))
    assert applied.status_code == 200
    assert applied.json()["status"] == "pending"

    duplicate = client.post(f"{API}/volunteer/apply", json=payload, headers=auth(token))
    assert duplicate.status_code == 400
    assert duplicate.json() == {"error": "You have already submitted a volunteer application"}

    forbidden = client.patch(
        f"{API}/volunteer/applications/{applied.json()['id']}", json={"status": "approved"}, headers=auth(token)
    )
    assert forbidden.status_code == 403

    approved = client.patch(
        f"{API}/volunteer/applications/{applied.json()['id']}",
        json={"status": "approved"},
        headers=auth(admin_token),
    )
    assert approved.status_code == 200
    assert approved.json()["status"] == "approved"
    assert client.get(f"{API}/auth/me", headers=auth(token)).json()["role"] == "volunteer"
    assert client.get(f"{API}/user/volunteer", headers=auth(token)).json()["id"] == applied.json()["id"]


def test_application_status_must_be_known(client, admin, make_user):
    _, admin_token = admin

    response = client.patch(f"{API}/volunteer/applications/1", json={"status": "maybe"}, headers=auth(admin_token))

    assert response.status_code == 400


def test_update_missing_application(client, admin):
    _, admin_token = admin

    response = client.patch(
        f"{API}/volunteer/applications/77", json={"status": "rejected"}, headers=auth(admin_token)
    )

    assert response.status_code == 404
    assert response.json() == {"error": "Application not found"}


def test_user_volunteer_is_null_without_application(client, make_user):
    _, token = make_user()

    response = client.get(f"{API}/user/volunteer", headers=auth(token))

    assert response.status_code == 200
    assert response.json() is None


# -- contact, users, admin --------------------------------------------------


def test_contact_submission_flow(client, admin):
    _, admin_token = admin
    payload = {"name": "Visitor", "email": "visitor@example.com", "subject": "Hello", "message": "Question"}

    created = client.post(f"{API}/contact", json=payload)
    assert created.status_code == 200
    assert created.json()["status"] == "new"

    assert client.get(f"{API}/contact/submissions").status_code == 401
    listed = client.get(f"{API}/contact/submissions", headers=auth(admin_token))
    assert [s["subject"] for s in listed.json()] == ["Hello"]

    updated = client.patch(
        f"{API}/contact/submissions/{created.json()['id']}", json={"status": "read"}, headers=auth(admin_token)
    )
    assert updated.json()["status"] == "read"


def test_admin_sets_role(client, admin, make_user):
    admin_user, admin_token = admin
    user, _ = make_user()

    response = client.put(f"{API}/users/{user['id']}/role", json={"role": "volunteer"}, headers=auth(admin_token))
    assert response.status_code == 200
    assert response.json()["role"] == "volunteer"

    self_demotion = client.put(
        f"{API}/users/{admin_user['id']}/role", json={"role": "donor"}, headers=auth(admin_token)
    )
    assert self_demotion.status_code == 400

    listed = client.get(f"{API}/users", headers=auth(admin_token))
    assert all("password" not in u for u in listed.json())


def test_admin_stats(client, admin, make_user, make_event):
    _, admin_token = admin
    user, token = make_user()
    event = make_event(capacity=2)
    make_event(status="past")
    client.post(f"{API}/events/{event['id']}/register", headers=auth(token))
    client.post(f"{API}/donations", json={"amount": "40.00", "status": "completed"}, headers=auth(token))
    client.post(
        f"{API}/volunteer/apply",
        json={"name": user["name"], "email": user["email"], "availability": "evenings"},
        headers=auth(token),
    )

    response = client.get(f"{API}/admin/stats", headers=auth(admin_token))

    assert response.status_code == 200
    stats = response.json()
    assert stats["total_events"] == 2
    assert stats["upcoming_events"] == 1
    assert stats["total_registrations"] == 1
    assert stats["total_donations"] == 1
    assert Decimal(stats["total_donations_amount"]) == Decimal("40.00")
    assert stats["pending_applications"] == 1
    assert client.get(f"{API}/admin/stats", headers=auth(token)).status_code == 403


def test_unexpected_errors_are_not_leaked(monkeypatch):
    from nonprofit_api.app.main import app

    async def explode(cls, status=None):
        raise RuntimeError("database is on fire")

    monkeypatch.setattr(EventService, "list_events", classmethod(explode))

    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get(f"{API}/events")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


def test_health(client):
    assert client.get(f"{API}/health").json() == {"status": "ok"}
