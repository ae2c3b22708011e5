"""Tests for the registration endpoint."""

from __future__ import annotations

from tests.factories.user import UserFactory

URL = "/api/v1/auth/register"

PAYLOAD = {
    "username": "alice",
    "email": "alice@example.com",
    "password": "correct-password",
    "name": "Alice Liddell",
    "phone_number": "0123456789",
    "gender": "female",
}


def test_register_creates_customer(client):
    resp = client.post(URL, json=PAYLOAD)
    assert resp.status_code == 201
    data = resp.get_json()["data"]
    assert data["username"] == "alice"
    assert data["role"] == "customer"
    assert "password" not in data
    assert "password_hash" not in data


def test_role_cannot_be_self_assigned(client):
    resp = client.post(URL, json={**PAYLOAD, "role": "admin"})
    assert resp.status_code == 422
    assert "role" in resp.get_json()["details"]["errors"]


def test_validation_errors(client):
    resp = client.post(URL, json={**PAYLOAD, "password": "short", "phone_number": "12"})
    assert resp.status_code == 422
    errors = resp.get_json()["details"]["errors"]
    assert set(errors) == {"password", "phone_number"}


def test_duplicate_is_conflict(client, session):
    UserFactory(username="alice")
    session.commit()
    resp = client.post(URL, json=PAYLOAD)
    assert resp.status_code == 409
    assert resp.get_json()["code"] == "conflict"


def test_registered_user_can_log_in(client):
    client.post(URL, json=PAYLOAD)
    resp = client.post(
        "/api/v1/auth/login", json={"username": "alice", "password": "correct-password"}
    )
    assert resp.status_code == 200


def test_username_is_measured_after_trimming(client):
    resp = client.post(URL, json={**PAYLOAD, "username": "  ab  "})
    assert resp.status_code == 422
    assert "username" in resp.get_json()["details"]["errors"]


def test_padded_username_is_stored_trimmed(client):
    resp = client.post(URL, json={**PAYLOAD, "username": "  alice  "})
    assert resp.status_code == 201
    assert resp.get_json()["data"]["username"] == "alice"


def test_model_rejection_is_validation_error(client):
    # Accepted by the schema's email rule, refused by the model's.
    resp = client.post(URL, json={**PAYLOAD, "email": "alice@localhost"})
    assert resp.status_code == 422
    body = resp.get_json()
    assert body["code"] == "validation_error"
    assert body["details"]["errors"]["_schema"]
