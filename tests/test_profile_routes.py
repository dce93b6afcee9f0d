"""API tests for profile management and phone verification."""

from __future__ import annotations

import pytest


@pytest.fixture
def sent_codes(app):
    """Capture codes instead of logging them."""

    sent = []
    app.extensions["habitpulse"]["code_sender"] = (
        lambda phone_number, code, expires_at: sent.append((phone_number, code))
    )
    return sent


def test_profile_is_null_until_saved(client, auth_headers):
    payload = client.get("/api/profile", headers=auth_headers).get_json()

    assert payload["user"]["externalId"] == "user_alice"
    assert payload["user"]["email"] == "alice@example.com"
    assert payload["profile"] is None


def test_profile_upsert_keeps_omitted_fields(client, auth_headers):
    first = client.post(
        "/api/profile",
        json={"nickname": "Ali", "bio": "Morning runner", "timezone": "Europe/Bucharest"},
        headers=auth_headers,
    )
    assert first.status_code == 200

    client.post("/api/profile", json={"theme": "dark"}, headers=auth_headers)
    profile = client.get("/api/profile", headers=auth_headers).get_json()["profile"]

    assert profile["nickname"] == "Ali"
    assert profile["bio"] == "Morning runner"
    assert profile["timezone"] == "Europe/Bucharest"
    assert profile["theme"] == "dark"
    assert profile["phoneVerified"] is False


def test_profile_rejects_unknown_timezone(client, auth_headers):
    response = client.post("/api/profile", json={"timezone": "Mars/Olympus"}, headers=auth_headers)

    assert response.status_code == 400
    assert "timezone" in response.get_json()["fields"]


def test_profile_requires_identity(client):
    assert client.get("/api/profile").status_code == 401
    assert client.post("/api/verify-phone", json={"action": "send"}).status_code == 401


def test_send_and_verify_phone(client, auth_headers, sent_codes):
    sent = client.post(
        "/api/verify-phone",
        json={"action": "send", "phoneNumber": "0040712345678"},
        headers=auth_headers,
    )
    assert sent.status_code == 200
    assert sent.get_json()["success"] is True
    ((phone_number, code),) = sent_codes
    assert phone_number == "+40712345678"

    verified = client.post(
        "/api/verify-phone", json={"action": "verify", "code": code}, headers=auth_headers
    )
    assert verified.status_code == 200
    assert verified.get_json()["success"] is True

    profile = client.get("/api/profile", headers=auth_headers).get_json()["profile"]
    assert profile["phoneVerified"] is True
    assert profile["phoneNumber"] == "+40712345678"


def test_send_rejects_invalid_number(client, auth_headers, sent_codes):
    response = client.post(
        "/api/verify-phone", json={"action": "send", "phoneNumber": "12345"}, headers=auth_headers
    )

    assert response.status_code == 400
    assert "Romanian" in response.get_json()["error"]
    assert sent_codes == []


def test_verify_rejects_wrong_code(client, auth_headers, sent_codes):
    client.post(
        "/api/verify-phone",
        json={"action": "send", "phoneNumber": "712345678"},
        headers=auth_headers,
    )
    wrong = "000000" if sent_codes[0][1] != "000000" else "999999"

    response = client.post(
        "/api/verify-phone", json={"action": "verify", "code": wrong}, headers=auth_headers
    )

    assert response.status_code == 400
    assert response.get_json() == {"error": "Invalid or expired verification code"}


def test_unknown_action(client, auth_headers):
    response = client.post("/api/verify-phone", json={"action": "call"}, headers=auth_headers)

    assert response.status_code == 400
    assert response.get_json() == {"error": "Invalid action"}
