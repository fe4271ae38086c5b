"""
Tests for registration, login and the password flows in the users app.
"""
import pytest
from django.contrib.auth import get_user_model
from django.contrib.auth.tokens import PasswordResetTokenGenerator
from django.core import mail
from django.utils.encoding import force_bytes
from django.utils.http import urlsafe_base64_encode

from conftest import PASSWORD

User = get_user_model()


def register(client, **overrides):
    payload = {
        "name": "Alice Achieng",
        "email": "Alice@Example.com",
        "phone_number": "+254711000111",
        "password": "Kisumu-lake-2025",
        "confirm_password": "Kisumu-lake-2025",
    }
    payload.update(overrides)
    return client.post("/api/auth/register/", payload, content_type="application/json")


@pytest.mark.django_db
def test_register_and_login(client):
    """A new account gets a profile, the user role, tokens and a welcome email."""
    resp = register(client)
    assert resp.status_code == 201
    body = resp.json()
    assert body["email"] == "alice@example.com"
    assert body["profile"]["full_name"] == "Alice Achieng"
    assert body["profile"]["phone_number"] == "+254711000111"
    assert body["roles"] == ["user"]
    assert body["access"] and body["refresh"]

    assert len(mail.outbox) == 1
    assert mail.outbox[0].to == ["alice@example.com"]

    # Login is by email, case-insensitively
    login_resp = client.post(
        "/api/auth/login/",
        {"email": "ALICE@example.com", "password": "Kisumu-lake-2025"},
        content_type="application/json",
    )
    assert login_resp.status_code == 200
    assert "access" in login_resp.json()
    assert login_resp.json()["user"]["email"] == "alice@example.com"


@pytest.mark.django_db
def test_register_rejects_mismatch_and_duplicates(client, user):
    resp = register(client, confirm_password="something-else")
    assert resp.status_code == 400
    assert "confirm_password" in resp.json()

    resp = register(client, email=user.email)
    assert resp.status_code == 400
    assert "email" in resp.json()

    resp = register(client, phone_number=user.profile.phone_number)
    assert resp.status_code == 400
    assert "phone_number" in resp.json()


@pytest.mark.django_db
def test_login_with_wrong_password(client, user):
    resp = client.post(
        "/api/auth/login/",
        {"email": user.email, "password": "not-the-password"},
        content_type="application/json",
    )
    assert resp.status_code == 401


@pytest.mark.django_db
def test_logout_blacklists_refresh_token(client, user):
    tokens = client.post(
        "/api/auth/login/", {"email": user.email, "password": PASSWORD}, content_type="application/json"
    ).json()
    client.defaults["HTTP_AUTHORIZATION"] = f"Bearer {tokens['access']}"

    resp = client.post("/api/auth/logout/", {"refresh": tokens["refresh"]}, content_type="application/json")
    assert resp.status_code == 205

    refresh = client.post("/api/auth/token/refresh/", {"refresh": tokens["refresh"]}, content_type="application/json")
    assert refresh.status_code == 401

    assert client.post("/api/auth/logout/", {}, content_type="application/json").status_code == 400


@pytest.mark.django_db
def test_change_password(auth_client, user):
    resp = auth_client.post(
        "/api/auth/password/change/",
        {"old_password": "wrong", "new_password": "Fresh-pass-456", "confirm_new_password": "Fresh-pass-456"},
        content_type="application/json",
    )
    assert resp.status_code == 400
    assert "old_password" in resp.json()

    resp = auth_client.post(
        "/api/auth/password/change/",
        {"old_password": PASSWORD, "new_password": "Fresh-pass-456", "confirm_new_password": "Fresh-pass-456"},
        content_type="application/json",
    )
    assert resp.status_code == 200
    user.refresh_from_db()
    assert user.check_password("Fresh-pass-456")
    assert len(mail.outbox) == 1


@pytest.mark.django_db
def test_forgot_password_does_not_leak_accounts(client, user):
    unknown = client.post("/api/auth/password/forgot/", {"email": "nobody@example.com"}, content_type="application/json")
    known = client.post("/api/auth/password/forgot/", {"email": user.email}, content_type="application/json")

    assert unknown.status_code == known.status_code == 200
    assert unknown.json() == known.json()
    assert len(mail.outbox) == 1
    uid = urlsafe_base64_encode(force_bytes(user.pk))
    assert f"uid={uid}" in mail.outbox[0].body


@pytest.mark.django_db
def test_reset_password(client, user):
    uid = urlsafe_base64_encode(force_bytes(user.pk))
    token = PasswordResetTokenGenerator().make_token(user)

    bad = client.post(
        "/api/auth/password/reset/",
        {"uid": uid, "token": "bogus", "new_password": "Reset-pass-789", "confirm_new_password": "Reset-pass-789"},
        content_type="application/json",
    )
    assert bad.status_code == 400
    assert "token" in bad.json()

    resp = client.post(
        "/api/auth/password/reset/",
        {"uid": uid, "token": token, "new_password": "Reset-pass-789", "confirm_new_password": "Reset-pass-789"},
        content_type="application/json",
    )
    assert resp.status_code == 200
    user.refresh_from_db()
    assert user.check_password("Reset-pass-789")

    # the token is single use
    again = client.post(
        "/api/auth/password/reset/",
        {"uid": uid, "token": token, "new_password": "Other-pass-000", "confirm_new_password": "Other-pass-000"},
        content_type="application/json",
    )
    assert again.status_code == 400
