"""
Tests for the `/api/users/` endpoints: profile reads and updates,
avatar upload and removal, lookup by email and role management.
"""
import pytest
from django.contrib.auth.models import Group
from django.test.client import BOUNDARY, MULTIPART_CONTENT, encode_multipart

from conftest import make_image
from notifications.models import Notification
from users.roles import ADMIN, ensure_default_roles

OLD_AVATAR = "https://res.cloudinary.com/demo/image/upload/v1699999999/users/old-face.jpg"


def multipart_patch(client, url, data):
    return client.patch(url, encode_multipart(BOUNDARY, data), content_type=MULTIPART_CONTENT)


@pytest.mark.django_db
def test_me_endpoint(auth_client, user):
    """Verify that /api/users/me/ returns and updates the caller's profile."""
    resp = auth_client.get("/api/users/me/")
    assert resp.status_code == 200
    assert resp.json()["email"] == "u1@example.com"
    assert resp.json()["profile"]["full_name"] == "User One"

    update_resp = auth_client.patch(
        "/api/users/me/",
        {"name": "User Uno", "whatsapp_number": "+254700000099"},
        content_type="application/json",
    )
    assert update_resp.status_code == 200
    assert update_resp.json()["profile"]["full_name"] == "User Uno"
    assert update_resp.json()["images_pending"] is False
    assert Notification.objects.filter(recipient=user, kind=Notification.PROFILE_UPDATE).exists()


@pytest.mark.django_db
def test_update_rejects_taken_email_and_phone(auth_client, other_user):
    resp = auth_client.patch(
        "/api/users/me/",
        {"email": other_user.email, "phone_number": other_user.profile.phone_number},
        content_type="application/json",
    )
    assert resp.status_code == 400
    assert set(resp.json()) == {"email", "phone_number"}


@pytest.mark.django_db
def test_avatar_upload_replaces_previous(auth_client, user, media_client, django_capture_on_commit_callbacks):
    """The new avatar is uploaded after commit and the old remote copy destroyed."""
    user.profile.image_url = OLD_AVATAR
    user.profile.save()

    with django_capture_on_commit_callbacks(execute=True):
        resp = multipart_patch(auth_client, "/api/users/me/", {"image": make_image("me.png")})

    assert resp.status_code == 200
    assert resp.json()["images_pending"] is True

    user.profile.refresh_from_db()
    assert user.profile.image_url.startswith("https://res.cloudinary.com/demo/image/upload/v1/users/")
    assert media_client.destroyed == ["users/old-face"]
    assert media_client.uploads[0][1]["folder"] == "users"
    kinds = set(Notification.objects.filter(recipient=user).values_list("kind", flat=True))
    assert kinds == {Notification.PROFILE_UPDATE, Notification.IMAGE_UPLOAD_SUCCESS}


@pytest.mark.django_db
def test_delete_image(auth_client, user, media_client):
    user.profile.image_url = OLD_AVATAR
    user.profile.save()

    resp = auth_client.patch("/api/users/me/", {"delete_image": True}, content_type="application/json")

    assert resp.status_code == 200
    assert resp.json()["profile"]["image_url"] == ""
    assert media_client.destroyed == ["users/old-face"]


@pytest.mark.django_db
def test_users_only_see_themselves(auth_client, user, other_user, staff_client):
    mine = auth_client.get("/api/users/").json()
    assert [u["id"] for u in mine["results"]] == [user.id]
    assert auth_client.get(f"/api/users/{other_user.id}/").status_code == 404

    everyone = staff_client.get("/api/users/").json()
    assert everyone["count"] == 3


@pytest.mark.django_db
def test_staff_may_update_other_profiles(staff_client, other_user):
    resp = staff_client.patch(f"/api/users/{other_user.id}/", {"name": "Renamed"}, content_type="application/json")
    assert resp.status_code == 200
    other_user.profile.refresh_from_db()
    assert other_user.profile.full_name == "Renamed"


@pytest.mark.django_db
def test_lookup_by_email(auth_client, other_user):
    resp = auth_client.get("/api/users/by-email/U2@example.com/")
    assert resp.status_code == 200
    assert resp.json()["id"] == other_user.id

    assert auth_client.get("/api/users/by-email/ghost@example.com/").status_code == 404


@pytest.mark.django_db
def test_roles_require_manage_permission(auth_client, user, other_client, other_user):
    ensure_default_roles()

    resp = auth_client.put(f"/api/users/{other_user.id}/roles/", {"roles": [ADMIN]}, content_type="application/json")
    assert resp.status_code == 403

    # an admin role holder may assign roles
    user.groups.add(Group.objects.get(name=ADMIN))
    resp = auth_client.put(f"/api/users/{other_user.id}/roles/", {"roles": [ADMIN]}, content_type="application/json")
    assert resp.status_code == 200
    assert resp.json()["roles"] == [ADMIN]

    unknown = auth_client.put(
        f"/api/users/{other_user.id}/roles/", {"roles": ["landlord"]}, content_type="application/json"
    )
    assert unknown.status_code == 400

    access = other_client.get(f"/api/users/{other_user.id}/access-controls/").json()
    assert access["roles"] == [ADMIN]
    assert "manage_users" in access["permissions"]


@pytest.mark.django_db
def test_access_controls_of_others_are_private(auth_client, other_user):
    assert auth_client.get(f"/api/users/{other_user.id}/access-controls/").status_code == 403
