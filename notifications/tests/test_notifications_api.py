import pytest
from django.db import DatabaseError

from notifications.models import Notification
from notifications.services import notify

pytestmark = pytest.mark.django_db


@pytest.fixture
def inbox(user, other_user):
    notify(user.id, Notification.IMAGE_UPLOAD_SUCCESS, "Image uploaded")
    notify(user.id, Notification.IMAGE_UPLOAD_FAILED, "Image upload failed", data={"error": "timeout"})
    notify(other_user.id, Notification.PROFILE_UPDATE, "Profile updated")
    return Notification.objects.filter(recipient=user)


def test_list_shows_only_own_notifications(auth_client, inbox):
    resp = auth_client.get("/api/notifications/")

    assert resp.status_code == 200
    body = resp.json()
    assert body["count"] == 2
    assert {n["kind"] for n in body["results"]} == {
        Notification.IMAGE_UPLOAD_SUCCESS,
        Notification.IMAGE_UPLOAD_FAILED,
    }


def test_filter_by_kind_and_unread(auth_client, inbox):
    inbox.filter(kind=Notification.IMAGE_UPLOAD_SUCCESS).update(is_read=True)

    by_kind = auth_client.get("/api/notifications/", {"kind": Notification.IMAGE_UPLOAD_FAILED}).json()
    unread = auth_client.get("/api/notifications/", {"unread": "true"}).json()

    assert [n["data"] for n in by_kind["results"]] == [{"error": "timeout"}]
    assert [n["kind"] for n in unread["results"]] == [Notification.IMAGE_UPLOAD_FAILED]


def test_mark_one_read(auth_client, inbox):
    target = inbox.first()

    resp = auth_client.post(f"/api/notifications/{target.id}/read/")

    assert resp.status_code == 200
    assert resp.json()["is_read"] is True
    target.refresh_from_db()
    assert target.is_read


def test_cannot_mark_someone_elses_notification(other_client, inbox):
    resp = other_client.post(f"/api/notifications/{inbox.first().id}/read/")
    assert resp.status_code == 404


def test_mark_all_read(auth_client, inbox, other_user):
    resp = auth_client.post("/api/notifications/read-all/")

    assert resp.status_code == 200
    assert resp.json()["updated"] == 2
    assert not inbox.filter(is_read=False).exists()
    assert Notification.objects.filter(recipient=other_user, is_read=False).count() == 1


def test_anonymous_list_is_refused(client):
    assert client.get("/api/notifications/").status_code == 401


def test_notify_pushes_to_the_recipient(monkeypatch, user):
    pushed = []
    monkeypatch.setattr(
        "notifications.services.broadcast_to_user",
        lambda user_id, event, payload: pushed.append((user_id, event, payload["kind"])),
    )

    notification = notify(user.id, Notification.PROFILE_UPDATE, "Profile updated")

    assert notification.recipient_id == user.id
    assert pushed == [(user.id, "notification.created", Notification.PROFILE_UPDATE)]


def test_notify_swallows_database_errors(monkeypatch, user):
    def unavailable(**kwargs):
        raise DatabaseError("database is locked")

    monkeypatch.setattr(Notification.objects, "create", unavailable)

    assert notify(user.id, Notification.PROFILE_UPDATE, "Profile updated") is None
