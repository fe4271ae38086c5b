"""
API tests for the announcements app.

Covers CRUD by unique id, the owner/staff write rules, background image
uploads on create and update, image removal and the ``mine``, search and
pagination query options.
"""
import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test.client import BOUNDARY, MULTIPART_CONTENT, encode_multipart

from announcements.models import Announcement
from conftest import make_image

HOSTED = "https://res.cloudinary.com/demo/image/upload/v1/announcements/{}.jpg"


@pytest.fixture
def announcement(user, announcement_category):
    return Announcement.objects.create(
        user=user,
        title="Road closure",
        description="Main road closed for repairs",
        category=announcement_category,
        date="2025-02-01",
        images=[HOSTED.format("a"), HOSTED.format("b"), HOSTED.format("c")],
    )


def payload(category, **overrides):
    data = {
        "title": "Clinic open day",
        "description": "Free screening at the health centre",
        "category": category.id,
        "date": "2025-03-10",
    }
    data.update(overrides)
    return data


@pytest.mark.django_db
def test_create_with_images_uploads_in_background(
    auth_client, user, announcement_category, media_client, django_capture_on_commit_callbacks
):
    """Images are staged and uploaded after commit; the response only flags them pending."""
    data = payload(announcement_category, images=[make_image("one.png"), make_image("two.png")])
    with django_capture_on_commit_callbacks(execute=True):
        resp = auth_client.post("/api/announcements/", data)

    assert resp.status_code == 201
    body = resp.json()
    assert body["images_pending"] is True
    assert body["images"] == []
    assert body["unique_id"].startswith("ANN-")
    assert body["user_id"] == user.id

    record = Announcement.objects.get(unique_id=body["unique_id"])
    assert len(record.images) == 2
    assert all(url.startswith("https://res.cloudinary.com/demo/") for url in record.images)
    # every upload goes to the announcements folder, capped to 800x600
    assert {opts["folder"] for _, opts in media_client.uploads} == {"announcements"}
    assert media_client.uploads[0][1]["transformation"] == [{"width": 800, "height": 600, "crop": "limit"}]


@pytest.mark.django_db
def test_create_without_images(auth_client, announcement_category, media_client):
    resp = auth_client.post("/api/announcements/", payload(announcement_category), content_type="application/json")

    assert resp.status_code == 201
    assert resp.json()["images_pending"] is False
    assert media_client.calls == 0


@pytest.mark.django_db
def test_non_image_upload_is_rejected(auth_client, announcement_category):
    """A bad file fails validation before anything is staged or saved."""
    notes = SimpleUploadedFile("notes.txt", b"not an image", content_type="text/plain")
    resp = auth_client.post("/api/announcements/", payload(announcement_category, images=[notes]))

    assert resp.status_code == 400
    assert "images" in resp.json()
    assert not Announcement.objects.exists()


@pytest.mark.django_db
def test_category_must_be_an_announcement_category(auth_client, event_category):
    resp = auth_client.post("/api/announcements/", payload(event_category), content_type="application/json")
    assert resp.status_code == 400
    assert "category" in resp.json()


@pytest.mark.django_db
def test_anonymous_can_read_but_not_write(client, announcement, announcement_category):
    list_resp = client.get("/api/announcements/")
    assert list_resp.status_code == 200
    assert [a["unique_id"] for a in list_resp.json()["results"]] == [announcement.unique_id]

    detail = client.get(f"/api/announcements/{announcement.unique_id}/")
    assert detail.status_code == 200
    assert detail.json()["category_name"] == "News"

    resp = client.post("/api/announcements/", payload(announcement_category), content_type="application/json")
    assert resp.status_code == 401


@pytest.mark.django_db
def test_update_removes_selected_images(auth_client, announcement, media_client):
    """Only URLs on the record are removed; their remote copies are destroyed."""
    resp = auth_client.patch(
        f"/api/announcements/{announcement.unique_id}/",
        {"title": "Road closure extended", "images_to_delete": [HOSTED.format("a"), HOSTED.format("zzz")]},
        content_type="application/json",
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["title"] == "Road closure extended"
    assert body["images"] == [HOSTED.format("b"), HOSTED.format("c")]
    assert body["images_pending"] is False
    assert media_client.destroyed == ["announcements/a"]


@pytest.mark.django_db
def test_update_appends_new_images(auth_client, announcement, django_capture_on_commit_callbacks):
    with django_capture_on_commit_callbacks(execute=True):
        resp = auth_client.patch(
            f"/api/announcements/{announcement.unique_id}/",
            encode_multipart(BOUNDARY, {"images": [make_image("extra.png")]}),
            content_type=MULTIPART_CONTENT,
        )

    assert resp.status_code == 200
    assert resp.json()["images_pending"] is True
    announcement.refresh_from_db()
    assert len(announcement.images) == 4
    assert announcement.images[:3] == [HOSTED.format("a"), HOSTED.format("b"), HOSTED.format("c")]


@pytest.mark.django_db
def test_delete_destroys_remote_images(auth_client, announcement, media_client):
    resp = auth_client.delete(f"/api/announcements/{announcement.unique_id}/")

    assert resp.status_code == 204
    assert not Announcement.objects.filter(pk=announcement.pk).exists()
    assert media_client.destroyed == ["announcements/a", "announcements/b", "announcements/c"]


@pytest.mark.django_db
def test_only_owner_or_staff_may_write(other_client, staff_client, announcement):
    url = f"/api/announcements/{announcement.unique_id}/"

    assert other_client.patch(url, {"urgent": True}, content_type="application/json").status_code == 403
    assert other_client.delete(url).status_code == 403

    resp = staff_client.patch(url, {"urgent": True}, content_type="application/json")
    assert resp.status_code == 200
    assert resp.json()["urgent"] is True


@pytest.mark.django_db
def test_mine_search_and_per_page(auth_client, other_user, user, announcement_category):
    for title in ("Water rationing", "Water tanker schedule", "Market day"):
        Announcement.objects.create(
            user=user, title=title, description="-", category=announcement_category, date="2025-01-01"
        )
    Announcement.objects.create(
        user=other_user, title="Water meeting", description="-", category=announcement_category, date="2025-01-01"
    )

    mine = auth_client.get("/api/announcements/mine/").json()
    assert mine["count"] == 3

    found = auth_client.get("/api/announcements/", {"search": "water"}).json()
    assert found["count"] == 3

    paged = auth_client.get("/api/announcements/", {"per_page": 2}).json()
    assert len(paged["results"]) == 2
    assert paged["per_page"] == 2
    assert paged["last_page"] == 2
