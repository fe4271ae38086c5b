"""
Common test fixtures.

Provides users and JWT-authenticated clients, the category/status rows
the content apps need, and fakes for the media host and temporary
storage.  The fakes are installed on the ``uploads`` app config for every
test, so nothing ever talks to the real media host.
"""
import io
from collections import Counter
from pathlib import Path

import pytest
from django.apps import apps
from django.contrib.auth import get_user_model
from django.core.files.base import ContentFile
from django.core.files.storage import FileSystemStorage
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import Client
from PIL import Image

from categories.models import Category, Status
from uploads.client import MediaUploadError
from uploads.storage import TemporaryStorage

User = get_user_model()

PASSWORD = "Str0ng-pass-123"


class FakeMediaClient:
    """
    Stand-in for ``MediaUploadClient``.  Like the real host it stores an
    asset under ``folder/public_id`` (the local file name when no id is
    given) and bumps the version each time the same id is uploaded again.
    """

    def __init__(self):
        self.calls = 0
        self.uploads = []
        self.destroyed = []
        # upload call numbers (1-based) that raise a non-media error
        self.crash_calls = set()
        # staged file stems whose upload is rejected by the host
        self.fail_stems = set()
        self.destroy_fails = False
        self.versions = Counter()

    def upload(self, local_path, options=None):
        self.calls += 1
        if self.calls in self.crash_calls:
            raise RuntimeError("media store unreachable")
        stem = Path(local_path).stem
        if stem in self.fail_stems:
            raise MediaUploadError("HTTP 500 from media host")
        options = dict(options or {})
        self.uploads.append((local_path, options))
        public_id = f"{options.get('folder', 'misc')}/{options.get('public_id') or stem}"
        self.versions[public_id] += 1
        return {
            "secure_url": f"https://res.cloudinary.com/demo/image/upload/v{self.versions[public_id]}/{public_id}.jpg",
            "public_id": public_id,
            "version": self.versions[public_id],
        }

    def destroy(self, public_id):
        if self.destroy_fails:
            raise MediaUploadError("destroy refused")
        self.destroyed.append(public_id)
        return {"result": "ok"}

    def verify_notification(self, body, timestamp, signature):
        return signature == "valid"


@pytest.fixture
def media_client():
    return FakeMediaClient()


@pytest.fixture
def temp_storage(tmp_path):
    return TemporaryStorage(FileSystemStorage(location=str(tmp_path / "uploads")))


@pytest.fixture(autouse=True)
def upload_collaborators(monkeypatch, media_client, temp_storage):
    config = apps.get_app_config("uploads")
    monkeypatch.setattr(config, "media_client", media_client)
    monkeypatch.setattr(config, "temporary_storage", temp_storage)
    return config


@pytest.fixture
def stage(temp_storage):
    """Stage ``count`` small files under ``prefix`` and return their references."""
    def _stage(count=1, prefix="temp/announcements"):
        return [
            temp_storage.save(ContentFile(b"fake image bytes", name=f"photo{i}.jpg"), prefix)
            for i in range(1, count + 1)
        ]
    return _stage


def make_image(name="photo.png", fmt="PNG", size=(20, 20)):
    buf = io.BytesIO()
    Image.new("RGB", size, color=(200, 30, 30)).save(buf, format=fmt)
    content_type = f"image/{fmt.lower()}"
    return SimpleUploadedFile(name, buf.getvalue(), content_type=content_type)


def make_user(email, is_staff=False, **profile):
    user = User.objects.create_user(username=email, email=email, password=PASSWORD, is_staff=is_staff)
    if profile:
        for key, value in profile.items():
            setattr(user.profile, key, value)
        user.profile.save()
    return user


def login(client, email, password=PASSWORD):
    resp = client.post(
        "/api/auth/login/",
        {"email": email, "password": password},
        content_type="application/json",
    )
    assert resp.status_code == 200, resp.content
    client.defaults["HTTP_AUTHORIZATION"] = f"Bearer {resp.json()['access']}"
    return client


@pytest.fixture
def user(db):
    return make_user("u1@example.com", full_name="User One", phone_number="+254700000001")


@pytest.fixture
def auth_client(client, user):
    """Authenticate the Django test client using JWT tokens."""
    return login(client, user.email)


@pytest.fixture
def other_user(db):
    return make_user("u2@example.com", full_name="User Two", phone_number="+254700000002")


@pytest.fixture
def other_client(other_user):
    return login(Client(), other_user.email)


@pytest.fixture
def staff_user(db):
    return make_user("staff@example.com", is_staff=True)


@pytest.fixture
def staff_client(staff_user):
    return login(Client(), staff_user.email)


@pytest.fixture
def announcement_category(db):
    return Category.objects.create(name="News", type=Category.ANNOUNCEMENT)


@pytest.fixture
def event_category(db):
    return Category.objects.create(name="Meetings", type=Category.EVENT)


@pytest.fixture
def opportunity_category(db):
    return Category.objects.create(name="Jobs", type=Category.OPPORTUNITY)


@pytest.fixture
def project_status(db):
    return Status.objects.create(name="Planned", description="Planned or scheduled")
