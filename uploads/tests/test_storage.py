import os
import time
from datetime import timedelta

from django.core.files.base import ContentFile


def test_save_generates_unique_paths(temp_storage):
    first = temp_storage.save(ContentFile(b"x", name="Photo.JPG"), "temp/events")
    second = temp_storage.save(ContentFile(b"y", name="Photo.JPG"), "temp/events")

    assert first.path != second.path
    assert first.path.startswith("temp/events/") and first.path.endswith(".jpg")
    assert first.original_name == "Photo.JPG"
    assert os.path.isfile(temp_storage.resolve_local_path(first.path))


def test_delete_is_idempotent(temp_storage):
    staged = temp_storage.save(ContentFile(b"x", name="a.png"), "temp/projects")

    assert temp_storage.delete(staged.path) is True
    assert temp_storage.delete(staged.path) is False
    assert not temp_storage.exists(staged.path)


def test_sweep_removes_only_stale_files(temp_storage):
    stale = temp_storage.save(ContentFile(b"old", name="old.jpg"), "temp/announcements")
    fresh = temp_storage.save(ContentFile(b"new", name="new.jpg"), "temp/announcements")
    two_days_ago = time.time() - 48 * 3600
    os.utime(temp_storage.resolve_local_path(stale.path), (two_days_ago, two_days_ago))

    assert temp_storage.sweep(timedelta(hours=24)) == 1
    assert not temp_storage.exists(stale.path)
    assert temp_storage.exists(fresh.path)
