import pytest

from uploads.jobs import OwnerKind, TemporaryFile, UploadJob


def test_payload_carries_ids_and_paths_only():
    job = UploadJob.create(
        7,
        "announcement",
        [TemporaryFile("temp/announcements/a.jpg", "a.jpg"), "temp/announcements/b.jpg"],
        {"folder": "announcements"},
    )
    payload = job.to_payload()

    assert payload == {
        "owner_id": 7,
        "owner_kind": "announcement",
        "temporary_files": [
            {"path": "temp/announcements/a.jpg", "original_name": "a.jpg"},
            {"path": "temp/announcements/b.jpg", "original_name": None},
        ],
        "upload_options": {"folder": "announcements"},
        "max_attempts": 3,
    }
    assert UploadJob.from_payload(payload) == job


def test_job_requires_files():
    with pytest.raises(ValueError):
        UploadJob.create(1, OwnerKind.EVENT, [])


def test_avatar_job_takes_exactly_one_file():
    with pytest.raises(ValueError):
        UploadJob.create(1, OwnerKind.USER_AVATAR, ["temp/users/a.jpg", "temp/users/b.jpg"])


def test_unknown_kind_is_rejected():
    with pytest.raises(ValueError):
        UploadJob.create(1, "property", ["temp/x.jpg"])


def test_job_is_immutable():
    job = UploadJob.create(1, OwnerKind.PROJECT, ["temp/projects/a.jpg"])
    with pytest.raises(AttributeError):
        job.owner_id = 2
