import datetime

import pytest

from announcements.models import Announcement
from uploads.identifiers import extract_public_id


@pytest.fixture
def announcement(user, announcement_category):
    return Announcement.objects.create(
        user=user,
        title="Water point repairs",
        description="Borehole maintenance this week",
        category=announcement_category,
        date=datetime.date(2025, 1, 15),
    )


def hosted_url(temporary_file, folder="announcements"):
    """URL the fake media client hands back for a staged file."""
    stem = temporary_file.path.rsplit("/", 1)[-1].rsplit(".", 1)[0]
    return f"https://res.cloudinary.com/demo/image/upload/v1/{folder}/{stem}.jpg"


def hosted_id(temporary_file, folder="announcements"):
    """Public id the fake media client stores a staged file under."""
    return extract_public_id(hosted_url(temporary_file, folder), with_folder=True)


def hosted_ids(urls):
    return [extract_public_id(url, with_folder=True) for url in urls]
