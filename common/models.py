"""
Shared model building blocks.

``OwnedRecord`` is the abstract base for every user-authored record
(announcements, events, opportunities, projects).  Each concrete model
sets ``UNIQUE_ID_PREFIX``; a human-readable ``unique_id`` such as
``ANN-20250101093000-QX7PZ`` is generated on first save and used as the
public lookup key in URLs.
"""
from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.crypto import get_random_string

UNIQUE_ID_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"


def generate_unique_id(model, prefix: str) -> str:
    """Return ``<prefix>-<timestamp>-<5 chars>`` not yet used by ``model``."""
    timestamp = timezone.now().strftime("%Y%m%d%H%M%S")
    while True:
        candidate = f"{prefix}-{timestamp}-{get_random_string(5, UNIQUE_ID_ALPHABET)}"
        if not model._default_manager.filter(unique_id=candidate).exists():
            return candidate


class OwnedRecord(models.Model):
    UNIQUE_ID_PREFIX = "REC"

    unique_id = models.CharField(max_length=40, unique=True, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="+",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ["-created_at"]

    def save(self, *args, **kwargs):
        if not self.unique_id:
            self.unique_id = generate_unique_id(type(self), self.UNIQUE_ID_PREFIX)
        super().save(*args, **kwargs)
