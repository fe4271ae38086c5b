"""
Record store used by upload jobs.

Maps each ``OwnerKind`` to the model, lookup column and image column it
writes to.  All writes made from the worker path go through a locked
read-modify-write so concurrent jobs against the same record never lose
each other's URLs.
"""
from __future__ import annotations

import logging
from typing import Iterable, NamedTuple

from django.apps import apps
from django.db import OperationalError, transaction

from .identifiers import extract_public_id
from .jobs import OwnerKind

logger = logging.getLogger(__name__)


class RecordBinding(NamedTuple):
    model_label: str
    lookup: str
    field: str

    @property
    def model(self):
        return apps.get_model(self.model_label)


BINDINGS = {
    OwnerKind.ANNOUNCEMENT: RecordBinding("announcements.Announcement", "pk", "images"),
    OwnerKind.EVENT: RecordBinding("events.Event", "pk", "images"),
    OwnerKind.PROJECT: RecordBinding("projects.Project", "pk", "images"),
    OwnerKind.USER_AVATAR: RecordBinding("users.UserProfile", "user_id", "image_url"),
}


def image_key(url: str) -> str:
    """Version-independent identity of a hosted image."""
    return extract_public_id(url, with_folder=True, quiet=True) or url


def merge_urls(existing: Iterable[str] | None, new: Iterable[str]) -> list[str]:
    """
    Existing URLs first, then new ones, in first-seen order.  URLs naming
    the same asset at different versions count as one image, so an
    overwriting re-upload never adds a second entry.
    """
    merged = {}
    for url in [*(existing or []), *new]:
        merged.setdefault(image_key(url), url)
    return list(merged.values())


class RecordStore:
    # Extra attempts after a database concurrency error
    conflict_retries = 1

    def binding(self, kind) -> RecordBinding:
        return BINDINGS[OwnerKind(kind)]

    def _queryset(self, kind, owner_id):
        binding = self.binding(kind)
        return binding.model._default_manager.filter(**{binding.lookup: owner_id})

    def find(self, kind, owner_id):
        return self._queryset(kind, owner_id).first()

    def _locked_write(self, kind, owner_id, mutate):
        """
        Lock the row, hand its current image value to ``mutate`` and store
        what comes back.  Returns the stored value, or None if the record no
        longer exists.
        """
        binding = self.binding(kind)
        attempt = 0
        while True:
            try:
                with transaction.atomic():
                    record = self._queryset(kind, owner_id).select_for_update().first()
                    if record is None:
                        return None
                    current = getattr(record, binding.field)
                    updated = mutate(current)
                    if updated != current:
                        setattr(record, binding.field, updated)
                        record.save(update_fields=[binding.field, "updated_at"])
                    return updated
            except OperationalError as exc:
                if attempt >= self.conflict_retries:
                    raise
                attempt += 1
                logger.warning(
                    "Concurrent update on %s %s (%s); re-reading and merging again",
                    OwnerKind(kind).value, owner_id, exc,
                )

    def merge_images(self, kind, owner_id, urls: Iterable[str]) -> list[str] | None:
        urls = list(urls)
        return self._locked_write(kind, owner_id, lambda current: merge_urls(current, urls))

    def remove_images(self, kind, owner_id, urls: Iterable[str]) -> list[str] | None:
        doomed = set(urls)
        return self._locked_write(
            kind, owner_id, lambda current: [u for u in (current or []) if u not in doomed]
        )

    def replace_image(self, kind, owner_id, url: str | None, before_save=None) -> tuple[str, str] | None:
        """
        Set a single-image record's URL.  ``before_save`` is called with the
        value being replaced while the row lock is held, before the new
        value is written.  Returns ``(previous, stored)``, or None if the
        record is gone.
        """
        replaced = []

        def swap(current):
            previous = current or ""
            if before_save is not None:
                before_save(previous)
            replaced[:] = [previous]
            return url or ""

        stored = self._locked_write(kind, owner_id, swap)
        if stored is None:
            return None
        return replaced[0], stored
