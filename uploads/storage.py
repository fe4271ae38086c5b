"""
Temporary storage for staged uploads.

Request handlers drop incoming image files here; upload jobs read them
back from the local filesystem and delete them once handled.  Paths are
generated per file so no two jobs ever reference the same staged file.
"""
from __future__ import annotations

import logging
import os
import time
import uuid
from datetime import timedelta
from pathlib import Path

from django.conf import settings
from django.core.files.storage import FileSystemStorage, Storage

from .jobs import TemporaryFile

logger = logging.getLogger(__name__)


class TemporaryStorage:
    def __init__(self, storage: Storage | None = None):
        self._storage = storage or FileSystemStorage(location=settings.UPLOAD_TEMP_ROOT)

    @property
    def location(self) -> str:
        return self._storage.location

    def save(self, uploaded_file, prefix: str) -> TemporaryFile:
        """Stage ``uploaded_file`` under ``prefix`` with a fresh unique name."""
        original_name = getattr(uploaded_file, "name", None) or ""
        _, ext = os.path.splitext(original_name)
        name = f"{prefix.strip('/')}/{uuid.uuid4().hex}{ext.lower()}"
        path = self._storage.save(name, uploaded_file)
        logger.debug("Staged %s as %s", original_name or "<unnamed>", path)
        return TemporaryFile(path=path, original_name=original_name or None)

    def exists(self, path: str) -> bool:
        return self._storage.exists(path)

    def resolve_local_path(self, path: str) -> str:
        return self._storage.path(path)

    def delete(self, path: str) -> bool:
        """Delete ``path``; returns False when there was nothing to delete."""
        if not self._storage.exists(path):
            return False
        self._storage.delete(path)
        return True

    def sweep(self, older_than: timedelta) -> int:
        """Remove staged files last modified more than ``older_than`` ago."""
        root = Path(self.location)
        if not root.exists():
            return 0
        cutoff = time.time() - older_than.total_seconds()
        removed = 0
        for candidate in root.rglob("*"):
            if not candidate.is_file():
                continue
            try:
                if candidate.stat().st_mtime < cutoff:
                    candidate.unlink()
                    removed += 1
            except FileNotFoundError:
                continue
        return removed
