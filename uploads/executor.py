"""
Upload job execution.

``UploadJobExecutor`` runs one ``UploadJob`` against its collaborators:
the media client, temporary storage and record store, all injected.
Files are handled in chunks; each chunk uploads its files, merges the
resulting URLs into the owning record and only then deletes the chunk's
staged files.  A crash part-way through a chunk therefore leaves that
chunk's files in place for the retry.  Each file is uploaded under a
public id taken from its staged name with ``overwrite`` set, so a retry
replaces the same remote asset and the URL merge, which ignores the
version segment, keeps a single entry for it.

Per-file upload errors are recorded as ``FileResult`` values and never
abort the job.  Anything else (database down, storage unreadable, ...)
propagates so the task layer can retry.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from itertools import islice
from typing import Iterable, Iterator

from .client import MediaUploadClient, MediaUploadError
from .identifiers import extract_public_id
from .jobs import TemporaryFile, UploadJob
from .records import RecordStore, image_key
from .storage import TemporaryStorage

logger = logging.getLogger(__name__)

MISSING = "temporary file missing"


@dataclass(frozen=True)
class FileResult:
    temporary_file: TemporaryFile
    url: str | None = None
    reason: str | None = None

    @classmethod
    def success(cls, temporary_file: TemporaryFile, url: str) -> "FileResult":
        return cls(temporary_file, url=url)

    @classmethod
    def failure(cls, temporary_file: TemporaryFile, reason: str) -> "FileResult":
        return cls(temporary_file, reason=reason)

    @property
    def succeeded(self) -> bool:
        return self.url is not None

    @property
    def was_staged(self) -> bool:
        return self.reason != MISSING


@dataclass
class JobOutcome:
    owner_found: bool
    results: list[FileResult] = field(default_factory=list)
    images: list[str] | str | None = None

    @property
    def uploaded(self) -> list[str]:
        return [r.url for r in self.results if r.succeeded]

    @property
    def failed(self) -> list[FileResult]:
        return [r for r in self.results if not r.succeeded]

    def summary(self) -> dict:
        return {
            "owner_found": self.owner_found,
            "uploaded": len(self.uploaded),
            "failed": len(self.failed),
            "urls": self.uploaded,
        }


def chunked(items: Iterable, size: int) -> Iterator[list]:
    iterator = iter(items)
    while True:
        chunk = list(islice(iterator, size))
        if not chunk:
            return
        yield chunk


class UploadJobExecutor:
    def __init__(
        self,
        client: MediaUploadClient,
        storage: TemporaryStorage,
        records: RecordStore | None = None,
        chunk_size: int = 3,
    ):
        self.client = client
        self.storage = storage
        self.records = records or RecordStore()
        self.chunk_size = max(int(chunk_size), 1)

    def run(self, job: UploadJob) -> JobOutcome:
        if self.records.find(job.owner_kind, job.owner_id) is None:
            logger.warning("Owning record %s not found; discarding its upload job", job.describe())
            self.cleanup(job)
            return JobOutcome(owner_found=False)

        outcome = JobOutcome(owner_found=True)
        total_chunks = -(-len(job.temporary_files) // self.chunk_size)
        for number, chunk in enumerate(chunked(job.temporary_files, self.chunk_size), start=1):
            results = [self.process_file(f, job.upload_options) for f in chunk]
            outcome.results.extend(results)
            urls = [r.url for r in results if r.succeeded]
            logger.info(
                "Chunk %s/%s for %s: %s uploaded, %s failed",
                number, total_chunks, job.describe(), len(urls), len(results) - len(urls),
            )
            if urls:
                images = self.records.merge_images(job.owner_kind, job.owner_id, urls)
                if images is None:
                    logger.warning("Record %s vanished mid-job; cleaning up", job.describe())
                    self.cleanup(job)
                    outcome.owner_found = False
                    return outcome
                outcome.images = images
            self._discard(results)

        if not outcome.uploaded:
            logger.warning("No images uploaded successfully for %s", job.describe())
        return outcome

    def process_file(self, temporary_file: TemporaryFile, options: dict) -> FileResult:
        if not self.storage.exists(temporary_file.path):
            logger.error("Temporary file not found, skipping: %s", temporary_file.path)
            return FileResult.failure(temporary_file, MISSING)

        local_path = self.storage.resolve_local_path(temporary_file.path)
        options = {
            **(options or {}),
            "public_id": PurePosixPath(temporary_file.path).stem,
            "overwrite": True,
        }
        try:
            response = self.client.upload(local_path, options)
        except MediaUploadError as exc:
            logger.error("Failed to upload %s: %s", temporary_file.path, exc)
            return FileResult.failure(temporary_file, str(exc))
        logger.info("Uploaded %s to %s", temporary_file.path, response["secure_url"])
        return FileResult.success(temporary_file, response["secure_url"])

    def _delete(self, path: str) -> bool:
        try:
            deleted = self.storage.delete(path)
        except OSError as exc:
            logger.warning("Failed to delete temporary file %s: %s", path, exc)
            return False
        if deleted:
            logger.debug("Deleted temporary file %s", path)
        return deleted

    def _discard(self, results: list[FileResult]) -> None:
        for result in results:
            if result.was_staged:
                self._delete(result.temporary_file.path)

    def cleanup(self, job: UploadJob) -> int:
        """Delete every staged file of ``job`` that still exists."""
        removed = sum(1 for path in job.paths if self._delete(path))
        logger.info("Cleaned up %s temporary file(s) for %s", removed, job.describe())
        return removed


class AvatarUploadExecutor(UploadJobExecutor):
    """
    Single-file variant for user avatars: the new image replaces the old
    one.  The remote copy of the image being displaced is destroyed under
    the row lock, just before the new URL is written, so overlapping jobs
    each reclaim the image they actually replace.
    """

    def run(self, job: UploadJob) -> JobOutcome:
        profile = self.records.find(job.owner_kind, job.owner_id)
        if profile is None:
            logger.warning("User profile %s not found; discarding avatar upload", job.describe())
            self.cleanup(job)
            return JobOutcome(owner_found=False)

        result = self.process_file(job.temporary_files[0], job.upload_options)
        outcome = JobOutcome(owner_found=True, results=[result])

        if result.succeeded:
            replaced = self.records.replace_image(
                job.owner_kind,
                job.owner_id,
                result.url,
                before_save=lambda previous: self.destroy_previous(previous, result.url),
            )
            if replaced is None:
                logger.warning("User profile %s vanished mid-job", job.describe())
                outcome.owner_found = False
            else:
                outcome.images = replaced[1]
        else:
            logger.warning("Avatar upload failed for %s: %s", job.describe(), result.reason)

        self._discard([result])
        return outcome

    def destroy_previous(self, previous: str, new_url: str) -> None:
        if not previous or image_key(previous) == image_key(new_url):
            return
        public_id = extract_public_id(previous, with_folder=True)
        if not public_id:
            return
        try:
            self.client.destroy(public_id)
            logger.info("Destroyed previous avatar %s", public_id)
        except MediaUploadError as exc:
            logger.warning("Failed to destroy previous avatar %s: %s", public_id, exc)
