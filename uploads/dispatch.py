"""
Request-path side of the upload pipeline.

Handlers stage incoming files with ``stage_files`` and hand them to
``submit_upload_job``, which enqueues once the surrounding transaction
commits, so workers never see a record that is not yet visible.
"""
import logging

from django.apps import apps
from django.conf import settings
from django.db import transaction
from django.urls import reverse
from kombu.exceptions import OperationalError as BrokerError

from .client import MediaUploadError
from .identifiers import extract_public_id
from .jobs import OwnerKind, UploadJob

logger = logging.getLogger(__name__)

DEFAULT_TRANSFORMATION = [{"width": 800, "height": 600, "crop": "limit"}]


def _config():
    return apps.get_app_config("uploads")


def default_upload_options(kind, owner_id=None) -> dict:
    kind = OwnerKind(kind)
    if not kind.is_single_image:
        return {"folder": kind.folder, "transformation": [dict(t) for t in DEFAULT_TRANSFORMATION]}

    options = {"folder": kind.folder}
    base_url = getattr(settings, "PUBLIC_API_URL", "")
    if base_url and owner_id is not None:
        progress_path = reverse("uploads:progress", kwargs={"user_id": owner_id})
        options["notification_url"] = f"{base_url.rstrip('/')}{progress_path}"
    return options


def stage_files(files, kind, storage=None):
    storage = storage or _config().temporary_storage
    prefix = f"temp/{OwnerKind(kind).folder}"
    return [storage.save(f, prefix) for f in files]


def discard_staged_files(temporary_files, storage=None) -> None:
    storage = storage or _config().temporary_storage
    for temporary_file in temporary_files:
        try:
            storage.delete(temporary_file.path)
        except OSError as exc:
            logger.warning("Failed to delete staged file %s: %s", temporary_file.path, exc)


def _enqueue(job: UploadJob, storage=None) -> bool:
    from .tasks import process_upload_job

    limit = (
        settings.AVATAR_UPLOAD_TIME_LIMIT if job.owner_kind.is_single_image
        else settings.IMAGE_UPLOAD_TIME_LIMIT
    )
    try:
        process_upload_job.apply_async(
            args=[job.to_payload()],
            queue=settings.IMAGE_UPLOAD_QUEUE,
            time_limit=limit,
            soft_time_limit=max(limit - 10, 1),
        )
    except BrokerError as exc:
        logger.error("❌ Could not enqueue upload job for %s: %s", job.describe(), exc)
        discard_staged_files(job.temporary_files, storage)
        return False
    logger.info("Queued upload job for %s with %s file(s)", job.describe(), len(job.temporary_files))
    return True


def submit_upload_job(owner_id, owner_kind, temporary_files, upload_options=None, storage=None) -> UploadJob:
    """
    Build the job and enqueue it after the current transaction commits.
    Returns straight away; the images show up on the record later.
    """
    job = UploadJob.create(
        owner_id=owner_id,
        owner_kind=owner_kind,
        temporary_files=temporary_files,
        upload_options=upload_options if upload_options is not None else default_upload_options(owner_kind, owner_id),
        max_attempts=getattr(settings, "IMAGE_UPLOAD_MAX_ATTEMPTS", 3),
    )
    transaction.on_commit(lambda: _enqueue(job, storage))
    return job


def destroy_remote_images(urls, client=None) -> list:
    """
    Destroy each URL's asset on the media host.  Failures are logged and
    skipped; returns the public ids that were destroyed.
    """
    client = client or _config().media_client
    destroyed = []
    for url in urls:
        public_id = extract_public_id(url, with_folder=True)
        if not public_id:
            continue
        try:
            client.destroy(public_id)
        except MediaUploadError as exc:
            logger.warning("Failed to destroy remote image %s: %s", public_id, exc)
            continue
        destroyed.append(public_id)
    return destroyed
