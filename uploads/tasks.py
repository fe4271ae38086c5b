"""
Celery tasks for the image upload pipeline.

``process_upload_job`` runs one ``UploadJob`` payload.  Unexpected errors
are retried on the policy's backoff until ``max_attempts`` is reached;
the final failure lands in ``UploadJobTask.on_failure``, which removes
whatever staged files are left and tells avatar owners the upload failed.
"""
import logging
from datetime import timedelta

from celery import Task, shared_task
from django.apps import apps
from django.conf import settings

from notifications.models import Notification
from notifications.services import notify

from .executor import AvatarUploadExecutor, UploadJobExecutor
from .jobs import OwnerKind, UploadJob
from .records import RecordStore
from .retry import JobState, RetryPolicy

logger = logging.getLogger(__name__)


def _collaborators():
    config = apps.get_app_config("uploads")
    return config.media_client, config.temporary_storage


def build_executor(job: UploadJob) -> UploadJobExecutor:
    client, storage = _collaborators()
    executor_class = AvatarUploadExecutor if job.owner_kind is OwnerKind.USER_AVATAR else UploadJobExecutor
    return executor_class(
        client=client,
        storage=storage,
        records=RecordStore(),
        chunk_size=getattr(settings, "IMAGE_UPLOAD_CHUNK_SIZE", 3),
    )


def handle_permanent_failure(payload, exc) -> None:
    try:
        job = UploadJob.from_payload(payload)
    except (KeyError, TypeError, ValueError) as bad_payload:
        logger.error("Upload job failed with an unreadable payload %r: %s", payload, bad_payload)
        return

    logger.error(
        "Upload job for %s permanently failed after %s attempt(s): %r",
        job.describe(), job.max_attempts, exc,
    )
    build_executor(job).cleanup(job)

    if job.owner_kind is OwnerKind.USER_AVATAR:
        notify(
            job.owner_id,
            Notification.IMAGE_UPLOAD_FAILED,
            "Image upload failed",
            "Your profile image could not be uploaded. Please try again.",
            {"error": str(exc)},
        )


class UploadJobTask(Task):
    def on_failure(self, exc, task_id, args, kwargs, einfo):
        payload = args[0] if args else kwargs.get("payload")
        handle_permanent_failure(payload, exc)


def _notify_avatar_outcome(job: UploadJob, outcome) -> None:
    if not outcome.owner_found:
        return
    if outcome.uploaded:
        notify(
            job.owner_id,
            Notification.IMAGE_UPLOAD_SUCCESS,
            "Image uploaded",
            "Your profile image has been updated.",
            {"image_url": outcome.uploaded[0]},
        )
    else:
        notify(
            job.owner_id,
            Notification.IMAGE_UPLOAD_FAILED,
            "Image upload failed",
            "Your profile image could not be uploaded. Please try again.",
            {"error": outcome.failed[0].reason if outcome.failed else ""},
        )


@shared_task(
    bind=True,
    base=UploadJobTask,
    name="uploads.process_upload_job",
    acks_late=True,
    time_limit=getattr(settings, "IMAGE_UPLOAD_TIME_LIMIT", 300),
    soft_time_limit=getattr(settings, "IMAGE_UPLOAD_TIME_LIMIT", 300) - 10,
)
def process_upload_job(self, payload):
    job = UploadJob.from_payload(payload)
    policy = RetryPolicy.from_settings(max_attempts=job.max_attempts)
    attempt = self.request.retries + 1
    logger.info("Processing upload job for %s (attempt %s/%s)", job.describe(), attempt, policy.max_attempts)

    try:
        outcome = build_executor(job).run(job)
    except Exception as exc:
        if policy.next_state(attempt, failed=True) is JobState.RETRYING:
            countdown = policy.countdown(attempt)
            logger.warning(
                "Upload job for %s failed on attempt %s, retrying in %ss: %s",
                job.describe(), attempt, countdown, exc,
            )
            raise self.retry(exc=exc, countdown=countdown, max_retries=policy.max_retries)
        raise

    if job.owner_kind is OwnerKind.USER_AVATAR:
        _notify_avatar_outcome(job, outcome)
    summary = outcome.summary()
    logger.info("Upload job for %s finished: %s", job.describe(), summary)
    return summary


@shared_task(name="uploads.sweep_stale_uploads")
def sweep_stale_uploads(max_age_hours=None):
    """Remove staged files that no job will ever pick up again."""
    _, storage = _collaborators()
    hours = max_age_hours or getattr(settings, "STALE_UPLOAD_MAX_AGE_HOURS", 24)
    removed = storage.sweep(timedelta(hours=hours))
    logger.info("Swept %s stale temporary upload(s) older than %sh", removed, hours)
    return removed
