"""
Viewset mixin wiring record create/update/delete into the upload pipeline.

The record is written synchronously; new images are staged and uploaded
by a background job, so create and update responses only report
``images_pending``.  Removing images (``images_to_delete``) and deleting
a record destroy the remote copies inline.
"""
import logging

from django.db import transaction
from rest_framework import status
from rest_framework.response import Response

from .dispatch import (
    default_upload_options,
    destroy_remote_images,
    discard_staged_files,
    stage_files,
    submit_upload_job,
)
from .records import RecordStore
from .serializers import ImageChangesSerializer

logger = logging.getLogger(__name__)


class ImageUploadMixin:
    upload_kind = None

    def get_image_changes(self, request) -> dict:
        changes = ImageChangesSerializer(data=request.data)
        changes.is_valid(raise_exception=True)
        return changes.validated_data

    def save_with_images(self, serializer, images, **save_kwargs):
        """Save the record and queue ``images`` for it; returns whether any were queued."""
        staged = stage_files(images, self.upload_kind) if images else []
        try:
            with transaction.atomic():
                instance = serializer.save(**save_kwargs)
                if staged:
                    submit_upload_job(
                        instance.pk,
                        self.upload_kind,
                        staged,
                        default_upload_options(self.upload_kind, instance.pk),
                    )
        except Exception:
            discard_staged_files(staged)
            raise
        return bool(staged)

    def delete_images(self, instance, urls) -> list:
        current = set(instance.images or [])
        doomed = [url for url in urls if url in current]
        if not doomed:
            return []
        destroy_remote_images(doomed)
        RecordStore().remove_images(self.upload_kind, instance.pk, doomed)
        logger.info("Removed %s image(s) from %s %s", len(doomed), self.upload_kind, instance.pk)
        return doomed

    def create(self, request, *args, **kwargs):
        changes = self.get_image_changes(request)
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        pending = self.save_with_images(serializer, changes["images"], user_id=request.user.id)
        headers = self.get_success_headers(serializer.data)
        return Response(
            {**serializer.data, "images_pending": pending},
            status=status.HTTP_201_CREATED,
            headers=headers,
        )

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop("partial", False)
        instance = self.get_object()
        changes = self.get_image_changes(request)
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        pending = self.save_with_images(serializer, changes["images"])
        self.delete_images(instance, changes["images_to_delete"])
        instance.refresh_from_db()
        return Response({**self.get_serializer(instance).data, "images_pending": pending})

    def perform_destroy(self, instance):
        if instance.images:
            destroy_remote_images(instance.images)
        instance.delete()
