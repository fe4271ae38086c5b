"""
Progress callback for avatar uploads.

The media host POSTs ``bytes_received``/``bytes_total`` to the
``notification_url`` given with the upload; the percentage is pushed to
the user's socket group as ``image.upload.progress``.
"""
import logging
import math

from django.apps import apps
from django.conf import settings
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from notifications.realtime import broadcast_to_user

from .serializers import UploadProgressSerializer

logger = logging.getLogger(__name__)


def progress_percentage(bytes_received: int, bytes_total: int) -> int:
    if bytes_total <= 0:
        return 0
    percent = math.floor(bytes_received / bytes_total * 100 + 0.5)
    return max(0, min(percent, 100))


class UploadProgressView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = []

    def post(self, request, user_id):
        if settings.UPLOAD_PROGRESS_VERIFY_SIGNATURE:
            body = request.body.decode("utf-8", errors="replace")
            client = apps.get_app_config("uploads").media_client
            if not client.verify_notification(
                body,
                request.headers.get("X-Cld-Timestamp", ""),
                request.headers.get("X-Cld-Signature", ""),
            ):
                logger.warning("Rejected unsigned upload progress callback for user %s", user_id)
                return Response({"detail": "Invalid signature."}, status=status.HTTP_403_FORBIDDEN)

        serializer = UploadProgressSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        progress = progress_percentage(**serializer.validated_data)
        broadcast_to_user(user_id, "image.upload.progress", {"progress": progress})
        return Response({"progress": progress})
