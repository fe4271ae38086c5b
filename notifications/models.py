from django.conf import settings
from django.db import models


class Notification(models.Model):
    IMAGE_UPLOAD_SUCCESS = "image_upload_success"
    IMAGE_UPLOAD_FAILED = "image_upload_failed"
    PROFILE_UPDATE = "profile_update"

    KIND_CHOICES = [
        (IMAGE_UPLOAD_SUCCESS, "Image upload succeeded"),
        (IMAGE_UPLOAD_FAILED, "Image upload failed"),
        (PROFILE_UPDATE, "Profile update"),
    ]

    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL, related_name="notifications", on_delete=models.CASCADE
    )
    kind = models.CharField(max_length=32, choices=KIND_CHOICES)
    title = models.CharField(max_length=200, blank=True)
    message = models.TextField(blank=True, default="")
    data = models.JSONField(default=dict, blank=True)
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["recipient", "is_read", "created_at"], name="notif_recipient_unread_idx"),
        ]

    def __str__(self):
        return f"Notification(to={self.recipient_id}, kind={self.kind}, read={self.is_read})"
