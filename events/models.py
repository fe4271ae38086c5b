"""
Database models for the events app.

An ``Event`` is a community happening with a start/end window.  Members
mark attendance through ``attendees``; ``attending_count`` mirrors the
size of that set so lists can show it without a join.
"""
from django.conf import settings
from django.db import models
from django.db.models import F, Q

from common.models import OwnedRecord


class Event(OwnedRecord):
    UNIQUE_ID_PREFIX = "EVT"

    title = models.CharField(max_length=255)
    description = models.TextField()
    start_datetime = models.DateTimeField()
    end_datetime = models.DateTimeField()
    category = models.ForeignKey(
        "categories.Category",
        on_delete=models.PROTECT,
        related_name="events",
        limit_choices_to={"type": "event"},
    )
    urgent = models.BooleanField(default=False)
    location = models.CharField(max_length=255)
    attending_count = models.PositiveIntegerField(default=0)
    attendees = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        related_name="attending_events",
        blank=True,
    )
    # secure URLs, appended to by upload jobs
    images = models.JSONField(default=list, blank=True)

    class Meta(OwnedRecord.Meta):
        constraints = [
            models.CheckConstraint(
                condition=Q(end_datetime__gte=F("start_datetime")), name="event_ends_after_start"
            ),
        ]
        indexes = [
            models.Index(fields=["start_datetime"], name="event_start_idx"),
        ]

    def __str__(self):
        return f"{self.unique_id}: {self.title}"
