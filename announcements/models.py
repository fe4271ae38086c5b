from django.db import models

from common.models import OwnedRecord


class Announcement(OwnedRecord):
    UNIQUE_ID_PREFIX = "ANN"

    title = models.CharField(max_length=255)
    description = models.TextField()
    category = models.ForeignKey(
        "categories.Category",
        on_delete=models.PROTECT,
        related_name="announcements",
        limit_choices_to={"type": "announcement"},
    )
    date = models.DateField()
    urgent = models.BooleanField(default=False)
    # secure URLs, appended to by upload jobs
    images = models.JSONField(default=list, blank=True)

    class Meta(OwnedRecord.Meta):
        pass

    def __str__(self):
        return f"{self.unique_id}: {self.title}"
