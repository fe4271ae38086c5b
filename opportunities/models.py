from django.db import models

from common.models import OwnedRecord


class Opportunity(OwnedRecord):
    UNIQUE_ID_PREFIX = "OPP"

    title = models.CharField(max_length=255)
    description = models.TextField()
    location = models.CharField(max_length=255)
    deadline = models.DateField()
    category = models.ForeignKey(
        "categories.Category",
        on_delete=models.PROTECT,
        related_name="opportunities",
        limit_choices_to={"type": "opportunity"},
    )
    organization = models.CharField(max_length=255)
    application_link = models.URLField(max_length=500)

    class Meta(OwnedRecord.Meta):
        verbose_name_plural = "opportunities"

    def __str__(self):
        return f"{self.unique_id}: {self.title}"
