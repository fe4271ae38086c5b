from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from common.models import OwnedRecord


class Project(OwnedRecord):
    UNIQUE_ID_PREFIX = "PRJ"

    title = models.CharField(max_length=255)
    description = models.TextField()
    progress_percentage = models.PositiveSmallIntegerField(
        default=0, validators=[MinValueValidator(0), MaxValueValidator(100)]
    )
    timeline = models.CharField(max_length=255)
    budget = models.CharField(max_length=255)
    beneficiaries = models.PositiveIntegerField()
    location = models.CharField(max_length=255)
    start_date = models.DateField()
    status = models.ForeignKey("categories.Status", on_delete=models.PROTECT, related_name="projects")
    # secure URLs, appended to by upload jobs
    images = models.JSONField(default=list, blank=True)

    class Meta(OwnedRecord.Meta):
        pass

    def __str__(self):
        return f"{self.unique_id}: {self.title}"
