"""
Lookup tables shared by the content apps.

``Category`` is typed so announcements, events and opportunities each
only offer their own categories; ``Status`` tracks where a project is.
"""
from django.db import models


class Category(models.Model):
    ANNOUNCEMENT = "announcement"
    OPPORTUNITY = "opportunity"
    EVENT = "event"

    TYPE_CHOICES = [
        (ANNOUNCEMENT, "Announcement"),
        (OPPORTUNITY, "Opportunity"),
        (EVENT, "Event"),
    ]

    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["type", "name"]
        verbose_name_plural = "categories"
        constraints = [
            models.UniqueConstraint(fields=["name", "type"], name="uniq_category_name_per_type"),
        ]

    def __str__(self):
        return f"{self.name} ({self.type})"


class Status(models.Model):
    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["id"]
        verbose_name_plural = "statuses"

    def __str__(self):
        return self.name
