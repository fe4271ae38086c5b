"""
Admin configuration for the events app.
"""
from django.contrib import admin

from .models import Event


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ("unique_id", "title", "category", "start_datetime", "attending_count", "user", "created_at")
    list_filter = ("urgent", "category")
    search_fields = ("unique_id", "title", "location")
    readonly_fields = ("unique_id", "images", "attending_count")
