from django.contrib import admin

from .models import Announcement


@admin.register(Announcement)
class AnnouncementAdmin(admin.ModelAdmin):
    list_display = ("unique_id", "title", "category", "date", "urgent", "user", "created_at")
    list_filter = ("urgent", "category")
    search_fields = ("unique_id", "title")
    readonly_fields = ("unique_id", "images")
