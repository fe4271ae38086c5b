from django.contrib import admin

from .models import Project


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ("unique_id", "title", "status", "progress_percentage", "start_date", "user")
    list_filter = ("status",)
    search_fields = ("unique_id", "title", "location")
    readonly_fields = ("unique_id", "images")
