from django.contrib import admin

from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("id", "recipient", "kind", "title", "is_read", "created_at")
    search_fields = ("recipient__email", "title")
    list_filter = ("kind", "is_read")
    ordering = ("-created_at",)
