from django.contrib import admin

from .models import Opportunity


@admin.register(Opportunity)
class OpportunityAdmin(admin.ModelAdmin):
    list_display = ("unique_id", "title", "organization", "deadline", "category", "user")
    list_filter = ("category",)
    search_fields = ("unique_id", "title", "organization")
    readonly_fields = ("unique_id",)
