"""
Admin configuration for the users app.

Re-registers the `User` admin with an inline profile so contact details
and the avatar URL are visible next to the account.
"""
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.contrib.auth.models import User

from .models import UserProfile


class UserProfileInline(admin.StackedInline):
    model = UserProfile
    can_delete = False
    readonly_fields = ("image_url",)


class UserAdmin(BaseUserAdmin):
    inlines = [UserProfileInline]
    list_display = ("username", "email", "is_active", "is_staff", "date_joined")


admin.site.unregister(User)
admin.site.register(User, UserAdmin)
