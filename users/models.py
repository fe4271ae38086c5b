"""
Models for the users app.

A `UserProfile` extends the built-in `auth.User` with contact details
and the secure URL of the user's avatar on the media host.  Profiles are
created by a signal whenever a user is saved.  The custom permissions
declared here are what the `admin` and `user` roles are built from.
"""
from django.conf import settings
from django.db import models


class UserProfile(models.Model):
    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="profile")
    full_name = models.CharField(max_length=255, blank=True)
    phone_number = models.CharField(max_length=32, unique=True, null=True, blank=True)
    whatsapp_number = models.CharField(max_length=32, blank=True, default="")
    # written only by avatar upload jobs and the delete_image flow
    image_url = models.URLField(max_length=500, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        permissions = [
            ("edit_profile", "Can edit own profile"),
            ("reset_password", "Can reset password"),
            ("manage_users", "Can manage users and roles"),
            ("view_dashboard", "Can view the dashboard"),
        ]

    def __str__(self) -> str:
        return f"Profile<{self.user.email or self.user.username}>"
