from django.apps import AppConfig


class UploadsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "uploads"

    media_client = None
    temporary_storage = None

    def ready(self):
        from .client import MediaUploadClient
        from .storage import TemporaryStorage

        # fails fast with ImproperlyConfigured when credentials are missing
        self.media_client = MediaUploadClient.from_settings()
        self.temporary_storage = TemporaryStorage()
