"""
Media host client.

Thin wrapper over the Cloudinary SDK.  One instance is built when the
``uploads`` app loads (see ``UploadsConfig.ready``) and handed to the
upload executors; credentials travel with every call instead of being
written into the SDK's process-wide configuration.
"""
from __future__ import annotations

import hmac
import logging
from typing import Any, Mapping

import cloudinary.uploader
import cloudinary.utils
from cloudinary.exceptions import Error as CloudinaryError
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

logger = logging.getLogger(__name__)


class MediaUploadError(Exception):
    """The media host rejected a call, timed out or answered with garbage."""


class MediaUploadClient:
    def __init__(self, cloud_name: str, api_key: str, api_secret: str, timeout: int = 60):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self._api_secret = api_secret
        self.timeout = timeout

    @classmethod
    def from_settings(cls) -> "MediaUploadClient":
        credentials = {
            "CLOUDINARY_CLOUD_NAME": getattr(settings, "CLOUDINARY_CLOUD_NAME", ""),
            "CLOUDINARY_API_KEY": getattr(settings, "CLOUDINARY_API_KEY", ""),
            "CLOUDINARY_API_SECRET": getattr(settings, "CLOUDINARY_API_SECRET", ""),
        }
        missing = [name for name, value in credentials.items() if not value]
        if missing:
            raise ImproperlyConfigured(
                "Cloudinary credentials are not configured properly; missing " + ", ".join(missing)
            )
        return cls(
            cloud_name=credentials["CLOUDINARY_CLOUD_NAME"],
            api_key=credentials["CLOUDINARY_API_KEY"],
            api_secret=credentials["CLOUDINARY_API_SECRET"],
            timeout=getattr(settings, "CLOUDINARY_TIMEOUT", 60),
        )

    def _call_options(self) -> dict[str, Any]:
        return {
            "cloud_name": self.cloud_name,
            "api_key": self.api_key,
            "api_secret": self._api_secret,
            "secure": True,
            "timeout": self.timeout,
        }

    def upload(self, local_path: str, options: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """
        Upload the file at ``local_path``.  ``options`` (folder,
        transformation, ...) are passed to the host untouched.  Returns the
        host's response, which always carries ``secure_url``.
        """
        try:
            result = cloudinary.uploader.upload(local_path, **{**dict(options or {}), **self._call_options()})
        except (CloudinaryError, OSError) as exc:
            raise MediaUploadError(str(exc)) from exc
        if not isinstance(result, dict) or not result.get("secure_url"):
            raise MediaUploadError("No secure_url returned from media host")
        return result

    def destroy(self, public_id: str) -> dict[str, Any]:
        try:
            result = cloudinary.uploader.destroy(public_id, **self._call_options())
        except CloudinaryError as exc:
            raise MediaUploadError(str(exc)) from exc
        # "not found" means it is already gone, which is what we wanted
        if not isinstance(result, dict) or result.get("result") not in ("ok", "not found"):
            raise MediaUploadError(f"Destroy of {public_id} failed: {result!r}")
        return result

    def verify_notification(self, body: str, timestamp: str, signature: str) -> bool:
        """Check the signature the media host puts on its callbacks."""
        if not (body and timestamp and signature):
            return False
        expected = cloudinary.utils.compute_hex_hash(body + timestamp + self._api_secret)
        return hmac.compare_digest(expected, signature)
