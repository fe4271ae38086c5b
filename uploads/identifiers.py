"""
Remote identifier extraction for media host URLs.

Secure URLs look like ``https://res.cloudinary.com/<cloud>/image/upload/
v1700000000/announcements/abc123.jpg``.  The media host's delete call
needs the asset's public id (``announcements/abc123``), which is not
stored separately, so it is recovered from the URL.  Patterns are tried
from most to least specific and the first match wins.
"""
from __future__ import annotations

import logging
import re
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

_EXTENSIONS = r"(?:jpe?g|png|gif|webp|avif)"

PUBLIC_ID_PATTERNS = (
    re.compile(rf"/image/upload/v\d+/(?P<public_id>.+)\.{_EXTENSIONS}$", re.IGNORECASE),
    re.compile(rf"/upload/v\d+/(?P<public_id>.+)\.{_EXTENSIONS}$", re.IGNORECASE),
    # transformation segments between "upload" and the version
    re.compile(rf"/v\d+/(?P<public_id>.+)\.{_EXTENSIONS}$", re.IGNORECASE),
    re.compile(rf"/image/upload/(?P<public_id>.+)\.{_EXTENSIONS}$", re.IGNORECASE),
    re.compile(rf"/upload/(?P<public_id>.+)\.{_EXTENSIONS}$", re.IGNORECASE),
)


def extract_public_id(url: str | None, *, with_folder: bool = False, quiet: bool = False) -> str | None:
    """
    Return the identifier captured from ``url``, or None when no pattern
    matches.  By default only the final path segment is returned
    (``abc123``); pass ``with_folder=True`` for the folder-qualified id
    (``announcements/abc123``) that the media host's destroy call expects.
    ``quiet`` suppresses the warning for URLs that do not parse.
    """
    if not url:
        return None
    path = urlparse(url).path
    for pattern in PUBLIC_ID_PATTERNS:
        match = pattern.search(path)
        if match:
            public_id = match.group("public_id").strip("/")
            if with_folder:
                return public_id
            return public_id.rsplit("/", 1)[-1]
    if not quiet:
        logger.warning("Could not extract public id from URL: %s", url)
    return None
