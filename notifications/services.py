"""
Notification creation.

``notify`` stores a Notification row and pushes it to the recipient's
open sockets.  It is called from request handlers and upload workers
alike and never raises.
"""
import logging

from django.db import DatabaseError

from .models import Notification
from .realtime import broadcast_to_user

logger = logging.getLogger(__name__)


def notify(recipient_id, kind, title, message="", data=None):
    try:
        notification = Notification.objects.create(
            recipient_id=recipient_id,
            kind=kind,
            title=title,
            message=message,
            data=data or {},
        )
    except DatabaseError as exc:
        logger.error("Could not store %s notification for user %s: %s", kind, recipient_id, exc)
        return None

    broadcast_to_user(
        recipient_id,
        "notification.created",
        {
            "id": notification.id,
            "kind": notification.kind,
            "title": notification.title,
            "message": notification.message,
            "data": notification.data,
            "created_at": notification.created_at.isoformat(),
        },
    )
    return notification
