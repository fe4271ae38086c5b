"""
Push helpers for the per-user WebSocket channel group.

Every connected ``NotificationConsumer`` joins ``user_<id>``; anything
sent here reaches all of that user's open connections.
"""
import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

logger = logging.getLogger(__name__)


def user_group(user_id) -> str:
    return f"user_{user_id}"


def broadcast_to_user(user_id, event: str, payload: dict) -> bool:
    """Send ``event`` to the user's group; returns False if it could not be sent."""
    channel_layer = get_channel_layer()
    if channel_layer is None:
        return False
    try:
        async_to_sync(channel_layer.group_send)(
            user_group(user_id),
            {"type": "notify.event", "event": event, "payload": payload},
        )
    except Exception as exc:
        logger.error("Failed to send %s to %s: %s", event, user_group(user_id), exc)
        return False
    return True
