from types import SimpleNamespace

import pytest

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from channels.testing import WebsocketCommunicator
from django.contrib.auth.models import AnonymousUser

from notifications.consumers import NotificationConsumer
from notifications.realtime import user_group

# channels closes stale DB connections around each message; allow that access.
pytestmark = pytest.mark.django_db


def test_anonymous_socket_is_closed():
    async def scenario():
        communicator = WebsocketCommunicator(NotificationConsumer.as_asgi(), "/ws/notifications/")
        communicator.scope["user"] = AnonymousUser()
        result = await communicator.connect()
        await communicator.disconnect()
        return result

    assert async_to_sync(scenario)() == (False, 4401)


def test_group_events_reach_the_socket():
    async def scenario():
        communicator = WebsocketCommunicator(NotificationConsumer.as_asgi(), "/ws/notifications/")
        communicator.scope["user"] = SimpleNamespace(id=42, is_authenticated=True)
        connected, _ = await communicator.connect()
        assert connected
        await get_channel_layer().group_send(
            user_group(42),
            {"type": "notify.event", "event": "image.upload.progress", "payload": {"progress": 40}},
        )
        message = await communicator.receive_json_from()
        await communicator.disconnect()
        return message

    assert async_to_sync(scenario)() == {"event": "image.upload.progress", "payload": {"progress": 40}}
