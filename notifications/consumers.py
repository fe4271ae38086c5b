from channels.generic.websocket import AsyncJsonWebsocketConsumer

from .realtime import user_group


class NotificationConsumer(AsyncJsonWebsocketConsumer):
    """Delivers notifications and upload progress to one authenticated user."""

    async def connect(self):
        user = self.scope.get("user")
        if not user or not user.is_authenticated:
            await self.close(code=4401)
            return
        self.group_name = user_group(user.id)
        await self.channel_layer.group_add(self.group_name, self.channel_name)
        await self.accept()

    async def disconnect(self, code):
        if hasattr(self, "group_name"):
            await self.channel_layer.group_discard(self.group_name, self.channel_name)

    # use: channel_layer.group_send(group, {"type": "notify.event", "event": ..., "payload": {...}})
    async def notify_event(self, event):
        await self.send_json({"event": event["event"], "payload": event.get("payload", {})})
