"""
ViewSets for the events app.

Events follow the shared owned-record CRUD with background image
uploads.  Any signed-in user may mark or withdraw attendance.
"""
import logging

from django.db import transaction
from django.db.models import F
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from common.viewsets import OwnedRecordViewSet
from uploads.jobs import OwnerKind
from uploads.mixins import ImageUploadMixin

from .models import Event
from .serializers import EventSerializer

logger = logging.getLogger(__name__)


class EventViewSet(ImageUploadMixin, OwnedRecordViewSet):
    model = Event
    serializer_class = EventSerializer
    parser_classes = (MultiPartParser, FormParser, JSONParser)
    upload_kind = OwnerKind.EVENT
    search_fields = ["title", "description", "location"]
    filterset_fields = ["category", "urgent"]

    def get_queryset(self):
        return super().get_queryset().select_related("category")

    def get_serializer_context(self):
        context = super().get_serializer_context()
        user = self.request.user
        if user.is_authenticated:
            context["attending_ids"] = set(user.attending_events.values_list("pk", flat=True))
        return context

    # POST /api/events/{unique_id}/attend/
    @action(detail=True, methods=["post"], permission_classes=[IsAuthenticated])
    def attend(self, request, unique_id=None):
        event = self.get_object()
        with transaction.atomic():
            if event.attendees.filter(pk=request.user.pk).exists():
                return Response(
                    {"detail": "You have already marked attendance for this event."},
                    status=status.HTTP_409_CONFLICT,
                )
            event.attendees.add(request.user)
            Event.objects.filter(pk=event.pk).update(attending_count=F("attending_count") + 1)
        event.refresh_from_db(fields=["attending_count"])
        logger.info("User %s is attending %s", request.user.id, event.unique_id)
        return Response({
            "event_id": event.unique_id,
            "user_id": request.user.id,
            "attending_count": event.attending_count,
        })

    # POST /api/events/{unique_id}/unattend/
    @action(detail=True, methods=["post"], permission_classes=[IsAuthenticated])
    def unattend(self, request, unique_id=None):
        event = self.get_object()
        with transaction.atomic():
            if not event.attendees.filter(pk=request.user.pk).exists():
                return Response(
                    {"detail": "You are not attending this event."},
                    status=status.HTTP_400_BAD_REQUEST,
                )
            event.attendees.remove(request.user)
            Event.objects.filter(pk=event.pk, attending_count__gt=0).update(
                attending_count=F("attending_count") - 1
            )
        event.refresh_from_db(fields=["attending_count"])
        return Response({
            "event_id": event.unique_id,
            "user_id": request.user.id,
            "attending_count": event.attending_count,
        })
