from rest_framework.parsers import FormParser, JSONParser, MultiPartParser

from common.viewsets import OwnedRecordViewSet
from uploads.jobs import OwnerKind
from uploads.mixins import ImageUploadMixin

from .models import Announcement
from .serializers import AnnouncementSerializer


class AnnouncementViewSet(ImageUploadMixin, OwnedRecordViewSet):
    """
    CRUD over announcements.  ``images`` (multipart) are uploaded in the
    background; ``images_to_delete`` removes URLs on update.
    """
    model = Announcement
    serializer_class = AnnouncementSerializer
    parser_classes = (MultiPartParser, FormParser, JSONParser)
    upload_kind = OwnerKind.ANNOUNCEMENT
    filterset_fields = ["category", "urgent"]

    def get_queryset(self):
        return super().get_queryset().select_related("category")
