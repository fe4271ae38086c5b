from rest_framework.parsers import FormParser, JSONParser, MultiPartParser

from common.viewsets import OwnedRecordViewSet
from uploads.jobs import OwnerKind
from uploads.mixins import ImageUploadMixin

from .models import Project
from .serializers import ProjectSerializer


class ProjectViewSet(ImageUploadMixin, OwnedRecordViewSet):
    model = Project
    serializer_class = ProjectSerializer
    parser_classes = (MultiPartParser, FormParser, JSONParser)
    upload_kind = OwnerKind.PROJECT
    search_fields = ["title", "description", "location"]
    filterset_fields = ["status"]

    def get_queryset(self):
        return super().get_queryset().select_related("status")
