from common.viewsets import OwnedRecordViewSet

from .models import Opportunity
from .serializers import OpportunitySerializer


class OpportunityViewSet(OwnedRecordViewSet):
    """Opportunities carry no images, so plain owned-record CRUD."""
    model = Opportunity
    serializer_class = OpportunitySerializer
    search_fields = ["title", "description", "organization", "location"]
    filterset_fields = ["category"]

    def get_queryset(self):
        return super().get_queryset().select_related("category")
