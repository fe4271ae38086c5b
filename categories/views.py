from rest_framework import viewsets

from common.permissions import IsStaffOrReadOnly

from .models import Category, Status
from .serializers import CategorySerializer, StatusSerializer


class CategoryViewSet(viewsets.ModelViewSet):
    """Categories; filter with ``?type=announcement|opportunity|event``."""
    serializer_class = CategorySerializer
    permission_classes = [IsStaffOrReadOnly]
    filterset_fields = ["type"]
    search_fields = ["name", "description"]

    def get_queryset(self):
        return Category.objects.all()


class StatusViewSet(viewsets.ModelViewSet):
    queryset = Status.objects.all()
    serializer_class = StatusSerializer
    permission_classes = [IsStaffOrReadOnly]
    search_fields = ["name"]
