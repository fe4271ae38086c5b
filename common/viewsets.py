"""
Base viewset for user-authored records.

Records are addressed by their ``unique_id``.  Anyone may read; writes
are limited to the owner or staff, and ``GET .../mine/`` lists the
caller's own records.
"""
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated, IsAuthenticatedOrReadOnly
from rest_framework.response import Response

from .permissions import IsOwnerOrStaffOrReadOnly


class OwnedRecordViewSet(viewsets.ModelViewSet):
    lookup_field = "unique_id"
    permission_classes = [IsAuthenticatedOrReadOnly, IsOwnerOrStaffOrReadOnly]
    search_fields = ["title", "description"]
    model = None

    def get_queryset(self):
        return self.model.objects.select_related("user")

    def perform_create(self, serializer):
        serializer.save(user_id=self.request.user.id)

    @action(detail=False, methods=["get"], permission_classes=[IsAuthenticated], url_path="mine")
    def mine(self, request):
        qs = self.filter_queryset(self.get_queryset().filter(user_id=request.user.id))
        page = self.paginate_queryset(qs)
        if page is not None:
            return self.get_paginated_response(self.get_serializer(page, many=True).data)
        return Response(self.get_serializer(qs, many=True).data)
