from rest_framework import serializers

from common.serializers import PartialSaveModelSerializer

from .models import Project


class ProjectSerializer(PartialSaveModelSerializer):
    user_id = serializers.IntegerField(read_only=True)
    status_name = serializers.CharField(source="status.name", read_only=True)

    class Meta:
        model = Project
        fields = [
            "id", "unique_id", "user_id", "title", "description",
            "progress_percentage", "timeline", "budget", "beneficiaries",
            "location", "start_date", "status", "status_name", "images",
            "created_at", "updated_at",
        ]
        read_only_fields = ["id", "unique_id", "user_id", "images", "created_at", "updated_at"]
