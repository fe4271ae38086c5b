"""
Serializers for the events app.
"""
from rest_framework import serializers

from categories.models import Category
from categories.serializers import CategoryRelatedField
from common.serializers import PartialSaveModelSerializer

from .models import Event


class EventSerializer(PartialSaveModelSerializer):
    user_id = serializers.IntegerField(read_only=True)
    category = CategoryRelatedField(Category.EVENT)
    category_name = serializers.CharField(source="category.name", read_only=True)
    is_attending = serializers.SerializerMethodField()

    class Meta:
        model = Event
        fields = [
            "id", "unique_id", "user_id", "title", "description",
            "start_datetime", "end_datetime", "category", "category_name",
            "urgent", "location", "attending_count", "is_attending", "images",
            "created_at", "updated_at",
        ]
        read_only_fields = [
            "id", "unique_id", "user_id", "attending_count", "images", "created_at", "updated_at",
        ]

    def get_is_attending(self, obj) -> bool:
        request = self.context.get("request")
        user = getattr(request, "user", None)
        if not user or not user.is_authenticated:
            return False
        attending_ids = self.context.get("attending_ids")
        if attending_ids is not None:
            return obj.pk in attending_ids
        return obj.attendees.filter(pk=user.pk).exists()

    def validate(self, attrs):
        start = attrs.get("start_datetime", getattr(self.instance, "start_datetime", None))
        end = attrs.get("end_datetime", getattr(self.instance, "end_datetime", None))
        if start and end and end < start:
            raise serializers.ValidationError({"end_datetime": "End time must be after the start time."})
        return attrs
