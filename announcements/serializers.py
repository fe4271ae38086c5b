from rest_framework import serializers

from categories.models import Category
from categories.serializers import CategoryRelatedField
from common.serializers import PartialSaveModelSerializer

from .models import Announcement


class AnnouncementSerializer(PartialSaveModelSerializer):
    user_id = serializers.IntegerField(read_only=True)
    category = CategoryRelatedField(Category.ANNOUNCEMENT)
    category_name = serializers.CharField(source="category.name", read_only=True)

    class Meta:
        model = Announcement
        fields = [
            "id", "unique_id", "user_id", "title", "description", "category",
            "category_name", "date", "urgent", "images", "created_at", "updated_at",
        ]
        read_only_fields = ["id", "unique_id", "user_id", "images", "created_at", "updated_at"]
