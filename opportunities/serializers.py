from rest_framework import serializers

from categories.models import Category
from categories.serializers import CategoryRelatedField
from common.serializers import PartialSaveModelSerializer

from .models import Opportunity


class OpportunitySerializer(PartialSaveModelSerializer):
    user_id = serializers.IntegerField(read_only=True)
    category = CategoryRelatedField(Category.OPPORTUNITY)
    category_name = serializers.CharField(source="category.name", read_only=True)

    class Meta:
        model = Opportunity
        fields = [
            "id", "unique_id", "user_id", "title", "description", "location",
            "deadline", "category", "category_name", "organization",
            "application_link", "created_at", "updated_at",
        ]
        read_only_fields = ["id", "unique_id", "user_id", "created_at", "updated_at"]
