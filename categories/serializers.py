from rest_framework import serializers

from .models import Category, Status


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "name", "description", "type", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]


class StatusSerializer(serializers.ModelSerializer):
    class Meta:
        model = Status
        fields = ["id", "name", "description", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]


class CategoryRelatedField(serializers.PrimaryKeyRelatedField):
    """Accepts only categories of ``category_type``."""

    def __init__(self, category_type, **kwargs):
        self.category_type = category_type
        kwargs.setdefault("queryset", Category.objects.all())
        super().__init__(**kwargs)

    def get_queryset(self):
        return super().get_queryset().filter(type=self.category_type)
