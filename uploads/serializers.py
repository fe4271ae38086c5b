from django.core.validators import FileExtensionValidator
from rest_framework import serializers

ALLOWED_IMAGE_EXTENSIONS = ["jpeg", "png", "jpg", "gif", "webp"]


class ImageChangesSerializer(serializers.Serializer):
    """Image additions and removals that ride along a record create/update."""
    images = serializers.ListField(
        child=serializers.ImageField(validators=[FileExtensionValidator(ALLOWED_IMAGE_EXTENSIONS)]),
        required=False,
        default=list,
    )
    images_to_delete = serializers.ListField(
        child=serializers.URLField(),
        required=False,
        default=list,
    )


class UploadProgressSerializer(serializers.Serializer):
    bytes_received = serializers.IntegerField(min_value=0)
    bytes_total = serializers.IntegerField(min_value=1)
