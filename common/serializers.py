"""
Serializer helpers shared by the content apps.
"""
from rest_framework import serializers


class PartialSaveModelSerializer(serializers.ModelSerializer):
    """
    ModelSerializer whose updates write only the validated columns.

    Columns outside ``validated_data`` (notably ``images``, which upload
    jobs merge into) are never written by a request-path update.
    """

    def update(self, instance, validated_data):
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        instance.save(update_fields=[*validated_data.keys(), "updated_at"])
        return instance
