"""
Serializers for posts.

The API speaks camelCase; model fields are snake_case. Each camelCase field
maps onto its model field with ``source``.
"""

from rest_framework import serializers

from posts.models import (
    MAX_BOOM_LENGTH_CM,
    MAX_METERS_FROM_SEA,
    MAX_NUMBER_OF_ANTENNAS,
    MAX_NUMBER_OF_ELEMENTS,
    MIN_NUMBER_OF_ELEMENTS,
    Post,
)


class PostFieldsSerializer(serializers.ModelSerializer):
    """Validates the domain fields of a new post."""

    isSelfBuilt = serializers.BooleanField(
        source="is_self_built", required=False, default=False
    )
    metersFromSea = serializers.FloatField(
        source="meters_from_sea", max_value=MAX_METERS_FROM_SEA
    )
    boomLengthCm = serializers.FloatField(
        source="boom_length_cm", min_value=0, max_value=MAX_BOOM_LENGTH_CM
    )
    numberOfElements = serializers.IntegerField(
        source="number_of_elements",
        min_value=MIN_NUMBER_OF_ELEMENTS,
        max_value=MAX_NUMBER_OF_ELEMENTS,
    )
    numberOfAntennas = serializers.IntegerField(
        source="number_of_antennas", min_value=0, max_value=MAX_NUMBER_OF_ANTENNAS
    )

    class Meta:
        model = Post
        fields = [
            "description",
            "band",
            "brand",
            "isSelfBuilt",
            "metersFromSea",
            "boomLengthCm",
            "numberOfElements",
            "numberOfAntennas",
            "cable",
        ]


class ObjectKeyField(serializers.CharField):
    """A key as returned by the upload endpoint; numbers are not coerced."""

    def to_internal_value(self, data):
        if not isinstance(data, str):
            self.fail("invalid")
        return super().to_internal_value(data)


class PostCreateRequestSerializer(serializers.Serializer):
    """Shape check for the create request: a list of previously returned keys."""

    filesPath = serializers.ListField(
        child=ObjectKeyField(allow_blank=False, trim_whitespace=False),
        allow_empty=True,
    )


class PostSerializer(serializers.ModelSerializer):
    """Read representation of a committed post."""

    owner = serializers.PrimaryKeyRelatedField(read_only=True)
    isSelfBuilt = serializers.BooleanField(source="is_self_built", read_only=True)
    metersFromSea = serializers.FloatField(source="meters_from_sea", read_only=True)
    boomLengthCm = serializers.FloatField(source="boom_length_cm", read_only=True)
    numberOfElements = serializers.IntegerField(
        source="number_of_elements", read_only=True
    )
    numberOfAntennas = serializers.IntegerField(
        source="number_of_antennas", read_only=True
    )
    isApproved = serializers.BooleanField(source="is_approved", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Post
        fields = [
            "id",
            "owner",
            "description",
            "band",
            "brand",
            "isSelfBuilt",
            "metersFromSea",
            "boomLengthCm",
            "numberOfElements",
            "numberOfAntennas",
            "cable",
            "pictures",
            "videos",
            "isApproved",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields
