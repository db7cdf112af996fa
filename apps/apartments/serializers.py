"""Serializers for the apartment catalog."""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers  # type: ignore

from .models import Apartment, ApartmentPhoto


class ApartmentPhotoSerializer(serializers.ModelSerializer):
    class Meta:
        model = ApartmentPhoto
        fields = ["id", "url", "is_primary"]
        read_only_fields = ["id"]


class ApartmentSerializer(serializers.ModelSerializer):
    """Read serializer with the photo gallery and the resolved cover photo."""

    photos = ApartmentPhotoSerializer(many=True, read_only=True)
    primary_photo = serializers.SerializerMethodField()

    class Meta:
        model = Apartment
        fields = [
            "id",
            "name",
            "description",
            "location",
            "price_per_night",
            "max_guests",
            "amenities",
            "photos",
            "primary_photo",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_primary_photo(self, obj: Apartment) -> str | None:
        photo = obj.primary_photo
        return photo.url if photo else None


class ApartmentWriteSerializer(serializers.ModelSerializer):
    """Serializer for create/update operations."""

    price_per_night = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=Decimal("0.01"),
    )
    max_guests = serializers.IntegerField(min_value=1)
    amenities = serializers.ListField(
        child=serializers.CharField(max_length=100),
        required=False,
        default=list,
    )

    class Meta:
        model = Apartment
        fields = [
            "name",
            "description",
            "location",
            "price_per_night",
            "max_guests",
            "amenities",
        ]
        extra_kwargs = {
            "description": {"required": False, "allow_blank": True},
        }


class ApartmentPhotoWriteSerializer(serializers.Serializer):
    url = serializers.CharField(max_length=500)
    is_primary = serializers.BooleanField(default=False)
