"""Serializers for the booking API."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import BlockedDate, Booking
from .services import BookingRequest


class BookingCreateSerializer(serializers.Serializer):
    """
    Guest booking form.

    Every field is optional at this layer: the admission service owns the
    "all required fields" rule so it reports one message for any gap. This
    serializer only rejects values that are present but malformed.
    """

    apartmentId = serializers.IntegerField(required=False, allow_null=True)
    guestName = serializers.CharField(required=False, allow_null=True, allow_blank=True, max_length=255)
    guestEmail = serializers.EmailField(required=False, allow_null=True, allow_blank=True)
    guestPhone = serializers.CharField(required=False, allow_null=True, allow_blank=True, max_length=50)
    checkIn = serializers.DateField(required=False, allow_null=True)
    checkOut = serializers.DateField(required=False, allow_null=True)
    numGuests = serializers.IntegerField(required=False, allow_null=True, min_value=0)
    specialRequests = serializers.CharField(required=False, allow_null=True, allow_blank=True)

    # Typed fields where a blank form value means "not filled in".
    BLANK_AS_MISSING = ("apartmentId", "checkIn", "checkOut", "numGuests")

    def to_internal_value(self, data):  # type: ignore
        if hasattr(data, "items"):
            data = {key: data.get(key) for key in data}
            for key in self.BLANK_AS_MISSING:
                if isinstance(data.get(key), str) and not data[key].strip():
                    data[key] = None
        return super().to_internal_value(data)

    def to_booking_request(self) -> BookingRequest:
        data = self.validated_data
        return BookingRequest(
            apartment_id=data.get("apartmentId"),
            guest_name=data.get("guestName"),
            guest_email=data.get("guestEmail"),
            guest_phone=data.get("guestPhone"),
            check_in=data.get("checkIn"),
            check_out=data.get("checkOut"),
            num_guests=data.get("numGuests"),
            special_requests=data.get("specialRequests") or "",
        )


class BookingSerializer(serializers.ModelSerializer):
    apartment_name = serializers.CharField(source="apartment.name", read_only=True)
    nights = serializers.IntegerField(read_only=True)

    class Meta:
        model = Booking
        fields = [
            "id",
            "apartment",
            "apartment_name",
            "guest_name",
            "guest_email",
            "guest_phone",
            "check_in",
            "check_out",
            "nights",
            "num_guests",
            "total_amount",
            "status",
            "special_requests",
            "created_at",
        ]
        read_only_fields = fields


class BookingStatusSerializer(serializers.Serializer):
    # Plain CharField: unknown values are reported by the service as "Invalid status".
    status = serializers.CharField()


class BlockedDateSerializer(serializers.ModelSerializer):
    class Meta:
        model = BlockedDate
        fields = ["id", "apartment", "date", "reason", "created_at"]
        read_only_fields = fields


class BlockedDateWriteSerializer(serializers.Serializer):
    date = serializers.DateField()
    reason = serializers.CharField(required=False, allow_blank=True, default="", max_length=255)
    apartment = serializers.IntegerField(required=False, allow_null=True, default=None)
