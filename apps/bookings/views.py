"""API views for the booking domain."""

from __future__ import annotations

from rest_framework import mixins, status, viewsets  # type: ignore
from rest_framework.permissions import AllowAny  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.users.permissions import IsAdmin
from shared.domain.exceptions import ValidationError

from . import services
from .filters import BlockedDateFilter, BookingFilter
from .models import BlockedDate, Booking
from .pagination import BookingPagination
from .serializers import (
    BlockedDateSerializer,
    BlockedDateWriteSerializer,
    BookingCreateSerializer,
    BookingSerializer,
    BookingStatusSerializer,
)


class AvailabilityView(APIView):
    """Dates a guest cannot pick, for one apartment or for all of them."""

    permission_classes = [AllowAny]

    def get(self, request, apartment_id: int | None = None):  # type: ignore
        dates = services.get_unavailable_dates(apartment_id)
        return Response({"unavailableDates": dates})


class BookingViewSet(mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """Guest-facing booking creation and lookup."""

    queryset = Booking.objects.select_related("apartment").all()
    lookup_value_regex = r"\d+"
    permission_classes = [AllowAny]

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BookingCreateSerializer
        return BookingSerializer

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        if not serializer.is_valid():
            raise ValidationError("Invalid booking details", details=serializer.errors)

        result = services.admit_booking(serializer.to_booking_request())
        return Response(
            {
                "success": True,
                "bookingId": result.booking.pk,
                "totalAmount": result.total_amount,
                "nights": result.nights,
            },
            status=status.HTTP_201_CREATED,
        )

    def retrieve(self, request, *args, **kwargs):  # type: ignore
        booking = services.get_booking(kwargs[self.lookup_field])
        return Response(BookingSerializer(booking).data)


class AdminBookingViewSet(
    mixins.ListModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """Back-office booking list, status changes and hard delete."""

    queryset = Booking.objects.select_related("apartment").all()
    lookup_value_regex = r"\d+"
    serializer_class = BookingSerializer
    permission_classes = [IsAdmin]
    pagination_class = BookingPagination
    filterset_class = BookingFilter
    http_method_names = ["get", "patch", "delete", "head", "options"]

    def list(self, request, *args, **kwargs):  # type: ignore
        queryset = self.filter_queryset(self.get_queryset())
        if request.query_params.get("limit") == "all":
            data = self.get_serializer(queryset, many=True).data
            return Response(
                {
                    "bookings": data,
                    "totalCount": len(data),
                    "currentPage": 1,
                    "totalPages": 1,
                }
            )
        return super().list(request, *args, **kwargs)

    def partial_update(self, request, pk=None):  # type: ignore
        serializer = BookingStatusSerializer(data=request.data)
        if not serializer.is_valid():
            raise ValidationError("Invalid status", details=serializer.errors)
        booking = services.update_booking_status(pk, serializer.validated_data["status"], actor=request.user)
        return Response(BookingSerializer(booking).data)

    def destroy(self, request, pk=None):  # type: ignore
        services.delete_booking(pk, actor=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)


class BlockedDateViewSet(
    mixins.ListModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """Manual blocking of single days; entries are created and removed, never edited."""

    queryset = BlockedDate.objects.all()
    lookup_value_regex = r"\d+"
    serializer_class = BlockedDateSerializer
    permission_classes = [IsAdmin]
    filterset_class = BlockedDateFilter

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BlockedDateWriteSerializer
        return BlockedDateSerializer

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        blocked = services.block_date(
            serializer.validated_data["date"],
            apartment_id=serializer.validated_data["apartment"],
            reason=serializer.validated_data["reason"],
            actor=request.user,
        )
        return Response(BlockedDateSerializer(blocked).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, pk=None):  # type: ignore
        services.unblock_date(pk, actor=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)
