"""Apartment catalog API views."""

from __future__ import annotations

import logging

from rest_framework import status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.permissions import IsAdmin, IsAdminOrReadOnly

from . import services
from .models import Apartment
from .serializers import (
    ApartmentPhotoSerializer,
    ApartmentPhotoWriteSerializer,
    ApartmentSerializer,
    ApartmentWriteSerializer,
)

logger = logging.getLogger(__name__)


class ApartmentViewSet(viewsets.ModelViewSet):
    """Public listing and detail; admin create, update, delete and photo management."""

    queryset = Apartment.objects.prefetch_related("photos").all()
    permission_classes = [IsAdminOrReadOnly]

    def get_serializer_class(self):  # type: ignore
        if self.action in {"create", "update", "partial_update"}:
            return ApartmentWriteSerializer
        if self.action == "photos":
            return ApartmentPhotoWriteSerializer
        return ApartmentSerializer

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        apartment = serializer.save()
        logger.info("Apartment %s created by %s", apartment.pk, request.user.get_username())
        read_serializer = ApartmentSerializer(apartment, context=self.get_serializer_context())
        headers = self.get_success_headers(read_serializer.data)
        return Response(read_serializer.data, status=status.HTTP_201_CREATED, headers=headers)

    def update(self, request, *args, **kwargs):  # type: ignore
        partial = kwargs.pop("partial", False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        apartment = serializer.save()
        logger.info("Apartment %s updated by %s", apartment.pk, request.user.get_username())
        read_serializer = ApartmentSerializer(apartment, context=self.get_serializer_context())
        return Response(read_serializer.data, status=status.HTTP_200_OK)

    def perform_destroy(self, instance: Apartment):  # type: ignore
        apartment_id = instance.pk
        instance.delete()
        logger.info("Apartment %s deleted by %s", apartment_id, self.request.user.get_username())

    @action(detail=True, methods=["post"], permission_classes=[IsAdmin])
    def photos(self, request, pk=None):  # type: ignore
        apartment = self.get_object()
        serializer = ApartmentPhotoWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        photo = services.add_photo(
            apartment,
            serializer.validated_data["url"],
            is_primary=serializer.validated_data["is_primary"],
            actor=request.user,
        )
        return Response(ApartmentPhotoSerializer(photo).data, status=status.HTTP_201_CREATED)

    @action(
        detail=True,
        methods=["delete"],
        url_path=r"photos/(?P<photo_id>\d+)",
        url_name="photo-detail",
        permission_classes=[IsAdmin],
    )
    def remove_photo(self, request, pk=None, photo_id=None):  # type: ignore
        apartment = self.get_object()
        services.remove_photo(apartment, photo_id, actor=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(
        detail=True,
        methods=["post"],
        url_path=r"photos/(?P<photo_id>\d+)/primary",
        url_name="photo-primary",
        permission_classes=[IsAdmin],
    )
    def set_primary_photo(self, request, pk=None, photo_id=None):  # type: ignore
        apartment = self.get_object()
        photo = services.set_primary_photo(apartment, photo_id, actor=request.user)
        return Response(ApartmentPhotoSerializer(photo).data, status=status.HTTP_200_OK)
