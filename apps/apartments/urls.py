"""URL routing for the apartment catalog."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import ApartmentViewSet

router = DefaultRouter()
router.register(r"", ApartmentViewSet, basename="apartment")

urlpatterns = [
    path("", include(router.urls)),
]
