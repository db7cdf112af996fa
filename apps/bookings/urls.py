from django.urls import include, path  # type: ignore
from rest_framework.routers import SimpleRouter  # type: ignore

from .views import AvailabilityView, BookingViewSet

router = SimpleRouter()
router.register(r"", BookingViewSet, basename="booking")

# Availability paths come first so "availability" is never read as a booking id.
urlpatterns = [
    path("availability/", AvailabilityView.as_view(), name="availability"),
    path("availability/<int:apartment_id>/", AvailabilityView.as_view(), name="apartment-availability"),
    path("", include(router.urls)),
]
