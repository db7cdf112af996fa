from django.urls import include, path  # type: ignore
from rest_framework.routers import SimpleRouter  # type: ignore

from .views import AdminBookingViewSet, BlockedDateViewSet

router = SimpleRouter()
router.register(r"bookings", AdminBookingViewSet, basename="admin-booking")
router.register(r"blocked-dates", BlockedDateViewSet, basename="blocked-date")

urlpatterns = [
    path("", include(router.urls)),
]
