"""URL routing for analytics endpoints."""

from django.urls import path  # type: ignore

from .views import DashboardView


urlpatterns = [
    # Mounted under the admin API prefix in config.urls
    path('dashboard/', DashboardView.as_view(), name='admin-dashboard'),
]
