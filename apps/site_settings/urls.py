from django.urls import path  # type: ignore

from .views import PublicSettingsView

urlpatterns = [
    path("", PublicSettingsView.as_view(), name="settings"),
]
