"""API views for site settings."""

from __future__ import annotations

from rest_framework.permissions import AllowAny  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.users.permissions import IsAdmin

from . import services
from .models import SiteSetting
from .serializers import SettingsField


class PublicSettingsView(APIView):
    permission_classes = [AllowAny]

    def get(self, request):  # type: ignore
        return Response(SiteSetting.as_dict())


class AdminSettingsView(APIView):
    """Read and upsert every setting from the back office."""

    permission_classes = [IsAdmin]

    def get(self, request):  # type: ignore
        return Response(SiteSetting.as_dict())

    def put(self, request):  # type: ignore
        values = SettingsField().run_validation(request.data)
        return Response(services.update_settings(values, actor=request.user))
