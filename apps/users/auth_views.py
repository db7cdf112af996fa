"""Views for admin authentication (login, token refresh, session check)."""

from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken  # type: ignore

from .auth_serializers import LoginSerializer
from .permissions import is_admin

logger = logging.getLogger(__name__)


def _tokens_for_user(user) -> dict[str, str]:
    refresh = RefreshToken.for_user(user)
    return {"refresh": str(refresh), "access": str(refresh.access_token)}


class LoginView(APIView):
    permission_classes = [AllowAny]
    authentication_classes: list = []

    def post(self, request):  # type: ignore
        serializer = LoginSerializer(data=request.data, context={"request": request})
        if not serializer.is_valid():
            return Response({"error": "Invalid credentials"}, status=status.HTTP_401_UNAUTHORIZED)
        user = serializer.validated_data["user"]
        logger.info("Admin %s logged in", user.get_username())
        data = {
            "success": True,
            "username": user.get_username(),
            "tokens": _tokens_for_user(user),
        }
        return Response(data, status=status.HTTP_200_OK)


class AuthCheckView(APIView):
    permission_classes = [AllowAny]

    def get(self, request):  # type: ignore
        if is_admin(request.user):
            return Response({"authenticated": True, "username": request.user.get_username()})
        return Response({"authenticated": False})
