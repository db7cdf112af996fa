"""Admin capability checks.

``IsAdmin`` guards back-office API views. ``ensure_admin`` is the same
check expressed for service functions, which receive the acting user
explicitly instead of inspecting the request.
"""

from __future__ import annotations

from rest_framework import permissions  # type: ignore

from shared.domain.exceptions import PermissionDeniedError


def is_admin(user) -> bool:
    if user is None or not getattr(user, "is_authenticated", False):
        return False
    return bool(getattr(user, "is_staff", False) or getattr(user, "is_superuser", False))


def ensure_admin(actor) -> None:
    """Raise ``PermissionDeniedError`` unless ``actor`` may use the back office."""
    if not is_admin(actor):
        raise PermissionDeniedError()


class IsAdmin(permissions.BasePermission):
    """Only staff users may access the back office."""

    message = "Authentication required"

    def has_permission(self, request, view) -> bool:  # type: ignore
        return is_admin(request.user)


class IsAdminOrReadOnly(permissions.BasePermission):
    """Anyone can read, only staff users can write."""

    message = "Authentication required"

    def has_permission(self, request, view) -> bool:  # type: ignore
        if request.method in permissions.SAFE_METHODS:
            return True
        return is_admin(request.user)
