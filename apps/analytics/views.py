"""API views for analytics.

Provides the back-office dashboard: booking counts, revenue from
completed stays and the occupancy of the current month.
"""

from __future__ import annotations

import logging

from django.db import DatabaseError  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.users.permissions import IsAdmin
from shared.domain.exceptions import StorageError

from .services import dashboard_stats

logger = logging.getLogger(__name__)


class DashboardView(APIView):
    """Return headline statistics for the back office."""

    permission_classes = [IsAdmin]

    def get(self, request, format=None):  # type: ignore
        try:
            stats = dashboard_stats()
        except DatabaseError as exc:
            logger.error("Dashboard statistics query failed", exc_info=True)
            raise StorageError("Failed to fetch dashboard statistics") from exc
        return Response(stats.as_dict())
