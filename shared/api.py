"""
API adapters for the shared domain kernel.

``exception_handler`` is installed as DRF's ``EXCEPTION_HANDLER``: it
renders ``DomainError`` subclasses as ``{"error": message}`` with a status
code per error kind and defers everything else to DRF's default handler.
"""

from __future__ import annotations

from rest_framework import status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler as drf_exception_handler  # type: ignore

from shared.domain.exceptions import (
    ConflictError,
    DomainError,
    NotFoundError,
    PermissionDeniedError,
    StorageError,
    ValidationError,
)

STATUS_BY_ERROR: dict[type[DomainError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_400_BAD_REQUEST,
    PermissionDeniedError: status.HTTP_403_FORBIDDEN,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(error: DomainError) -> int:
    for error_class in type(error).__mro__:
        if error_class in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[error_class]
    return status.HTTP_400_BAD_REQUEST


def error_response(error: DomainError) -> Response:
    payload: dict = {"error": error.message}
    if error.details:
        payload["details"] = error.details
    return Response(payload, status=status_for(error))


def exception_handler(exc, context):  # type: ignore
    if isinstance(exc, DomainError):
        return error_response(exc)
    return drf_exception_handler(exc, context)
