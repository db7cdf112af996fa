"""
Unit of Work Pattern

Wraps a database transaction around a domain operation so that its
reads and writes commit together or not at all, and so that storage
failures surface as ``StorageError`` instead of driver exceptions.
"""

import logging
from typing import Callable

from django.db import DatabaseError, transaction
from django.db.utils import NotSupportedError

from shared.domain.exceptions import StorageError

logger = logging.getLogger(__name__)


class DjangoUnitOfWork:
    """
    Django implementation of Unit of Work

    Usage:
        with DjangoUnitOfWork(failure_message="Failed to create booking") as uow:
            apartment = uow.lock(Apartment.objects.filter(pk=apartment_id)).first()
            ...
            booking = Booking.objects.create(...)
            uow.on_commit(lambda: logger.info("created %s", booking.pk))
        # Transaction has committed here

    Any ``DatabaseError`` raised inside the block, or by the commit itself,
    rolls the transaction back and is re-raised as ``StorageError``.
    """

    def __init__(self, failure_message: str | None = None, using: str | None = None):
        self.failure_message = failure_message
        self.using = using
        self._transaction = None

    def __enter__(self):
        """Start database transaction"""
        self._transaction = transaction.atomic(using=self.using)
        try:
            self._transaction.__enter__()
        except DatabaseError as exc:
            logger.error("Could not open transaction", exc_info=True)
            raise StorageError(self.failure_message) from exc
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Complete or rollback transaction"""
        try:
            self._transaction.__exit__(exc_type, exc_val, exc_tb)
        except DatabaseError as exc:
            logger.error("Transaction commit failed, changes discarded", exc_info=True)
            raise StorageError(self.failure_message) from exc
        finally:
            self._transaction = None

        if exc_type is not None and issubclass(exc_type, DatabaseError):
            logger.error(
                "Rolled back transaction after storage failure",
                exc_info=(exc_type, exc_val, exc_tb),
            )
            raise StorageError(self.failure_message) from exc_val
        return False

    def lock(self, queryset):
        """Apply select_for_update where the backend supports row locks."""

        try:
            return queryset.select_for_update()
        except NotSupportedError:
            return queryset

    def on_commit(self, func: Callable[[], None]) -> None:
        """Run ``func`` only once the surrounding transaction has committed."""

        transaction.on_commit(func, using=self.using)
