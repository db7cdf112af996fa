from decimal import Decimal

import pytest
from django.db import DatabaseError

from apps.apartments.models import Apartment
from shared.api import exception_handler
from shared.application.uow import DjangoUnitOfWork
from shared.domain.exceptions import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    StorageError,
    ValidationError,
)


def _apartment(name="Harbour Loft"):
    return Apartment.objects.create(
        name=name,
        location="Old Town",
        price_per_night=Decimal("100.00"),
        max_guests=2,
    )


@pytest.mark.django_db
def test_commits_on_success():
    with DjangoUnitOfWork() as uow:
        apartment = uow.lock(Apartment.objects.filter(pk=_apartment().pk)).first()

    assert apartment is not None
    assert Apartment.objects.count() == 1


@pytest.mark.django_db
def test_domain_errors_roll_back_and_propagate():
    with pytest.raises(NotFoundError):
        with DjangoUnitOfWork():
            _apartment()
            raise NotFoundError("Invalid apartment")

    assert not Apartment.objects.exists()


@pytest.mark.django_db
def test_database_errors_become_storage_errors():
    with pytest.raises(StorageError) as excinfo:
        with DjangoUnitOfWork(failure_message="Failed to create booking"):
            _apartment()
            raise DatabaseError("database is locked")

    assert excinfo.value.message == "Failed to create booking"
    assert isinstance(excinfo.value.__cause__, DatabaseError)
    assert not Apartment.objects.exists()


@pytest.mark.parametrize(
    "error, status_code, body",
    [
        (ValidationError(), 400, {"error": "All required fields must be filled"}),
        (NotFoundError("Invalid apartment"), 404, {"error": "Invalid apartment"}),
        (ConflictError(), 400, {"error": "Selected dates are not available"}),
        (PermissionDeniedError(), 403, {"error": "Authentication required"}),
        (StorageError("Failed to fetch availability"), 500, {"error": "Failed to fetch availability"}),
        (
            ValidationError("Invalid booking details", details={"checkIn": ["Bad date"]}),
            400,
            {"error": "Invalid booking details", "details": {"checkIn": ["Bad date"]}},
        ),
    ],
)
def test_exception_handler_renders_domain_errors(error, status_code, body):
    response = exception_handler(error, {})

    assert response.status_code == status_code
    assert response.data == body


def test_exception_handler_leaves_other_errors_alone():
    assert exception_handler(RuntimeError("boom"), {}) is None


def test_str_of_error_is_its_message():
    assert str(ConflictError()) == "Selected dates are not available"
