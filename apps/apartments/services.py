"""Catalog services for apartment photo management."""

from __future__ import annotations

import logging

from django.db import transaction  # type: ignore

from apps.users.permissions import ensure_admin
from shared.domain.exceptions import NotFoundError

from .models import Apartment, ApartmentPhoto

logger = logging.getLogger(__name__)


def _get_photo(apartment: Apartment, photo_id) -> ApartmentPhoto:
    try:
        return apartment.photos.get(pk=photo_id)
    except (ApartmentPhoto.DoesNotExist, ValueError):
        raise NotFoundError("Photo not found")


@transaction.atomic
def add_photo(apartment: Apartment, url: str, *, is_primary: bool = False, actor) -> ApartmentPhoto:
    """Attach a photo; flagging it primary un-flags the previous primary."""

    ensure_admin(actor)
    if is_primary:
        apartment.photos.filter(is_primary=True).update(is_primary=False)
    photo = ApartmentPhoto.objects.create(apartment=apartment, url=url, is_primary=is_primary)
    logger.info("Photo %s added to apartment %s (primary=%s)", photo.pk, apartment.pk, is_primary)
    return photo


@transaction.atomic
def set_primary_photo(apartment: Apartment, photo_id, *, actor) -> ApartmentPhoto:
    ensure_admin(actor)
    photo = _get_photo(apartment, photo_id)
    apartment.photos.filter(is_primary=True).exclude(pk=photo.pk).update(is_primary=False)
    if not photo.is_primary:
        photo.is_primary = True
        photo.save(update_fields=["is_primary"])
    logger.info("Photo %s is now primary for apartment %s", photo.pk, apartment.pk)
    return photo


def remove_photo(apartment: Apartment, photo_id, *, actor) -> None:
    ensure_admin(actor)
    photo = _get_photo(apartment, photo_id)
    photo.delete()
    logger.info("Photo %s removed from apartment %s", photo_id, apartment.pk)
