"""Apartment catalog models."""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Apartment(models.Model):
    """An apartment offered for nightly rental."""

    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    location = models.CharField(max_length=255)
    price_per_night = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    max_guests = models.PositiveSmallIntegerField(validators=[MinValueValidator(1)])
    amenities = models.JSONField(
        default=list,
        blank=True,
        help_text=_("Ordered list of amenity labels."),
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Apartment")
        verbose_name_plural = _("Apartments")
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price_per_night__gt=0),
                name="apartment_positive_price",
            ),
            models.CheckConstraint(
                condition=models.Q(max_guests__gte=1),
                name="apartment_positive_capacity",
            ),
        ]

    def __str__(self) -> str:
        return self.name

    @property
    def primary_photo(self) -> "ApartmentPhoto | None":
        """The flagged primary photo, else the first photo, else None."""
        photos = list(self.photos.all())
        for photo in photos:
            if photo.is_primary:
                return photo
        return photos[0] if photos else None


class ApartmentPhoto(models.Model):
    """A photo in an apartment's gallery. At most one per apartment is primary."""

    apartment = models.ForeignKey(Apartment, on_delete=models.CASCADE, related_name="photos")
    url = models.CharField(max_length=500)
    is_primary = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Apartment photo")
        verbose_name_plural = _("Apartment photos")
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(
                fields=["apartment"],
                condition=models.Q(is_primary=True),
                name="apartment_single_primary_photo",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.apartment.name} [{self.pk}]"
