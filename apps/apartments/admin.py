"""Admin registrations for the apartment catalog."""

from __future__ import annotations

from django.contrib import admin

from .models import Apartment, ApartmentPhoto


class ApartmentPhotoInline(admin.TabularInline):
    model = ApartmentPhoto
    extra = 0
    fields = ("url", "is_primary")


@admin.register(Apartment)
class ApartmentAdmin(admin.ModelAdmin):
    list_display = ("name", "location", "price_per_night", "max_guests", "created_at")
    search_fields = ("name", "location")
    inlines = (ApartmentPhotoInline,)
    readonly_fields = ("created_at", "updated_at")
