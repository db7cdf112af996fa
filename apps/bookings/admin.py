"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import BlockedDate, Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "apartment",
        "guest_name",
        "status",
        "check_in",
        "check_out",
        "num_guests",
        "total_amount",
        "created_at",
    )
    list_filter = ("status", "apartment", "check_in")
    search_fields = ("guest_name", "guest_email", "guest_phone")
    readonly_fields = (
        "apartment",
        "check_in",
        "check_out",
        "num_guests",
        "total_amount",
        "created_at",
    )

    # Bookings are only created through the admission service.
    def has_add_permission(self, request):  # type: ignore
        return False


@admin.register(BlockedDate)
class BlockedDateAdmin(admin.ModelAdmin):
    list_display = ("date", "apartment", "reason", "created_at")
    list_filter = ("apartment",)
    date_hierarchy = "date"
