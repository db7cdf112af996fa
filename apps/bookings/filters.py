import django_filters  # type: ignore

from .models import BlockedDate, Booking


class BookingFilter(django_filters.FilterSet):
    # "all" (or no value) disables the status filter.
    status = django_filters.CharFilter(method="filter_status")

    class Meta:
        model = Booking
        fields = {
            "apartment": ["exact"],
        }

    def filter_status(self, queryset, name, value):
        if not value or value == "all":
            return queryset
        return queryset.filter(status=value)


class BlockedDateFilter(django_filters.FilterSet):
    class Meta:
        model = BlockedDate
        fields = {
            "apartment": ["exact"],
            "date": ["gte", "lte"],
        }
