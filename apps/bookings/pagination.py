from django.conf import settings  # type: ignore
from rest_framework.pagination import PageNumberPagination  # type: ignore
from rest_framework.response import Response  # type: ignore


class BookingPagination(PageNumberPagination):
    """Page-number pagination in the shape the back-office client expects."""

    page_size = settings.ADMIN_BOOKINGS_PAGE_SIZE
    page_size_query_param = "limit"
    max_page_size = 500

    def get_paginated_response(self, data):  # type: ignore
        return Response(
            {
                "bookings": data,
                "totalCount": self.page.paginator.count,
                "currentPage": self.page.number,
                "totalPages": self.page.paginator.num_pages,
            }
        )

    def get_paginated_response_schema(self, schema):  # type: ignore
        return {
            "type": "object",
            "properties": {
                "bookings": schema,
                "totalCount": {"type": "integer"},
                "currentPage": {"type": "integer"},
                "totalPages": {"type": "integer"},
            },
        }
