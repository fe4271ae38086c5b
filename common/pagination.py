"""
Pagination utilities for the project.

Defines the default page number pagination class used across DRF
endpoints.  Clients pick a page size with ``per_page``; the default and
ceiling are controlled centrally here rather than in each viewset.
"""
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class DefaultPagination(PageNumberPagination):
    """Page number paginator that also reports page bookkeeping."""
    page_size = 10
    page_size_query_param = "per_page"
    max_page_size = 100

    def get_paginated_response(self, data):
        return Response({
            "count": self.page.paginator.count,
            "next": self.get_next_link(),
            "previous": self.get_previous_link(),
            "current_page": self.page.number,
            "per_page": self.get_page_size(self.request),
            "last_page": self.page.paginator.num_pages,
            "results": data,
        })
