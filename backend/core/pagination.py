"""
Pagination for list endpoints.

Clients page with ``?page=<n>&limit=<size>`` and get back:

    {
        "results": [...],
        "pagination": {"page": 1, "limit": 20, "total": 57, "pages": 3}
    }
"""

import math

from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class StandardPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'limit'
    max_page_size = 100

    def get_paginated_response(self, data, **extra):
        total = self.page.paginator.count
        limit = self.page.paginator.per_page
        body = {
            'results': data,
            'pagination': {
                'page': self.page.number,
                'limit': limit,
                'total': total,
                'pages': math.ceil(total / limit) if limit else 0,
            },
        }
        body.update(extra)
        return Response(body)


class SmallPagination(StandardPagination):
    """Salesman order history defaults to ten rows a page."""
    page_size = 10
