from rest_framework.pagination import PageNumberPagination


class StandardResultsSetPagination(PageNumberPagination):
    """Page-number pagination over in-memory lists of view models."""

    page_size_query_param = "page_size"
    max_page_size = 100
