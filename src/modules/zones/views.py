"""Zone API views."""

from __future__ import annotations

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.core.pagination import StandardResultsSetPagination
from modules.core.store import DjangoDocumentStore
from modules.core.views import ActorContextMixin
from modules.zones.serializers import ZoneSerializer
from modules.zones.services import ZoneService

OPEN_FILTER_VALUES = {"true": True, "false": False}


class ZoneViewSet(ActorContextMixin, ViewSet):
    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ZoneService(store=DjangoDocumentStore())

    def list(self, request: Request) -> Response:
        """GET /api/v1/zones/?q=&is_open=true|false"""
        raw_open = request.query_params.get("is_open", "").strip().lower()
        if raw_open and raw_open not in OPEN_FILTER_VALUES:
            return Response(
                {"detail": "is_open must be 'true' or 'false'."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        zones = self._service.list_zones(
            query=request.query_params.get("q"),
            is_open=OPEN_FILTER_VALUES.get(raw_open),
        )
        paginator = StandardResultsSetPagination()
        page = paginator.paginate_queryset(zones, request, view=self)
        serializer = ZoneSerializer(page, many=True)
        return paginator.get_paginated_response(serializer.data)
