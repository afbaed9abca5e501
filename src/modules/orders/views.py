"""Order API views.

Exposes the ``OrderQueryService`` via HTTP using a DRF ViewSet.
Domain exceptions are caught and translated into HTTP status codes.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.core.pagination import StandardResultsSetPagination
from modules.core.store import DjangoDocumentStore
from modules.core.views import ActorContextMixin
from modules.orders.exceptions import OrderNotFound
from modules.orders.serializers import OrderListSerializer, OrderSerializer
from modules.orders.services import OrderQueryService


class OrderViewSet(ActorContextMixin, ViewSet):
    """Read-only order endpoints.

    Orders are created and mutated by the mobile apps; the dashboard only
    reads them, so there is no create / update action here.
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderQueryService(store=DjangoDocumentStore())

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/

        Summaries ordered by placement time, newest first, paginated.
        """
        summaries = self._service.list_orders()

        paginator = StandardResultsSetPagination()
        page = paginator.paginate_queryset(summaries, request, view=self)
        serializer = OrderListSerializer(page, many=True)
        return paginator.get_paginated_response(serializer.data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        if pk is None:
            return Response(
                {"detail": "Order not found."},
                status=status.HTTP_404_NOT_FOUND,
            )
        try:
            view = self._service.get_order(pk)
        except OrderNotFound:
            return Response(
                {"detail": "Order not found."},
                status=status.HTTP_404_NOT_FOUND,
            )
        return Response(OrderSerializer(view).data)
