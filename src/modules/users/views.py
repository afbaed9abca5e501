"""User API views."""

from __future__ import annotations

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.core.pagination import StandardResultsSetPagination
from modules.core.store import DjangoDocumentStore
from modules.core.views import ActorContextMixin
from modules.users.constants import AVAILABILITY_FILTER_VALUES
from modules.users.serializers import (
    CustomerSpendingSerializer,
    DeliveryPersonSerializer,
)
from modules.users.services import UserService


class CustomerViewSet(ActorContextMixin, ViewSet):
    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = UserService(store=DjangoDocumentStore())

    def list(self, request: Request) -> Response:
        """GET /api/v1/customers/"""
        customers = self._service.customers_with_spending()
        paginator = StandardResultsSetPagination()
        page = paginator.paginate_queryset(customers, request, view=self)
        serializer = CustomerSpendingSerializer(page, many=True)
        return paginator.get_paginated_response(serializer.data)


class DeliveryPersonViewSet(ActorContextMixin, ViewSet):
    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = UserService(store=DjangoDocumentStore())

    def list(self, request: Request) -> Response:
        """GET /api/v1/delivery-people/?q=&availability=available|busy"""
        raw = request.query_params.get("availability", "").strip().lower()
        if raw and raw not in AVAILABILITY_FILTER_VALUES:
            return Response(
                {"detail": "availability must be 'available' or 'busy'."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        people = self._service.delivery_people(
            query=request.query_params.get("q"),
            availability=AVAILABILITY_FILTER_VALUES.get(raw),
        )
        paginator = StandardResultsSetPagination()
        page = paginator.paginate_queryset(people, request, view=self)
        serializer = DeliveryPersonSerializer(page, many=True)
        return paginator.get_paginated_response(serializer.data)
