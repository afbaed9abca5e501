"""Catalog API views."""

from __future__ import annotations

from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.catalog.serializers import CategoryOptionSerializer
from modules.catalog.services import CatalogService
from modules.core.store import DjangoDocumentStore
from modules.core.views import ActorContextMixin


class CatalogViewSet(ActorContextMixin, ViewSet):
    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = CatalogService(store=DjangoDocumentStore())

    @action(detail=False, methods=["get"])
    def categories(self, request: Request) -> Response:
        """GET /api/v1/catalog/categories/?q="""
        options = self._service.category_options(request.query_params.get("q"))
        return Response(CategoryOptionSerializer(options, many=True).data)
