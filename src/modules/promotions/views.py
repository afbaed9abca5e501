"""Promotion API views.

Exposes ``PromotionService`` via HTTP.  The service prepares what to
write; the view persists it through the document store.  Domain
exceptions are translated into HTTP status codes.
"""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.core.constants import PROMOTIONS_COLLECTION
from modules.core.pagination import StandardResultsSetPagination
from modules.core.store import DjangoDocumentStore
from modules.core.views import ActorContextMixin
from modules.promotions.dtos import CreatePromotionDTO, UpdatePromotionDTO
from modules.promotions.exceptions import (
    CodeGenerationExhausted,
    InvalidValidityWindow,
    PromotionNotFound,
)
from modules.promotions.serializers import PromotionSerializer
from modules.promotions.services import PromotionService

EDITABLE_FIELDS = (
    "title",
    "description",
    "date_start",
    "date_end",
    "percentage",
    "max_number",
    "image",
)


class PromotionViewSet(ActorContextMixin, ViewSet):
    """Promotion listing, creation and edition."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._store = DjangoDocumentStore()
        self._service = PromotionService(store=self._store)

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/promotions/?q=&order=asc|desc"""
        try:
            promotions = self._service.search(
                query=request.query_params.get("q"),
                order=request.query_params.get("order", "desc"),
            )
        except ValueError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        paginator = StandardResultsSetPagination()
        page = paginator.paginate_queryset(promotions, request, view=self)
        serializer = PromotionSerializer(page, many=True)
        return paginator.get_paginated_response(serializer.data)

    @action(detail=False, methods=["get"])
    def active(self, request: Request) -> Response:
        """GET /api/v1/promotions/active/"""
        promotions = self._service.active()
        return Response(PromotionSerializer(promotions, many=True).data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/promotions/{pk}/"""
        try:
            promotion = self._service.get_promotion(pk)
        except PromotionNotFound:
            return Response(
                {"detail": "Promotion not found."},
                status=status.HTTP_404_NOT_FOUND,
            )
        return Response(PromotionSerializer(promotion).data)

    # ------------------------------------------------------------------
    # Create / Update
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/promotions/"""
        data = request.data
        try:
            dto = CreatePromotionDTO(
                **{field: data.get(field) for field in EDITABLE_FIELDS}
            )
        except PydanticValidationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            promotion = self._service.prepare_promotion(
                dto, actor_id=self.actor_id(request)
            )
        except InvalidValidityWindow as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except CodeGenerationExhausted as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_409_CONFLICT)

        promotion_id = self._store.save_document(
            PROMOTIONS_COLLECTION, promotion.to_document()
        )
        saved = self._service.get_promotion(promotion_id)
        return Response(PromotionSerializer(saved).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/promotions/{pk}/"""
        data = request.data
        try:
            dto = UpdatePromotionDTO(
                **{field: data[field] for field in EDITABLE_FIELDS if field in data}
            )
        except PydanticValidationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            document = self._service.prepare_update(pk, dto)
        except PromotionNotFound:
            return Response(
                {"detail": "Promotion not found."},
                status=status.HTTP_404_NOT_FOUND,
            )
        except InvalidValidityWindow as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        self._store.save_document(PROMOTIONS_COLLECTION, document, id=pk)
        return Response(PromotionSerializer(self._service.get_promotion(pk)).data)
