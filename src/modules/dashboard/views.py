"""Dashboard API views.

Every endpoint is a ``list``-style action on ``DashboardViewSet``; the
figures are recomputed from the store on each request.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.core.store import DjangoDocumentStore
from modules.core.views import ActorContextMixin
from modules.dashboard.aggregation import Granularity
from modules.dashboard.serializers import (
    DashboardSummarySerializer,
    LeaderboardEntrySerializer,
    RevenueBucketSerializer,
)
from modules.dashboard.services import DashboardService
from modules.orders.serializers import OrderListSerializer


class DashboardViewSet(ActorContextMixin, ViewSet):
    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = DashboardService(store=DjangoDocumentStore())

    @action(detail=False, methods=["get"])
    def summary(self, request: Request) -> Response:
        """GET /api/v1/dashboard/summary/"""
        return Response(DashboardSummarySerializer(self._service.summary()).data)

    @action(detail=False, methods=["get"])
    def revenue(self, request: Request) -> Response:
        """GET /api/v1/dashboard/revenue/?granularity=day|week|month

        Defaults to monthly buckets.
        """
        granularity = request.query_params.get("granularity", Granularity.MONTH.value)
        try:
            buckets = self._service.revenue(granularity)
        except ValueError:
            choices = ", ".join(g.value for g in Granularity)
            return Response(
                {"detail": f"granularity must be one of: {choices}."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        return Response(RevenueBucketSerializer(buckets, many=True).data)

    @action(detail=False, methods=["get"])
    def leaderboard(self, request: Request) -> Response:
        """GET /api/v1/dashboard/leaderboard/?limit=3"""
        raw_limit = request.query_params.get("limit")
        try:
            limit = int(raw_limit) if raw_limit is not None else None
            entries = self._service.leaderboard(limit)
        except ValueError:
            return Response(
                {"detail": "limit must be a non-negative integer."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        return Response(LeaderboardEntrySerializer(entries, many=True).data)

    @action(detail=False, methods=["get"], url_path="recent-orders")
    def recent_orders(self, request: Request) -> Response:
        """GET /api/v1/dashboard/recent-orders/"""
        summaries = self._service.recent_orders()
        return Response(OrderListSerializer(summaries, many=True).data)
