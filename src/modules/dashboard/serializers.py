"""Dashboard DRF serializers (output only)."""

from __future__ import annotations

from rest_framework import serializers


class DashboardSummarySerializer(serializers.Serializer):
    total_sales = serializers.DecimalField(max_digits=14, decimal_places=2)
    order_count = serializers.IntegerField()
    user_count = serializers.IntegerField()
    delivery_person_count = serializers.IntegerField()


class RevenueBucketSerializer(serializers.Serializer):
    key = serializers.CharField()
    label = serializers.CharField()
    start = serializers.DateTimeField()
    total = serializers.DecimalField(max_digits=14, decimal_places=2)


class LeaderboardEntrySerializer(serializers.Serializer):
    rank = serializers.IntegerField()
    id = serializers.CharField()
    name = serializers.CharField()
    photo_url = serializers.CharField(allow_null=True)
    shipping_score = serializers.FloatField()
