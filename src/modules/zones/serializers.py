"""Zone DRF serializers (output only)."""

from __future__ import annotations

from rest_framework import serializers


class GeoPointSerializer(serializers.Serializer):
    latitude = serializers.FloatField()
    longitude = serializers.FloatField()


class ZoneSerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField(allow_null=True)
    zip_code = serializers.CharField(allow_null=True)
    minimum_order_amount = serializers.DecimalField(
        max_digits=12, decimal_places=2, allow_null=True
    )
    is_open = serializers.BooleanField(allow_null=True)
    location = GeoPointSerializer(allow_null=True)
    area = GeoPointSerializer(many=True)
