"""Promotion DRF serializers (output only).

Input is validated by the Pydantic DTOs in ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers


class PromotionSerializer(serializers.Serializer):
    id = serializers.CharField()
    code = serializers.CharField(allow_null=True)
    title = serializers.CharField(allow_null=True)
    description = serializers.CharField(allow_null=True)
    date_start = serializers.DateTimeField(allow_null=True)
    date_end = serializers.DateTimeField(allow_null=True)
    percentage = serializers.FloatField(allow_null=True)
    max_number = serializers.IntegerField(allow_null=True)
    image = serializers.CharField(allow_null=True)
    creation_date = serializers.DateTimeField(allow_null=True)
    created_by = serializers.CharField(allow_null=True)
