"""Catalog DRF serializers (output only)."""

from __future__ import annotations

from rest_framework import serializers


class TypeOptionSerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField()


class CategoryOptionSerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField()
    image = serializers.CharField(allow_null=True)
    types = TypeOptionSerializer(many=True)
