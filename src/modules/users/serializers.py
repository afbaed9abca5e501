"""User DRF serializers (output only)."""

from __future__ import annotations

from rest_framework import serializers

from modules.users.constants import Availability


class CustomerSpendingSerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField()
    email = serializers.CharField(allow_null=True)
    phone_number = serializers.CharField(allow_null=True)
    photo_url = serializers.CharField(allow_null=True)
    order_count = serializers.IntegerField()
    total_spent = serializers.DecimalField(max_digits=None, decimal_places=2)


class DeliveryPersonSerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField(source="full_name")
    email = serializers.CharField(allow_null=True)
    phone_number = serializers.CharField(allow_null=True)
    photo_url = serializers.CharField(allow_null=True)
    shipping_score = serializers.FloatField(allow_null=True)
    availability = serializers.ChoiceField(choices=Availability.choices)
    addresses = serializers.ListField(child=serializers.CharField())
