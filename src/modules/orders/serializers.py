"""Order DRF serializers for API output.

The serializers render the immutable Pydantic views produced by the
Service Layer (``OrderView`` / ``OrderSummary``); they never touch the
store.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.constants import DeliveryStatus

# ---------------------------------------------------------------------------
# Nested parts
# ---------------------------------------------------------------------------


class LineItemSerializer(serializers.Serializer):
    product_ref = serializers.CharField(allow_null=True)
    product_name = serializers.CharField()
    quantity = serializers.IntegerField()
    unit_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    line_subtotal = serializers.DecimalField(max_digits=12, decimal_places=2)


class DeliveryPersonSerializer(serializers.Serializer):
    id = serializers.CharField(allow_null=True)
    name = serializers.CharField()
    photo_url = serializers.CharField()
    phone_number = serializers.CharField(allow_null=True)


class AddressSerializer(serializers.Serializer):
    text = serializers.CharField()
    title = serializers.CharField()
    latitude = serializers.FloatField(allow_null=True)
    longitude = serializers.FloatField(allow_null=True)


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class OrderSerializer(serializers.Serializer):
    """Read serializer for the order detail page."""

    id = serializers.CharField()
    customer_id = serializers.CharField(allow_null=True)
    customer_name = serializers.CharField()
    delivery_person = DeliveryPersonSerializer(allow_null=True)
    address = AddressSerializer()
    items = LineItemSerializer(many=True)
    total_item_count = serializers.IntegerField()
    total_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    items_total = serializers.DecimalField(max_digits=12, decimal_places=2)
    amount_discrepancy = serializers.DecimalField(max_digits=12, decimal_places=2)
    placed_at = serializers.DateTimeField(allow_null=True)
    shipping_started_at = serializers.DateTimeField(allow_null=True)
    finished_at = serializers.DateTimeField(allow_null=True)
    status = serializers.ChoiceField(choices=DeliveryStatus.choices)
    delivery_duration = serializers.SerializerMethodField()

    def get_delivery_duration(self, view) -> str | None:
        duration = view.delivery_duration
        return str(duration) if duration is not None else None


class OrderListSerializer(serializers.Serializer):
    """Lightweight serializer for order lists (no nested relations)."""

    id = serializers.CharField()
    customer_name = serializers.CharField()
    address = serializers.CharField()
    placed_at = serializers.DateTimeField(allow_null=True)
    status = serializers.ChoiceField(choices=DeliveryStatus.choices)
    total_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    total_item_count = serializers.IntegerField()
