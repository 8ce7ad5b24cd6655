"""
Checkout and status change input serializers.
"""
from rest_framework import serializers
from ..models import Order


class CheckoutItemSerializer(serializers.Serializer):
    product_id = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(min_value=1)


class CheckoutSerializer(serializers.Serializer):
    """Cart submission; a paid gateway session replaces ``items``"""

    items = CheckoutItemSerializer(many=True, required=False)
    coupon_code = serializers.CharField(max_length=50, required=False, allow_blank=True, allow_null=True)
    reward_points_to_use = serializers.IntegerField(min_value=0, required=False, default=0)
    payment_reference = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    payment_method = serializers.ChoiceField(choices=Order.PAYMENT_METHOD_CHOICES, required=False,
                                             default=Order.PAYMENT_COD)

    def validate(self, attrs):
        if not attrs.get('payment_reference') and not attrs.get('items'):
            raise serializers.ValidationError({'items': 'No items in checkout'})
        return attrs


class OrderStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Order.STATUS_CHOICES)
    cancel_reason = serializers.CharField(max_length=200, required=False, allow_blank=True, allow_null=True)
    cancel_remarks = serializers.CharField(required=False, allow_blank=True, allow_null=True)
