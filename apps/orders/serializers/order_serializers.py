"""
Order read serializers.
"""
from rest_framework import serializers
from ..models import Order, OrderLine


class OrderLineSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source='product.name', read_only=True)

    class Meta:
        model = OrderLine
        fields = [
            'id', 'product', 'product_name', 'quantity', 'unit_price', 'line_total',
            'discount_amount', 'reward_points_used', 'reward_discount_amount'
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    lines = OrderLineSerializer(many=True, read_only=True)
    coupon_code = serializers.CharField(source='coupon.code', read_only=True, default=None)

    class Meta:
        model = Order
        fields = [
            'id', 'order_code', 'user', 'status', 'payment_method', 'cart_total',
            'coupon_code', 'discount_amount', 'reward_points_used', 'reward_discount_amount',
            'reward_points_earned', 'total_amount', 'cancel_reason', 'cancel_remarks',
            'created_at', 'updated_at', 'lines'
        ]
        read_only_fields = fields
