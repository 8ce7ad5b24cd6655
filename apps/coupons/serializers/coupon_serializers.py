"""
Coupon serializers.
"""
from decimal import Decimal

from rest_framework import serializers

from ..models import Coupon


class CouponSerializer(serializers.ModelSerializer):
    class Meta:
        model = Coupon
        fields = [
            'id', 'code', 'description', 'discount_type', 'discount_value',
            'min_purchase_amount', 'usage_limit', 'times_used', 'status', 'expires_at'
        ]
        read_only_fields = fields


class CouponValidateSerializer(serializers.Serializer):
    """Input for previewing a coupon against a cart total"""
    code = serializers.CharField(max_length=50)
    cart_total = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0'))
