from .coupon_serializers import CouponSerializer, CouponValidateSerializer

__all__ = [
    'CouponSerializer',
    'CouponValidateSerializer',
]
