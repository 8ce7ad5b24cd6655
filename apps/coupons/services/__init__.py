"""
Coupon services module.
"""
from .discount_resolver import DiscountResolver, DiscountResult, LineAllocation
from .coupon_service import CouponService

__all__ = [
    'DiscountResolver',
    'DiscountResult',
    'LineAllocation',
    'CouponService',
]
