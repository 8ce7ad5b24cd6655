"""
Coupon lookups and usage accounting.
"""
import logging

from django.db import transaction
from django.db.models import F

from ..models import Coupon
from .discount_resolver import DiscountResolver

logger = logging.getLogger(__name__)


class CouponService:
    """Coupon persistence used around the discount resolver"""

    @staticmethod
    def get_for_checkout(code):
        """Lock the coupon row for this checkout; unknown or malformed codes give None"""
        code = Coupon.normalize_code(code)
        if code is None:
            return None
        return Coupon.objects.select_for_update().filter(code=code).first()

    @staticmethod
    def record_usage(coupon):
        """Count one successful checkout against the coupon"""
        if not transaction.get_connection().in_atomic_block:
            raise transaction.TransactionManagementError("Coupon usage must be recorded inside transaction.atomic")
        Coupon.objects.filter(pk=coupon.pk).update(times_used=F('times_used') + 1)
        coupon.times_used += 1
        logger.info(f"Coupon {coupon.code} used ({coupon.times_used}/{coupon.usage_limit or 'unlimited'})")

    @staticmethod
    def preview(code, cart_total):
        """Check a code against a cart total without using it"""
        normalized = Coupon.normalize_code(code)
        coupon = Coupon.objects.filter(code=normalized).first() if normalized else None
        if coupon is None:
            return None, None, 'not_found'

        discount, reason = DiscountResolver.coupon_discount(coupon, cart_total)
        return coupon, discount, reason
