from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils import timezone


class Coupon(models.Model):
    """Cart-level discount code"""
    TYPE_PERCENTAGE = 'percentage'
    TYPE_FIXED = 'fixed'
    DISCOUNT_TYPE_CHOICES = [
        (TYPE_PERCENTAGE, 'Percentage'),
        (TYPE_FIXED, 'Fixed Amount'),
    ]

    STATUS_ACTIVE = 'active'
    STATUS_INACTIVE = 'inactive'
    STATUS_CHOICES = [
        (STATUS_ACTIVE, 'Active'),
        (STATUS_INACTIVE, 'Inactive'),
    ]

    code = models.CharField(max_length=50, unique=True, help_text="Stored upper-cased")
    description = models.CharField(max_length=255, blank=True, default='')
    discount_type = models.CharField(max_length=20, choices=DISCOUNT_TYPE_CHOICES)
    discount_value = models.DecimalField(max_digits=10, decimal_places=2)
    min_purchase_amount = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    usage_limit = models.PositiveIntegerField(null=True, blank=True, help_text="Empty means unlimited")
    times_used = models.PositiveIntegerField(default=0)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_ACTIVE)
    expires_at = models.DateTimeField(null=True, blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='coupons'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'coupons'
        ordering = ['-created_at']

    def __str__(self):
        return self.code

    def save(self, *args, **kwargs):
        self.code = self.normalize_code(self.code)
        super().save(*args, **kwargs)

    @staticmethod
    def normalize_code(code):
        """Upper-case a code; anything that is not a non-empty string becomes None"""
        if not isinstance(code, str) or not code.strip():
            return None
        return code.strip().upper()

    @property
    def is_exhausted(self):
        return self.usage_limit is not None and self.times_used >= self.usage_limit

    def rejection_reason(self, cart_total, now=None):
        """Why this coupon cannot apply to ``cart_total``, or None when it can"""
        now = now or timezone.now()
        if self.status != self.STATUS_ACTIVE:
            return 'inactive'
        if self.expires_at and self.expires_at < now:
            return 'expired'
        if self.is_exhausted:
            return 'usage_limit_reached'
        if cart_total < self.min_purchase_amount:
            return 'min_purchase_not_met'
        return None

    def discount_for(self, cart_total):
        """Raw discount for ``cart_total`` clamped to the total"""
        if self.discount_type == self.TYPE_PERCENTAGE:
            discount = cart_total * self.discount_value / Decimal('100')
        else:
            discount = self.discount_value
        return min(discount, cart_total)
