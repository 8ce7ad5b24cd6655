import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils import timezone


def generate_order_code():
    """Checkout identifier shown to customers, e.g. ORD-1760000000000-3F9A1C"""
    return f"ORD-{int(timezone.now().timestamp() * 1000)}-{uuid.uuid4().hex[:6].upper()}"


class Order(models.Model):
    """One checkout. Owns the discount and loyalty totals; lines are pure children"""

    STATUS_CONFIRMED = 'confirmed'
    STATUS_APPROVED = 'approved'
    STATUS_SHIPPED = 'shipped'
    STATUS_DELIVERED = 'delivered'
    STATUS_CANCELLED = 'cancelled'

    STATUS_CHOICES = [
        (STATUS_CONFIRMED, 'Confirmed'),
        (STATUS_APPROVED, 'Approved'),
        (STATUS_SHIPPED, 'Shipped'),
        (STATUS_DELIVERED, 'Delivered'),
        (STATUS_CANCELLED, 'Cancelled'),
    ]

    PAYMENT_COD = 'cod'
    PAYMENT_CARD = 'card'
    PAYMENT_METHOD_CHOICES = [
        (PAYMENT_COD, 'Cash on delivery'),
        (PAYMENT_CARD, 'Card'),
    ]

    order_code = models.CharField(max_length=50, unique=True, default=generate_order_code)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name='orders')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_CONFIRMED)
    payment_method = models.CharField(max_length=20, choices=PAYMENT_METHOD_CHOICES, default=PAYMENT_COD)
    payment_reference = models.CharField(max_length=255, null=True, blank=True,
                                         help_text="Gateway session that proved payment")

    # Money, all captured at checkout time
    cart_total = models.DecimalField(max_digits=12, decimal_places=2)
    coupon = models.ForeignKey('coupons.Coupon', on_delete=models.SET_NULL, null=True, blank=True,
                               related_name='orders')
    discount_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'),
                                          help_text="Coupon discount")
    reward_points_used = models.PositiveIntegerField(default=0)
    reward_discount_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    reward_points_earned = models.PositiveIntegerField(default=0)
    reward_rule = models.ForeignKey('points.RewardRule', on_delete=models.SET_NULL, null=True, blank=True,
                                    related_name='orders')
    total_amount = models.DecimalField(max_digits=12, decimal_places=2, help_text="Net amount paid")

    cancel_reason = models.CharField(max_length=200, null=True, blank=True)
    cancel_remarks = models.TextField(null=True, blank=True)

    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True,
                                   blank=True, related_name='+')
    updated_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True,
                                   blank=True, related_name='+')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'orders'
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['user', 'created_at']),
            models.Index(fields=['status']),
        ]

    def __str__(self):
        return f"Order {self.order_code}"

    @property
    def is_terminal(self):
        return self.status in (self.STATUS_DELIVERED, self.STATUS_CANCELLED)
