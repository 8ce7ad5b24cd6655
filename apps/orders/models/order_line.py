from decimal import Decimal

from django.db import models


class OrderLine(models.Model):
    """One product of a checkout with its share of the discounts"""

    order = models.ForeignKey('Order', on_delete=models.CASCADE, related_name='lines')
    product = models.ForeignKey('products.Product', on_delete=models.PROTECT, related_name='order_lines')
    quantity = models.PositiveIntegerField()
    unit_price = models.DecimalField(max_digits=10, decimal_places=2, help_text="Price snapshot at checkout")
    line_total = models.DecimalField(max_digits=12, decimal_places=2, help_text="Subtotal after discounts")
    discount_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    reward_points_used = models.PositiveIntegerField(default=0, help_text="Floored share of points redeemed")
    reward_discount_amount = models.DecimalField(max_digits=16, decimal_places=6, default=Decimal('0'),
                                                 help_text="Unrounded share of the points discount")

    class Meta:
        db_table = 'order_lines'
        ordering = ['id']

    def __str__(self):
        return f"{self.order_id}: {self.quantity} x {self.product_id}"

    @property
    def subtotal(self):
        return self.unit_price * self.quantity
