from django.conf import settings
from django.db import models


class Sale(models.Model):
    """Revenue recognised when an order line is delivered"""

    order_line = models.OneToOneField('OrderLine', on_delete=models.PROTECT, related_name='sale')
    product = models.ForeignKey('products.Product', on_delete=models.PROTECT, related_name='sales')
    quantity = models.PositiveIntegerField()
    total_amount = models.DecimalField(max_digits=12, decimal_places=2)
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True,
                                   blank=True, related_name='+')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'sales'
        ordering = ['-created_at']

    def __str__(self):
        return f"Sale {self.id} - {self.total_amount}"
