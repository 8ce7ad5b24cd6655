from django.conf import settings
from django.db import models


class Inventory(models.Model):
    """Stock counter for one product.

    ``stock_level`` is only ever decremented while the row is held with
    ``SELECT ... FOR UPDATE``; the unsigned column keeps it from going
    negative even if that contract is broken.
    """
    product = models.OneToOneField('Product', on_delete=models.CASCADE, related_name='inventory')
    stock_level = models.PositiveIntegerField(default=0)
    reorder_threshold = models.PositiveIntegerField(default=10)
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'inventory'
        verbose_name = 'Inventory'
        verbose_name_plural = 'Inventory'

    def __str__(self):
        return f"{self.product_id}: {self.stock_level}"

    @property
    def is_low_stock(self):
        return self.stock_level <= self.reorder_threshold
