"""
Inventory ledger: the only code that moves stock levels.

Isolation contract for ``reserve_or_fail``: it must run inside
``transaction.atomic``. The inventory row is taken with
``SELECT ... FOR UPDATE`` and stays locked until the enclosing transaction
commits or rolls back, so a second checkout for the same product blocks
and then re-reads the committed stock level. Rows are always locked in
ascending ``product_id`` order.
"""
import logging
from typing import Iterable, List

from django.db import transaction
from django.db.models import F
from django.db.transaction import TransactionManagementError

from apps.common.exceptions import InsufficientStock, ProductNotFound
from ..models import Inventory, Product

logger = logging.getLogger(__name__)


def _require_atomic():
    if not transaction.get_connection().in_atomic_block:
        raise TransactionManagementError("Inventory changes must run inside transaction.atomic")


class InventoryLedger:
    """Locked read, decrement and increment of per-product stock"""

    @staticmethod
    def reserve_or_fail(product_id: int, quantity: int, product_name: str = '') -> Inventory:
        """Lock the product's row and decrement it by ``quantity`` or raise InsufficientStock"""
        _require_atomic()

        record = Inventory.objects.select_for_update().filter(product_id=product_id).first()
        available = record.stock_level if record else 0
        if record is None or available < quantity:
            logger.info(f"Insufficient stock for product {product_id}: requested {quantity}, available {available}")
            raise InsufficientStock(
                f"Insufficient stock for product: {product_name or product_id}",
                product_id=product_id,
                requested=quantity,
                available=available,
            )

        Inventory.objects.filter(pk=record.pk).update(stock_level=F('stock_level') - quantity)
        record.stock_level = available - quantity
        return record

    @staticmethod
    def reserve_lines(lines: Iterable) -> List[Inventory]:
        """Reserve every line, locking rows in ascending product id order"""
        reserved = []
        for line in sorted(lines, key=lambda line: line.product_id):
            reserved.append(InventoryLedger.reserve_or_fail(
                line.product_id, line.quantity, getattr(line, 'name', '')
            ))
        return reserved

    @staticmethod
    def adjust(product_id: int, delta: int, actor=None) -> Inventory:
        """Apply a signed stock delta once; the result may not go below zero"""
        _require_atomic()

        if not Product.objects.filter(pk=product_id).exists():
            raise ProductNotFound(f"Product ID {product_id} not found", product_id=product_id)

        record, _ = Inventory.objects.select_for_update().get_or_create(product_id=product_id)
        if record.stock_level + delta < 0:
            raise InsufficientStock(
                f"Adjustment of {delta} would make stock negative for product {product_id}",
                product_id=product_id,
                requested=-delta,
                available=record.stock_level,
            )

        Inventory.objects.filter(pk=record.pk).update(
            stock_level=F('stock_level') + delta,
            updated_by=actor,
        )
        record.refresh_from_db()
        logger.info(f"Stock for product {product_id} adjusted by {delta} to {record.stock_level}")
        return record

    @staticmethod
    @transaction.atomic
    def set_stock(product_id: int, stock_level: int, reorder_threshold: int = None, actor=None) -> Inventory:
        """Create or overwrite a product's stock counter"""
        if not Product.objects.filter(pk=product_id).exists():
            raise ProductNotFound(f"Product ID {product_id} not found", product_id=product_id)

        defaults = {'stock_level': stock_level, 'updated_by': actor}
        if reorder_threshold is not None:
            defaults['reorder_threshold'] = reorder_threshold
        record, _ = Inventory.objects.update_or_create(product_id=product_id, defaults=defaults)
        return record

    @staticmethod
    def low_stock(owner=None):
        """Inventory rows at or below their reorder threshold"""
        queryset = Inventory.objects.select_related('product').filter(
            stock_level__lte=F('reorder_threshold')
        )
        if owner is not None:
            queryset = queryset.filter(product__created_by=owner)
        return queryset
