"""
Tests for the inventory ledger.
"""
from decimal import Decimal
from unittest import mock

import pytest
from django.db import transaction
from django.db.transaction import TransactionManagementError
from django.test import TestCase

from apps.common.exceptions import InsufficientStock, ProductNotFound
from apps.products.models import Inventory
from apps.products.services import CartLine, CatalogService, InventoryLedger
from apps.common.exceptions import InvalidCart
from tests.factories import ProductFactory, TenantFactory, stocked_product


class InventoryLedgerTest(TestCase):

    def setUp(self):
        self.widget = stocked_product('Widget', Decimal('10.00'), 5)
        self.gadget = stocked_product('Gadget', Decimal('30.00'), 2)

    def stock(self, product):
        return Inventory.objects.get(product=product).stock_level

    def test_reserve_decrements_stock(self):
        with transaction.atomic():
            record = InventoryLedger.reserve_or_fail(self.widget.id, 2)

        self.assertEqual(record.stock_level, 3)
        self.assertEqual(self.stock(self.widget), 3)

    def test_reserve_exact_stock_reaches_zero(self):
        with transaction.atomic():
            InventoryLedger.reserve_or_fail(self.gadget.id, 2)
        self.assertEqual(self.stock(self.gadget), 0)

    def test_insufficient_stock_reports_levels(self):
        with self.assertRaises(InsufficientStock) as ctx:
            with transaction.atomic():
                InventoryLedger.reserve_or_fail(self.gadget.id, 3, 'Gadget')

        self.assertEqual(ctx.exception.details, {'product_id': self.gadget.id, 'requested': 3, 'available': 2})
        self.assertIn('Gadget', ctx.exception.message)
        self.assertEqual(self.stock(self.gadget), 2)

    def test_missing_inventory_row_counts_as_no_stock(self):
        product = ProductFactory()
        with self.assertRaises(InsufficientStock) as ctx:
            with transaction.atomic():
                InventoryLedger.reserve_or_fail(product.id, 1)
        self.assertEqual(ctx.exception.details['available'], 0)

    def test_failed_line_rolls_back_earlier_reservations(self):
        lines = [CartLine(self.widget.id, 2), CartLine(self.gadget.id, 3)]
        with self.assertRaises(InsufficientStock):
            with transaction.atomic():
                InventoryLedger.reserve_lines(lines)

        self.assertEqual(self.stock(self.widget), 5)
        self.assertEqual(self.stock(self.gadget), 2)

    def test_rows_are_locked_in_ascending_product_order(self):
        lines = [CartLine(self.gadget.id, 1), CartLine(self.widget.id, 1)]
        with mock.patch.object(InventoryLedger, 'reserve_or_fail',
                               wraps=InventoryLedger.reserve_or_fail) as reserve:
            with transaction.atomic():
                InventoryLedger.reserve_lines(lines)

        locked = [call.args[0] for call in reserve.call_args_list]
        self.assertEqual(locked, sorted([self.widget.id, self.gadget.id]))

    def test_adjust_adds_stock(self):
        with transaction.atomic():
            record = InventoryLedger.adjust(self.gadget.id, 4)
        self.assertEqual(record.stock_level, 6)

    def test_adjust_creates_missing_row(self):
        product = ProductFactory()
        with transaction.atomic():
            record = InventoryLedger.adjust(product.id, 3)
        self.assertEqual(record.stock_level, 3)

    def test_adjust_cannot_go_negative(self):
        with self.assertRaises(InsufficientStock):
            with transaction.atomic():
                InventoryLedger.adjust(self.gadget.id, -3)
        self.assertEqual(self.stock(self.gadget), 2)

    def test_adjust_unknown_product(self):
        with self.assertRaises(ProductNotFound):
            with transaction.atomic():
                InventoryLedger.adjust(999999, 1)

    def test_low_stock_by_owner(self):
        owner = TenantFactory()
        product = ProductFactory(created_by=owner)
        InventoryLedger.set_stock(product.id, 1, reorder_threshold=5)

        self.assertEqual([row.product_id for row in InventoryLedger.low_stock(owner)], [product.id])
        self.assertTrue(Inventory.objects.get(product=product).is_low_stock)


class CatalogServiceTest(TestCase):

    def test_parse_cart(self):
        lines = CatalogService.parse_cart([{'product_id': '3', 'quantity': 2}])
        self.assertEqual(lines, [CartLine(product_id=3, quantity=2)])

    def test_empty_cart(self):
        with self.assertRaises(InvalidCart):
            CatalogService.parse_cart([])

    def test_zero_quantity(self):
        with self.assertRaises(InvalidCart):
            CatalogService.parse_cart([{'product_id': 1, 'quantity': 0}])

    def test_malformed_item(self):
        with self.assertRaises(InvalidCart):
            CatalogService.parse_cart([{'product_id': 1}])

    def test_price_lines_reads_current_price(self):
        product = ProductFactory(price=Decimal('12.50'))
        priced = CatalogService.price_lines([CartLine(product.id, 2)])
        self.assertEqual(priced[0].unit_price, Decimal('12.50'))
        self.assertEqual(priced[0].subtotal, Decimal('25.00'))

    def test_price_lines_unknown_product(self):
        with self.assertRaises(ProductNotFound):
            CatalogService.price_lines([CartLine(424242, 1)])


@pytest.mark.django_db(transaction=True)
def test_reserve_requires_atomic_block(catalog):
    with pytest.raises(TransactionManagementError):
        InventoryLedger.reserve_or_fail(catalog['widget'].id, 1)
    assert Inventory.objects.get(product=catalog['widget']).stock_level == 5
