"""
Order lifecycle tests: permissions, transition rules and cancellation compensation.
"""
from decimal import Decimal

from django.db.models import Sum
from django.test import override_settings

from apps.common.exceptions import (
    AlreadyInStatus, InvalidTransition, OrderNotFound, TransitionNotPermitted
)
from apps.orders.models import Order, Sale
from apps.points.models import PointsAccount, RewardLog
from tests.factories import AdminFactory, TenantFactory, UserFactory, give_points
from tests.test_checkout import CheckoutTestCase


class OrderStatusTest(CheckoutTestCase):

    def setUp(self):
        super().setUp()
        self.admin = AdminFactory()
        self.order = self.checkout(coupon_code='SAVE10').order

    def change(self, new_status, actor=None, **kwargs):
        from apps.orders.services import SettlementContext
        return self.coordinator.change_status(
            SettlementContext(actor=actor or self.admin), self.order.id, new_status, **kwargs
        )

    def reload(self):
        return Order.objects.get(pk=self.order.pk)

    def test_forward_flow_books_sales_on_delivery(self):
        for new_status in ('approved', 'shipped'):
            self.change(new_status)
            self.assertFalse(Sale.objects.exists())

        self.change('delivered')

        sales = Sale.objects.filter(order_line__order=self.order)
        self.assertEqual(sales.count(), 2)
        self.assertEqual(sales.aggregate(total=Sum('total_amount'))['total'], Decimal('40.00'))
        self.assertEqual(self.reload().status, Order.STATUS_DELIVERED)

    def test_status_may_skip_forward(self):
        self.change('shipped')
        self.assertEqual(self.reload().status, Order.STATUS_SHIPPED)

    def test_tenant_may_advance(self):
        self.change('approved', actor=TenantFactory())
        self.assertEqual(self.reload().updated_by.role, 'tenant')

    def test_backward_move_is_rejected(self):
        self.change('shipped')
        with self.assertRaises(InvalidTransition):
            self.change('approved')

    def test_terminal_orders_cannot_change(self):
        self.change('delivered')
        with self.assertRaises(InvalidTransition):
            self.change('cancelled')

    def test_same_status(self):
        with self.assertRaises(AlreadyInStatus):
            self.change('confirmed')

    def test_unknown_status(self):
        with self.assertRaises(InvalidTransition):
            self.change('lost')

    def test_missing_order(self):
        from apps.orders.services import SettlementContext
        with self.assertRaises(OrderNotFound):
            self.coordinator.change_status(SettlementContext(actor=self.admin), 999999, 'approved')

    def test_user_may_only_cancel(self):
        with self.assertRaises(TransitionNotPermitted):
            self.change('approved', actor=self.user)
        self.assertEqual(self.reload().status, Order.STATUS_CONFIRMED)

    def test_user_may_not_cancel_someone_elses_order(self):
        with self.assertRaises(TransitionNotPermitted):
            self.change('cancelled', actor=UserFactory())

    def test_cancel_reverses_earned_points(self):
        result = self.change('cancelled', actor=self.user, cancel_reason='Changed my mind')

        self.assertEqual(result.points_reversed, 80)
        self.assertEqual(self.balance(), 0)
        self.assertEqual(
            RewardLog.objects.get(order=self.order, type=RewardLog.TYPE_REVERSAL).points, -80
        )
        order = self.reload()
        self.assertEqual(order.status, Order.STATUS_CANCELLED)
        self.assertEqual(order.cancel_reason, 'Changed my mind')

    def test_second_cancel_does_not_reverse_twice(self):
        self.change('cancelled', actor=self.user)
        with self.assertRaises(AlreadyInStatus):
            self.change('cancelled', actor=self.user)
        self.assertEqual(RewardLog.objects.filter(type=RewardLog.TYPE_REVERSAL).count(), 1)

    def test_reversal_clamped_when_points_already_spent(self):
        spend = self.checkout(items=self.cart(widgets=1, gadgets=0), reward_points_to_use=10).order
        self.assertEqual(self.balance(), 70)

        result = self.change('cancelled')

        self.assertEqual(result.points_reversed, 70)
        self.assertEqual(self.balance(), 0)
        account = PointsAccount.objects.get(user=self.user)
        self.assertEqual(account.entries.aggregate(total=Sum('points'))['total'], 0)
        self.assertIsNotNone(spend)

    def test_cancel_refunds_redeemed_points(self):
        give_points(self.user, 20)
        spend = self.checkout(items=self.cart(widgets=1, gadgets=0), reward_points_to_use=5).order
        self.assertEqual(self.balance(), 95)

        self.order = spend
        result = self.change('cancelled', actor=self.user)

        self.assertEqual(result.points_refunded, 5)
        self.assertEqual(result.points_reversed, 0)
        self.assertEqual(self.balance(), 100)

    def test_cancel_keeps_stock_by_default(self):
        result = self.change('cancelled')
        self.assertFalse(result.restocked)
        self.assertEqual(self.stock(self.widget), 3)
        self.assertEqual(self.stock(self.gadget), 1)

    @override_settings(CHECKOUT={'RESTOCK_ON_CANCEL': True, 'ENFORCE_COMBINED_DISCOUNT_FLOOR': False,
                                 'LOCK_TIMEOUT_SECONDS': 0})
    def test_cancel_restocks_when_enabled(self):
        result = self.change('cancelled')
        self.assertTrue(result.restocked)
        self.assertEqual(self.stock(self.widget), 5)
        self.assertEqual(self.stock(self.gadget), 2)
