"""
Settlement coordinator: the entry point for checkouts and order status
changes. Each call is one all-or-nothing transaction.

Checkout lock order is coupon row, points account, then inventory rows by
ascending product id.
"""
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from django.conf import settings
from django.db import OperationalError, transaction

from apps.common.activity import log_activity_on_commit
from apps.common.exceptions import LockTimeout, OrderNotFound, PaymentNotCompleted
from apps.coupons.services import CouponService, DiscountResolver
from apps.points.models import RewardRule
from apps.points.services import LoyaltyLedger, RewardRuleEngine, RewardSettingsService
from apps.products.services import CatalogService, InventoryLedger
from ..models import Order, OrderLine
from .order_state_machine import OrderStateMachine

logger = logging.getLogger(__name__)

MYSQL_LOCK_WAIT_TIMEOUT = 1205
POSTGRES_LOCK_NOT_AVAILABLE = '55P03'


@dataclass(frozen=True)
class SettlementContext:
    """Who is acting; passed explicitly instead of read from request globals"""
    actor: object


@dataclass
class CheckoutRequest:
    items: Optional[List[Dict]] = None
    coupon_code: Optional[str] = None
    reward_points_to_use: int = 0
    payment_reference: Optional[str] = None
    payment_method: str = Order.PAYMENT_COD


@dataclass
class CheckoutResult:
    order: Order
    points_earned: int
    points_redeemed: int
    coupon_rejection: Optional[str] = None


def _is_lock_timeout(exc):
    cause = exc.__cause__
    # psycopg2 names the SQLSTATE pgcode, psycopg 3 names it sqlstate
    code = getattr(cause, 'pgcode', None) or getattr(cause, 'sqlstate', None)
    if code == POSTGRES_LOCK_NOT_AVAILABLE:
        return True
    return bool(exc.args) and exc.args[0] == MYSQL_LOCK_WAIT_TIMEOUT


def _apply_lock_timeout():
    seconds = settings.CHECKOUT.get('LOCK_TIMEOUT_SECONDS') or 0
    if not seconds:
        return

    connection = transaction.get_connection()
    with connection.cursor() as cursor:
        if connection.vendor == 'mysql':
            cursor.execute('SET SESSION innodb_lock_wait_timeout = %s', [int(seconds)])
        elif connection.vendor == 'postgresql':
            cursor.execute("SELECT set_config('lock_timeout', %s, true)", [f'{int(seconds)}s'])


class SettlementCoordinator:
    """Runs checkouts and status changes as single units of work"""

    def __init__(self, payment_gateway=None):
        self._payment_gateway = payment_gateway

    @property
    def payment_gateway(self):
        if self._payment_gateway is None:
            from apps.payments.services import HttpPaymentGateway
            self._payment_gateway = HttpPaymentGateway()
        return self._payment_gateway

    def checkout(self, context: SettlementContext, request: CheckoutRequest) -> CheckoutResult:
        items = request.items
        coupon_code = request.coupon_code
        payment_method = request.payment_method or Order.PAYMENT_COD

        if request.payment_reference:
            verdict = self.payment_gateway.verify(request.payment_reference)
            if not verdict.paid:
                raise PaymentNotCompleted(reference=request.payment_reference)
            # The paid session's manifest is authoritative over the submitted cart
            items = verdict.items
            payment_method = Order.PAYMENT_CARD
            if verdict.coupon_code:
                coupon_code = verdict.coupon_code

        lines = CatalogService.parse_cart(items)

        try:
            with transaction.atomic():
                _apply_lock_timeout()
                result = self._settle(context, lines, coupon_code, request.reward_points_to_use,
                                      payment_method, request.payment_reference)
        except OperationalError as e:
            if _is_lock_timeout(e):
                logger.warning(f"Checkout for user {context.actor.id} timed out waiting for a lock")
                raise LockTimeout() from e
            raise

        logger.info(
            f"Order {result.order.order_code} placed by user {context.actor.id}: "
            f"total={result.order.total_amount} earned={result.points_earned} redeemed={result.points_redeemed}"
        )
        return result

    def _settle(self, context, lines, coupon_code, requested_points, payment_method, payment_reference):
        user = context.actor
        program = RewardSettingsService.load()

        priced = CatalogService.price_lines(lines)
        coupon = CouponService.get_for_checkout(coupon_code)
        account = LoyaltyLedger.lock_account(user) if user.is_loyalty_member else None

        discounts = DiscountResolver.resolve(
            priced,
            coupon=coupon,
            requested_points=requested_points,
            balance=account.reward_points if account else 0,
            is_member=user.is_loyalty_member,
            rewards_enabled=program.enabled,
            min_redemption_points=program.min_redemption_points,
            enforce_combined_floor=settings.CHECKOUT.get('ENFORCE_COMBINED_DISCOUNT_FLOOR', False),
        )
        if coupon_code and discounts.coupon is None:
            logger.info(f"Coupon '{coupon_code}' not applied for user {user.id}: {discounts.coupon_rejection or 'not_found'}")

        InventoryLedger.reserve_lines(priced)

        final_amount = discounts.final_amount
        points_earned, rule = RewardRuleEngine.points_for(
            final_amount,
            RewardRule.active_for(final_amount),
            points_redeemed=discounts.points_to_redeem,
            is_member=user.is_loyalty_member,
            rewards_enabled=program.enabled,
        )

        order = Order.objects.create(
            user=user,
            payment_method=payment_method,
            payment_reference=payment_reference,
            cart_total=discounts.cart_total,
            coupon=discounts.coupon,
            discount_amount=discounts.coupon_discount,
            reward_points_used=discounts.points_to_redeem,
            reward_discount_amount=discounts.reward_discount,
            reward_points_earned=points_earned,
            reward_rule=rule,
            total_amount=final_amount,
            created_by=user,
        )
        OrderLine.objects.bulk_create([
            OrderLine(
                order=order,
                product_id=allocation.product_id,
                quantity=allocation.quantity,
                unit_price=allocation.unit_price,
                line_total=allocation.line_total,
                discount_amount=allocation.discount_amount,
                reward_points_used=allocation.reward_points_used,
                reward_discount_amount=allocation.reward_discount_amount,
            )
            for allocation in discounts.lines
        ])

        if discounts.coupon is not None:
            CouponService.record_usage(discounts.coupon)

        if account is not None:
            if discounts.points_to_redeem:
                LoyaltyLedger.redeem(account, discounts.points_to_redeem, order)
            if points_earned:
                LoyaltyLedger.accrue(account, points_earned, order)

        log_activity_on_commit(user.id, 'Placed Order', 'order', order.id, {
            'order_code': order.order_code,
            'items_count': len(lines),
            'total': str(discounts.cart_total),
        })

        return CheckoutResult(
            order=order,
            points_earned=points_earned,
            points_redeemed=discounts.points_to_redeem,
            coupon_rejection=(discounts.coupon_rejection or 'not_found') if coupon_code and discounts.coupon is None else None,
        )

    def change_status(self, context: SettlementContext, order_id, new_status,
                      cancel_reason=None, cancel_remarks=None):
        """Move an order to ``new_status`` with all side effects, or change nothing"""
        try:
            with transaction.atomic():
                _apply_lock_timeout()
                order = Order.objects.select_for_update().filter(pk=order_id).first()
                if order is None:
                    raise OrderNotFound(order_id=order_id)

                result = OrderStateMachine.transition(
                    order, new_status, context.actor,
                    cancel_reason=cancel_reason,
                    cancel_remarks=cancel_remarks,
                )
                log_activity_on_commit(context.actor.id, f'Order {new_status}', 'order', order.id, {
                    'order_code': order.order_code,
                    'status': new_status,
                })
        except OperationalError as e:
            if _is_lock_timeout(e):
                raise LockTimeout() from e
            raise

        return result
