"""
Order lifecycle: which status changes are allowed and what each one does.

    confirmed -> approved -> shipped -> delivered
    confirmed | approved | shipped -> cancelled

``delivered`` and ``cancelled`` are terminal. Entering ``delivered`` books
a sale per line; entering ``cancelled`` refunds redeemed points, reverses
earned points and, only when ``CHECKOUT['RESTOCK_ON_CANCEL']`` is set,
returns the stock.
"""
import logging
from dataclasses import dataclass

from django.conf import settings

from apps.common.exceptions import AlreadyInStatus, InvalidTransition, TransitionNotPermitted
from apps.points.services import LoyaltyLedger
from apps.products.services import InventoryLedger
from ..models import Order, Sale

logger = logging.getLogger(__name__)

FORWARD_FLOW = [
    Order.STATUS_CONFIRMED,
    Order.STATUS_APPROVED,
    Order.STATUS_SHIPPED,
    Order.STATUS_DELIVERED,
]


def restock_on_cancel():
    return bool(settings.CHECKOUT.get('RESTOCK_ON_CANCEL', False))


@dataclass
class TransitionResult:
    order: Order
    old_status: str
    new_status: str
    points_refunded: int = 0
    points_reversed: int = 0
    restocked: bool = False


class OrderStateMachine:
    """Validates and applies order status changes"""

    @staticmethod
    def validate(order, new_status, actor):
        """Raise unless ``actor`` may move ``order`` to ``new_status``"""
        if new_status not in dict(Order.STATUS_CHOICES):
            raise InvalidTransition(f"Unknown order status '{new_status}'", status=new_status)

        if not actor.is_elevated:
            if new_status != Order.STATUS_CANCELLED:
                raise TransitionNotPermitted("Users can only cancel orders")
            if order.user_id != actor.id:
                raise TransitionNotPermitted("Users can only cancel their own orders")

        old_status = order.status
        if old_status == new_status:
            raise AlreadyInStatus(status=new_status)

        if order.is_terminal:
            raise InvalidTransition(
                f"Cannot change status of a {old_status} order",
                from_status=old_status,
                to_status=new_status,
            )

        if new_status != Order.STATUS_CANCELLED and FORWARD_FLOW.index(new_status) < FORWARD_FLOW.index(old_status):
            raise InvalidTransition(
                f"Cannot move a {old_status} order back to {new_status}",
                from_status=old_status,
                to_status=new_status,
            )

    @classmethod
    def transition(cls, order, new_status, actor, cancel_reason=None, cancel_remarks=None):
        """Validate, then apply the change and its side effects.

        The caller holds ``order`` locked inside an atomic block.
        """
        cls.validate(order, new_status, actor)

        result = TransitionResult(order=order, old_status=order.status, new_status=new_status)
        order.status = new_status
        order.updated_by = actor
        update_fields = ['status', 'updated_by', 'updated_at']
        if new_status == Order.STATUS_CANCELLED:
            order.cancel_reason = cancel_reason or None
            order.cancel_remarks = cancel_remarks or None
            update_fields += ['cancel_reason', 'cancel_remarks']
        order.save(update_fields=update_fields)

        if new_status == Order.STATUS_DELIVERED:
            cls._record_sales(order, actor)
        elif new_status == Order.STATUS_CANCELLED:
            cls._compensate(order, actor, result)

        logger.info(f"Order {order.order_code}: {result.old_status} -> {new_status} by user {actor.id}")
        return result

    @staticmethod
    def _record_sales(order, actor):
        Sale.objects.bulk_create([
            Sale(
                order_line=line,
                product_id=line.product_id,
                quantity=line.quantity,
                total_amount=line.line_total,
                created_by=actor,
            )
            for line in order.lines.all()
        ])

    @staticmethod
    def _compensate(order, actor, result):
        if order.reward_points_used or order.reward_points_earned:
            account = LoyaltyLedger.lock_account(order.user)
            if order.reward_points_used:
                LoyaltyLedger.refund(account, order.reward_points_used, order)
                result.points_refunded = order.reward_points_used
            if order.reward_points_earned:
                entry = LoyaltyLedger.reverse(account, order.reward_points_earned, order)
                result.points_reversed = -entry.points

        if restock_on_cancel():
            for line in sorted(order.lines.all(), key=lambda line: line.product_id):
                InventoryLedger.adjust(line.product_id, line.quantity, actor=actor)
            result.restocked = True
