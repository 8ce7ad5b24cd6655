"""
Order serializers module.
"""
from .order_serializers import OrderSerializer, OrderLineSerializer
from .order_action_serializers import CheckoutSerializer, CheckoutItemSerializer, OrderStatusSerializer

__all__ = [
    'OrderSerializer',
    'OrderLineSerializer',
    'CheckoutSerializer',
    'CheckoutItemSerializer',
    'OrderStatusSerializer',
]
