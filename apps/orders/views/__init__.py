"""
Order views module.
"""
from .order_views import CheckoutView, OrderListView
from .order_actions import UpdateOrderStatusView

__all__ = [
    'CheckoutView',
    'OrderListView',
    'UpdateOrderStatusView',
]
