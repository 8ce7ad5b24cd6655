"""
Order models module.
"""
from .order import Order
from .order_line import OrderLine
from .sale import Sale

__all__ = [
    'Order',
    'OrderLine',
    'Sale',
]
