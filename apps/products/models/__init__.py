"""
Product models module.
"""
from .product import Product
from .inventory import Inventory

__all__ = [
    'Product',
    'Inventory',
]
