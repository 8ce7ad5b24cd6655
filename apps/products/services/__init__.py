"""
Product services module.
"""
from .catalog_service import CartLine, PricedLine, CatalogService
from .inventory_service import InventoryLedger

__all__ = [
    'CartLine',
    'PricedLine',
    'CatalogService',
    'InventoryLedger',
]
