"""
Catalog reader used by checkout to price cart lines.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List

from apps.common.exceptions import InvalidCart, ProductNotFound
from ..models import Product


@dataclass(frozen=True)
class CartLine:
    """One requested product and quantity; never persisted"""
    product_id: int
    quantity: int


@dataclass(frozen=True)
class PricedLine:
    """A cart line with the unit price read at checkout time"""
    product_id: int
    quantity: int
    unit_price: Decimal
    name: str = ''

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity


class CatalogService:
    """Reads current product prices for a cart"""

    @staticmethod
    def parse_cart(items: Iterable[Dict]) -> List[CartLine]:
        """Build cart lines from raw ``{product_id, quantity}`` mappings"""
        lines = []
        for item in items or []:
            try:
                product_id = int(item['product_id'])
                quantity = int(item['quantity'])
            except (KeyError, TypeError, ValueError):
                raise InvalidCart("Each item must have product_id and quantity")
            if quantity <= 0:
                raise InvalidCart("Quantity must be greater than 0", product_id=product_id)
            lines.append(CartLine(product_id=product_id, quantity=quantity))

        if not lines:
            raise InvalidCart()
        return lines

    @staticmethod
    def price_lines(lines: List[CartLine]) -> List[PricedLine]:
        """Attach current unit prices; any unknown product aborts the checkout"""
        products = Product.objects.in_bulk({line.product_id for line in lines})

        priced = []
        for line in lines:
            product = products.get(line.product_id)
            if product is None:
                raise ProductNotFound(
                    f"Product ID {line.product_id} not found",
                    product_id=line.product_id
                )
            priced.append(PricedLine(
                product_id=line.product_id,
                quantity=line.quantity,
                unit_price=product.price,
                name=product.name,
            ))
        return priced
