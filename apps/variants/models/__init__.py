"""
Variant models.

Model Hierarchy:
- Product: Parent item (e.g., "Camiseta Básica") with base SKU and price
- Variant: Individual SKU, one combination of axis values (Size, Color, ...)
- PriceHistory: Audit trail of variant price changes
- VariantTemplate: Reusable axis definitions (Clothing Sizes, Colors, ...)
"""

from .product import Product
from .variant import Variant
from .price_history import PriceHistory
from .variant_template import VariantTemplate

__all__ = [
    'Product',
    'Variant',
    'PriceHistory',
    'VariantTemplate',
]
