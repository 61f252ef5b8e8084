"""
Catalog models for the storefront.

Model Hierarchy:
- Product: Base product, the family shown on one product page
- Variant: Individual SKU with price, stock and attribute values
  (size, color, capacity, scent)
"""

from .product import Product
from .variant import Variant

__all__ = [
    'Product',
    'Variant',
]
