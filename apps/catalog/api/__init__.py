from .serializers import (
    ProductListSerializer,
    ProductDetailSerializer,
    VariantListSerializer,
    VariantDetailSerializer,
    VariantSelectionSerializer,
    SelectOptionSerializer,
)

__all__ = [
    'ProductListSerializer',
    'ProductDetailSerializer',
    'VariantListSerializer',
    'VariantDetailSerializer',
    'VariantSelectionSerializer',
    'SelectOptionSerializer',
]
