from decimal import Decimal

import pytest

from apps.catalog.services.variant_options import VariantSnapshot


@pytest.fixture
def tee_variants():
    """Two multi-size SKUs, one per color."""
    return [
        VariantSnapshot(id='a', color='White', sizes=('S', 'M'), in_stock=True),
        VariantSnapshot(id='b', color='Black', sizes=('M', 'L'), in_stock=True),
    ]


@pytest.fixture
def candle_variants():
    return [
        VariantSnapshot(id='candle-200', capacities=('200g',), scents=('Vanilla', 'Cedarwood')),
        VariantSnapshot(id='candle-400', capacities=('400g',), scents=('Vanilla', 'Sea Salt')),
    ]


@pytest.fixture
def tee_product(db):
    from apps.catalog.models import Product, Variant

    product = Product.objects.create(name='Essential Tee')
    Variant.objects.create(
        product=product, sku='TEE-WHITE', color='White', sizes=['S', 'M'],
        sell_price=Decimal('19.90'), stock_quantity=40,
    )
    Variant.objects.create(
        product=product, sku='TEE-BLACK', color='Black', sizes=['M', 'L'],
        sell_price=Decimal('21.90'), stock_quantity=40,
    )
    return product
