"""
Script to create sample data for trying out variant selection.
Run with: python manage.py shell < create_sample_data.py
"""
from apps.catalog.models import Product, Variant
from decimal import Decimal

# Create Products
print("Creating products...")

speaker, _ = Product.objects.get_or_create(
    slug='pure-cube-speaker',
    defaults={'name': 'Pure Cube Speaker', 'description': 'Compact wireless speaker', 'is_active': True}
)

candle, _ = Product.objects.get_or_create(
    slug='soy-candle',
    defaults={'name': 'Soy Candle', 'description': 'Hand-poured soy wax candle', 'is_active': True}
)

tee, _ = Product.objects.get_or_create(
    slug='essential-tee',
    defaults={'name': 'Essential Tee', 'description': 'Everyday cotton t-shirt', 'is_active': True}
)

# One variant per color; each also lists the sibling colors it stands in for
print("Creating variants...")

speaker_colors = ['White', 'Black', 'Light Blue']
for i, color in enumerate(speaker_colors):
    Variant.objects.get_or_create(
        sku=f'CUBE-{color.upper().replace(" ", "-")}',
        defaults={
            'product': speaker,
            'color': color,
            'colors': speaker_colors,
            'sell_price': Decimal('129.00'),
            'stock_quantity': 0 if color == 'Light Blue' else 25,
            'is_default': i == 0,
            'is_active': True,
        }
    )

# Scents share one SKU per jar size
for capacity, price in (('200g', Decimal('24.00')), ('400g', Decimal('39.00'))):
    Variant.objects.get_or_create(
        sku=f'CANDLE-{capacity.upper()}',
        defaults={
            'product': candle,
            'capacities': [capacity],
            'scents': ['Vanilla', 'Cedarwood', 'Sea Salt'],
            'sell_price': price,
            'stock_quantity': 12,
            'is_active': True,
        }
    )

# Multi-size SKUs per color
tee_variants = [
    ('TEE-WHITE', 'White', ['S', 'M']),
    ('TEE-BLACK', 'Black', ['M', 'L']),
]
for sku, color, sizes in tee_variants:
    Variant.objects.get_or_create(
        sku=sku,
        defaults={
            'product': tee,
            'color': color,
            'sizes': sizes,
            'sell_price': Decimal('19.90'),
            'stock_quantity': 40,
            'is_active': True,
        }
    )

print("\n✅ Sample data created successfully!")
print(f"   - {Product.objects.count()} products")
print(f"   - {Variant.objects.count()} variants")
print("\nTry: http://localhost:8000/api/products/essential-tee/variant-selection/?color=Black")
