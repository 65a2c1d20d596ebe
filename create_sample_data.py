"""
Script to create sample data for trying out variant generation and the matrix API.
Run with: python manage.py shell < create_sample_data.py
"""
from apps.variants.engine import Axis, AxisValue, PricingConfig, CombinatorialExplosionWarning
from apps.variants.engine.pricing import PRICING_AXIS_BASED, PRICING_PERCENTAGE_INCREASE
from apps.variants.models import Product, Variant, VariantTemplate
from apps.variants.services import VariantEngineService
from decimal import Decimal

# Create Products
print("Creating products...")

tshirt, _ = Product.objects.get_or_create(
    slug='camiseta-basica',
    defaults={
        'name': 'Camiseta Básica',
        'sku': 'CAM',
        'price': Decimal('79.90'),
        'description': 'Camiseta de algodão confortável',
        'brand': 'Básicos',
    }
)

jeans, _ = Product.objects.get_or_create(
    slug='calca-jeans',
    defaults={'name': 'Calça Jeans', 'sku': 'CJN', 'price': Decimal('159.90'), 'description': 'Calça jeans clássica'}
)

phone, _ = Product.objects.get_or_create(
    slug='smartphone-x',
    defaults={'name': 'Smartphone X', 'sku': 'SPX', 'price': Decimal('2999.00'), 'brand': 'Acme'}
)

legacy, _ = Product.objects.get_or_create(
    slug='extensao-cabelo',
    defaults={'name': 'Extensão de Cabelo', 'sku': 'EXT', 'price': Decimal('349.90')}
)

# Generate variants
print("Generating variants...")

# Size x Color with per-value adjustments
result = VariantEngineService.generate_variants(
    tshirt,
    [
        Axis('Size', (AxisValue('P'), AxisValue('M'), AxisValue('G'), AxisValue('GG', Decimal('10')))),
        Axis.from_values('Color', ['Preto', 'Branco', 'Azul']),
    ],
    PricingConfig(strategy=PRICING_AXIS_BASED),
    options=VariantEngineService.default_options(
        default_quantity=10,
        inherit_fields=('description', 'brand'),
    ),
)
print(f"   - {tshirt.name}: {result.created_count} created, {result.skipped_count} skipped")

# Single axis, incremental percentage pricing
result = VariantEngineService.generate_variants(
    jeans,
    [Axis.from_values('Waist', ['38', '40', '42', '44', '46'])],
    PricingConfig(strategy=PRICING_PERCENTAGE_INCREASE, percentage=Decimal('5')),
    options=VariantEngineService.default_options(default_quantity=5),
)
print(f"   - {jeans.name}: {result.created_count} created, {result.skipped_count} skipped")

# Three axes from the seeded templates
templates = {t.axis_name: t for t in VariantTemplate.objects.filter(is_global=True)}
selections = [
    {'template_id': templates['Storage'].pk, 'values': ['128GB', '256GB', '512GB']},
    {'template_id': templates['Memory'].pk, 'values': ['8GB', '16GB']},
    {'template_id': templates['Color'].pk, 'values': ['Black', 'White']},
]
try:
    result = VariantEngineService.generate_variants(
        phone,
        VariantEngineService.axes_from_templates(selections),
        PricingConfig(strategy=PRICING_AXIS_BASED),
        template_ids=[s['template_id'] for s in selections],
    )
    print(f"   - {phone.name}: {result.created_count} created, {result.skipped_count} skipped")
except CombinatorialExplosionWarning as e:
    print(f"   - {phone.name}: {e}")

# Legacy variants without axis values, shown as a flat list
for length in ['30cm', '50cm', '70cm']:
    Variant.objects.get_or_create(
        sku=f'EXT-{length.upper()}',
        defaults={
            'product': legacy,
            'name': f'Extensão {length}',
            'cost_price': Decimal('150.00'),
            'price': Decimal('349.90'),
            'stock_quantity': 5,
        }
    )

print("\n✅ Sample data created successfully!")
print(f"   - {Product.objects.count()} products")
print(f"   - {Variant.objects.count()} variants")
print(f"   - {VariantTemplate.objects.count()} variant templates")
print("\nTry the matrix at: http://localhost:8000/api/products/camiseta-basica/matrix/")
