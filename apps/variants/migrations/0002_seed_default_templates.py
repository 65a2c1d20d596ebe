# Generated manually

from django.db import migrations


DEFAULT_TEMPLATES = [
    {
        'name': 'Clothing Sizes',
        'axis_name': 'Size',
        'values': ['XS', 'S', 'M', 'L', 'XL', 'XXL', 'XXXL'],
        'metadata': {'category': 'apparel'},
    },
    {
        'name': 'Standard Colors',
        'axis_name': 'Color',
        'values': ['Black', 'White', 'Gray', 'Navy', 'Red', 'Blue', 'Green', 'Yellow'],
        'metadata': {'category': 'general'},
    },
    {
        'name': 'Storage Capacity',
        'axis_name': 'Storage',
        'values': ['64GB', '128GB', '256GB', '512GB', '1TB', '2TB'],
        'metadata': {
            'category': 'electronics',
            'suggested_pricing': {
                'strategy': 'percentage',
                'adjustments': {'512GB': 25, '1TB': 50, '2TB': 100},
            },
        },
    },
    {
        'name': 'Memory (RAM)',
        'axis_name': 'Memory',
        'values': ['4GB', '8GB', '16GB', '32GB', '64GB'],
        'metadata': {
            'category': 'electronics',
            'suggested_pricing': {
                'strategy': 'percentage',
                'adjustments': {'16GB': 15, '32GB': 30, '64GB': 60},
            },
        },
    },
    {
        'name': 'Materials',
        'axis_name': 'Material',
        'values': ['Cotton', 'Polyester', 'Wool', 'Leather', 'Silk', 'Linen', 'Synthetic'],
        'metadata': {'category': 'apparel'},
    },
    {
        'name': 'Shoe Sizes (US)',
        'axis_name': 'Shoe Size',
        'values': ['5', '5.5', '6', '6.5', '7', '7.5', '8', '8.5', '9', '9.5',
                   '10', '10.5', '11', '11.5', '12'],
        'metadata': {'category': 'footwear'},
    },
    {
        'name': 'Screen Sizes',
        'axis_name': 'Screen Size',
        'values': ['13"', '14"', '15"', '16"', '17"', '24"', '27"', '32"'],
        'metadata': {
            'category': 'electronics',
            'suggested_pricing': {
                'strategy': 'fixed',
                'adjustments': {'27"': 200, '32"': 400},
            },
        },
    },
]


def seed_templates(apps, schema_editor):
    """Create the global default templates that do not exist yet."""
    VariantTemplate = apps.get_model('variants', 'VariantTemplate')
    for order, data in enumerate(DEFAULT_TEMPLATES):
        VariantTemplate.objects.get_or_create(
            name=data['name'],
            is_global=True,
            defaults={
                'axis_name': data['axis_name'],
                'values': data['values'],
                'metadata': data['metadata'],
                'description': f"Default template for {data['axis_name']}",
                'display_order': order,
            },
        )


def remove_templates(apps, schema_editor):
    VariantTemplate = apps.get_model('variants', 'VariantTemplate')
    VariantTemplate.objects.filter(
        is_global=True,
        name__in=[t['name'] for t in DEFAULT_TEMPLATES],
    ).delete()


class Migration(migrations.Migration):

    dependencies = [
        ('variants', '0001_initial'),
    ]

    operations = [
        migrations.RunPython(seed_templates, remove_templates),
    ]
