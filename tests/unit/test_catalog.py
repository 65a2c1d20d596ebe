"""Tests for axis templates and the catalog provider interface."""

from decimal import Decimal

import pytest

from apps.variants.engine import AxisCatalogProvider, AxisTemplate, ValidationError


class DictCatalog(AxisCatalogProvider):

    def __init__(self, templates):
        self.templates = {t.id: t for t in templates}

    def list_templates(self):
        return list(self.templates.values())

    def get_template(self, template_id):
        try:
            return self.templates[template_id]
        except KeyError:
            raise ValidationError(f"Unknown template {template_id}")


@pytest.fixture
def storage():
    return AxisTemplate(
        id='storage',
        name='Storage Capacity',
        axis_name='Storage',
        values=['64GB', '128GB', '256GB', '512GB'],
        suggested_adjustments={'512GB': 25},
        adjustment_type='percentage',
    )


class TestAxisTemplate:

    def test_full_axis_with_pricing(self, storage):
        axis = storage.to_axis()
        assert axis.name == 'Storage'
        assert axis.value_names == ['64GB', '128GB', '256GB', '512GB']
        assert axis.get('512GB').price_adjustment == Decimal('25')
        assert axis.get('512GB').adjustment_type == 'percentage'
        assert axis.get('64GB').price_adjustment is None

    def test_subset_keeps_template_order(self, storage):
        axis = storage.to_axis(values=['512GB', '64GB'])
        assert axis.value_names == ['64GB', '512GB']

    def test_without_pricing(self, storage):
        axis = storage.to_axis(with_pricing=False)
        assert not any(v.has_adjustment for v in axis.values)

    def test_unknown_adjustment_type_falls_back_to_fixed(self):
        template = AxisTemplate(1, 'Tiers', 'Tier', ['A'], {'A': 5}, adjustment_type='tiered')
        assert template.to_axis().get('A').adjustment_type == 'fixed'


class TestCatalogProvider:

    def test_get_axis(self, storage):
        catalog = DictCatalog([storage])
        axis = catalog.get_axis('storage', ['128GB'])
        assert axis.value_names == ['128GB']

    def test_unknown_template(self, storage):
        with pytest.raises(ValidationError):
            DictCatalog([storage]).get_axis('colors')
