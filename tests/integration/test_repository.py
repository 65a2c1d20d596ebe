"""Tests for the Django ORM variant repository."""

from decimal import Decimal

import pytest
from django.db import OperationalError

from apps.variants.engine import (
    Axis,
    ConflictError,
    GeneratedVariantRequest,
    PersistenceError,
    VariantNotFoundError,
    iter_combinations,
)
from apps.variants.models import PriceHistory, Variant
from apps.variants.services import DjangoVariantRepository


pytestmark = pytest.mark.django_db


def make_request(combination, sku, **kwargs):
    return GeneratedVariantRequest(
        combination=combination,
        sku=sku,
        name=kwargs.pop('name', f'Variant {sku}'),
        price=kwargs.pop('price', Decimal('50.00')),
        **kwargs
    )


@pytest.fixture
def combinations(size_color_axes):
    return list(iter_combinations(size_color_axes))


class TestCreate:

    def test_stores_axis_values_and_signature(self, product, combinations):
        record = DjangoVariantRepository().create(product.pk, make_request(combinations[0], 'CAM-S-RED'))

        variant = Variant.objects.get(pk=record.id)
        assert variant.axis_values == {'Size': 'S', 'Color': 'Red'}
        assert variant.axis_signature == combinations[0].signature
        assert record.axis_values == {'Size': 'S', 'Color': 'Red'}
        assert record.price == Decimal('50.00')

    def test_inherited_fields(self, product, combinations):
        request = make_request(
            combinations[0], 'CAM-S-RED',
            inherited_fields={'brand': 'Básicos', 'season': 'verão'},
            attributes={'material': 'algodão'},
            low_stock_threshold=2,
        )
        record = DjangoVariantRepository().create(product.pk, request)

        variant = Variant.objects.get(pk=record.id)
        assert variant.brand == 'Básicos'
        assert variant.attributes == {'material': 'algodão', 'season': 'verão'}
        assert variant.low_stock_threshold == 2

    def test_same_combination_conflicts(self, product, combinations):
        """Should report a conflict on (product, axis signature)."""
        repository = DjangoVariantRepository()
        repository.create(product.pk, make_request(combinations[0], 'CAM-S-RED'))

        with pytest.raises(ConflictError):
            repository.create(product.pk, make_request(combinations[0], 'CAM-S-RED-2'))
        assert Variant.objects.filter(product=product).count() == 1

    def test_sku_clash_is_a_persistence_error(self, product, other_product, combinations):
        """Should not mistake another product's SKU for a concurrent create."""
        repository = DjangoVariantRepository()
        repository.create(other_product.pk, make_request(combinations[0], 'SHARED'))

        with pytest.raises(PersistenceError):
            repository.create(product.pk, make_request(combinations[1], 'SHARED'))

    def test_same_combination_on_other_product_is_fine(self, product, other_product, combinations):
        repository = DjangoVariantRepository()
        repository.create(product.pk, make_request(combinations[0], 'CAM-S-RED'))
        repository.create(other_product.pk, make_request(combinations[0], 'CJN-S-RED'))
        assert Variant.objects.count() == 2


class TestFind:

    def test_by_signature(self, product, combinations):
        repository = DjangoVariantRepository()
        created = repository.create(product.pk, make_request(combinations[0], 'CAM-S-RED'))

        assert repository.find_by_parent_and_axis_signature(product.pk, combinations[0].signature) == created
        assert repository.find_by_parent_and_axis_signature(product.pk, combinations[1].signature) is None

    def test_signature_ignores_key_order(self, product, combinations):
        Variant.objects.create(
            product=product, sku='LEGACY', price=Decimal('1'),
            axis_values={'Color': 'Red', 'Size': 'S'},
        )
        found = DjangoVariantRepository().find_by_parent_and_axis_signature(
            product.pk, combinations[0].signature
        )
        assert found.sku == 'LEGACY'

    def test_database_error_becomes_persistence_error(self, product, combinations, monkeypatch):
        def broken_filter(*args, **kwargs):
            raise OperationalError('database is locked')

        monkeypatch.setattr(Variant.objects, 'filter', broken_filter)
        with pytest.raises(PersistenceError) as excinfo:
            DjangoVariantRepository().find_by_parent_and_axis_signature(
                product.pk, combinations[0].signature
            )
        assert isinstance(excinfo.value.cause, OperationalError)


class TestUpdate:

    @pytest.fixture
    def variant(self, product):
        return Variant.objects.create(product=product, sku='CAM-1', price=Decimal('50.00'), stock_quantity=3)

    def test_updates_mapped_fields(self, variant):
        record = DjangoVariantRepository().update(variant.pk, {'price': Decimal('55.00'), 'quantity': 8})
        variant.refresh_from_db()
        assert variant.price == Decimal('55.00')
        assert variant.stock_quantity == 8
        assert record.quantity == 8

    def test_price_change_is_tagged(self, variant, django_user_model):
        user = django_user_model.objects.create_user(username='ana', password='x')
        repository = DjangoVariantRepository(source=PriceHistory.SOURCE_BULK, user=user)
        repository.update(variant.pk, {'price': Decimal('60.00')})

        entry = PriceHistory.objects.get(variant=variant)
        assert entry.change_type == 'price'
        assert entry.source == PriceHistory.SOURCE_BULK
        assert entry.changed_by == user
        assert (entry.old_price, entry.new_price) == (Decimal('50.00'), Decimal('60.00'))

    def test_missing_variant(self):
        with pytest.raises(VariantNotFoundError):
            DjangoVariantRepository().update(999, {'price': Decimal('1')})

    def test_unknown_field(self, variant):
        with pytest.raises(PersistenceError):
            DjangoVariantRepository().update(variant.pk, {'cost_price': Decimal('1')})

    def test_duplicate_sku(self, variant, product):
        Variant.objects.create(product=product, sku='CAM-2', price=Decimal('1'))
        with pytest.raises(ConflictError):
            DjangoVariantRepository().update(variant.pk, {'sku': 'CAM-2'})


class TestListing:

    def test_list_by_parent(self, product, other_product):
        Variant.objects.create(product=product, sku='A', price=Decimal('1'))
        Variant.objects.create(product=other_product, sku='B', price=Decimal('1'))
        Variant.objects.create(product=product, sku='C', price=Decimal('1'))
        assert [r.sku for r in DjangoVariantRepository().list_by_parent(product.pk)] == ['A', 'C']

    def test_get_many_keeps_requested_order(self, product):
        a = Variant.objects.create(product=product, sku='A', price=Decimal('1'))
        b = Variant.objects.create(product=product, sku='B', price=Decimal('1'))
        records = DjangoVariantRepository().get_many([b.pk, 12345, a.pk])
        assert [r.sku for r in records] == ['B', 'A']

    def test_legacy_variant_has_no_axis_values(self, product):
        Variant.objects.create(product=product, sku='OLD', price=Decimal('1'))
        record = DjangoVariantRepository().list_by_parent(product.pk)[0]
        assert record.axis_values is None
        assert not record.has_axis_values
