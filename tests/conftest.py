"""Pytest configuration and shared fixtures."""

import itertools
from dataclasses import replace
from decimal import Decimal

import pytest

from apps.variants.engine import (
    Axis,
    AxisValue,
    ConflictError,
    ParentItem,
    PersistenceError,
    VariantNotFoundError,
    VariantRecord,
    VariantRepository,
    axis_signature,
)


class InMemoryVariantRepository(VariantRepository):
    """
    Dict-backed repository for engine tests.

    `fail_skus` makes create() raise PersistenceError for those SKUs.
    `race_signatures` simulates a concurrent run: the existence check misses
    the combination but create() reports a conflict.
    """

    def __init__(self):
        self.rows = {}
        self.parents = {}
        self.fail_skus = set()
        self.race_signatures = set()
        self.create_calls = 0
        self.update_calls = 0
        self._ids = itertools.count(1)

    def add(self, parent_id, sku, **fields):
        record = VariantRecord(id=next(self._ids), sku=sku, **fields)
        self.rows[record.id] = record
        self.parents[record.id] = parent_id
        return record

    def _signature_taken(self, parent_id, signature):
        return any(
            self.parents[r.id] == parent_id
            and r.axis_values
            and axis_signature(r.axis_values) == signature
            for r in self.rows.values()
        )

    def find_by_parent_and_axis_signature(self, parent_id, signature):
        if signature in self.race_signatures:
            return None
        for record in self.rows.values():
            if (self.parents[record.id] == parent_id and record.axis_values
                    and axis_signature(record.axis_values) == signature):
                return record
        return None

    def create(self, parent_id, request):
        self.create_calls += 1
        if request.sku in self.fail_skus:
            raise PersistenceError(f"Storage unavailable for {request.sku}")
        if request.signature in self.race_signatures or self._signature_taken(parent_id, request.signature):
            raise ConflictError(signature=request.signature)
        return self.add(
            parent_id,
            request.sku,
            name=request.name,
            price=request.price,
            quantity=request.quantity,
            status=request.status,
            axis_values=request.axis_values,
        )

    def update(self, variant_id, fields):
        self.update_calls += 1
        if variant_id not in self.rows:
            raise VariantNotFoundError([variant_id])
        record = replace(self.rows[variant_id], **fields)
        self.rows[variant_id] = record
        return record

    def list_by_parent(self, parent_id):
        return [r for r in self.rows.values() if self.parents[r.id] == parent_id]

    def get_many(self, variant_ids):
        return [self.rows[i] for i in variant_ids if i in self.rows]


@pytest.fixture
def repository():
    return InMemoryVariantRepository()


@pytest.fixture
def parent():
    return ParentItem(
        id=1,
        sku='SHIRT',
        name='Shirt',
        base_price=Decimal('100.00'),
        fields={'description': 'Cotton tee', 'brand': 'Acme'},
    )


@pytest.fixture
def size_color_axes():
    return [
        Axis.from_values('Size', ['S', 'M']),
        Axis.from_values('Color', ['Red', 'Blue']),
    ]


@pytest.fixture
def priced_axes():
    return [
        Axis('Size', (AxisValue('M'), AxisValue('L', Decimal('20'), 'fixed'))),
        Axis('Color', (AxisValue('Blue'), AxisValue('Red', Decimal('10'), 'percentage'))),
    ]


# Django fixtures

@pytest.fixture
def product(db):
    from apps.variants.models import Product
    return Product.objects.create(
        name='Camiseta Básica',
        sku='CAM',
        price=Decimal('50.00'),
        description='Camiseta de algodão',
        brand='Básicos',
    )


@pytest.fixture
def other_product(db):
    from apps.variants.models import Product
    return Product.objects.create(name='Calça Jeans', sku='CJN', price=Decimal('150.00'))


@pytest.fixture
def template(db):
    from apps.variants.models import VariantTemplate
    return VariantTemplate.objects.create(
        name='Storage Capacity',
        axis_name='Storage',
        values=['128GB', '256GB', '512GB'],
        metadata={'suggested_pricing': {'strategy': 'percentage', 'adjustments': {'512GB': 25}}},
        is_global=True,
    )


@pytest.fixture
def api_client():
    from rest_framework.test import APIClient
    return APIClient()
