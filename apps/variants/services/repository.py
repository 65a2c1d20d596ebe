"""
Django ORM implementation of the engine's persistence collaborator.
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional

from django.db import DatabaseError, IntegrityError, transaction

from apps.variants.engine import (
    ConflictError,
    GeneratedVariantRequest,
    PersistenceError,
    VariantNotFoundError,
    VariantRecord,
    VariantRepository,
)
from apps.variants.models import PriceHistory, Product, Variant


logger = logging.getLogger(__name__)

# Engine field name -> Variant model field
FIELD_MAP = {
    'sku': 'sku',
    'name': 'name',
    'price': 'price',
    'quantity': 'stock_quantity',
    'status': 'status',
}


def to_record(variant: Variant) -> VariantRecord:
    return VariantRecord(
        id=variant.pk,
        sku=variant.sku,
        name=variant.name,
        price=variant.price,
        quantity=variant.stock_quantity,
        status=variant.status,
        axis_values=variant.axis_values or None,
    )


class DjangoVariantRepository(VariantRepository):
    """
    Stores generated variants as Variant rows.

    `source` and `user` tag the PriceHistory rows written when an update
    changes a price.
    """

    def __init__(self, source=PriceHistory.SOURCE_MANUAL, user=None):
        self.source = source
        self.user = user

    def find_by_parent_and_axis_signature(self, parent_id, signature: str) -> Optional[VariantRecord]:
        try:
            variant = Variant.objects.filter(
                product_id=parent_id,
                axis_signature=signature,
            ).first()
        except DatabaseError as e:
            raise PersistenceError(f"Could not look up combination {signature}: {e}", cause=e)
        return to_record(variant) if variant else None

    def create(self, parent_id, request: GeneratedVariantRequest) -> VariantRecord:
        model_fields = {}
        attributes = dict(request.attributes)
        for name, value in request.inherited_fields.items():
            if name in Product.INHERITABLE_FIELDS:
                model_fields[name] = value
            else:
                attributes[name] = value
        if request.low_stock_threshold is not None:
            model_fields['low_stock_threshold'] = request.low_stock_threshold

        try:
            # Savepoint, so one failed insert does not poison the outer transaction
            with transaction.atomic():
                variant = Variant.objects.create(
                    product_id=parent_id,
                    sku=request.sku,
                    name=request.name,
                    price=request.price,
                    stock_quantity=request.quantity,
                    status=request.status,
                    track_inventory=request.track_inventory,
                    attributes=attributes,
                    axis_values=request.axis_values,
                    **model_fields
                )
        except IntegrityError as e:
            if self.find_by_parent_and_axis_signature(parent_id, request.signature) is not None:
                raise ConflictError(
                    f"Combination {request.combination.key} already exists",
                    signature=request.signature,
                )
            raise PersistenceError(f"Could not create variant {request.sku}: {e}", cause=e)
        except DatabaseError as e:
            raise PersistenceError(f"Could not create variant {request.sku}: {e}", cause=e)

        logger.debug("Created variant %s (%s)", variant.sku, request.combination.key)
        return to_record(variant)

    def update(self, variant_id, fields: Mapping[str, Any]) -> VariantRecord:
        unknown = [name for name in fields if name not in FIELD_MAP]
        if unknown:
            raise PersistenceError(f"Cannot update fields: {', '.join(unknown)}")

        try:
            with transaction.atomic():
                try:
                    variant = Variant.objects.select_for_update().get(pk=variant_id)
                except Variant.DoesNotExist:
                    raise VariantNotFoundError([variant_id])

                for name, value in fields.items():
                    setattr(variant, FIELD_MAP[name], value)
                variant._price_change_source = self.source
                variant._changed_by = self.user
                variant.save(update_fields=[FIELD_MAP[name] for name in fields] + ['updated_at'])
        except IntegrityError as e:
            raise ConflictError(f"Could not update variant {variant_id}: {e}")
        except DatabaseError as e:
            raise PersistenceError(f"Could not update variant {variant_id}: {e}", cause=e)

        return to_record(variant)

    def list_by_parent(self, parent_id) -> List[VariantRecord]:
        return [
            to_record(v)
            for v in Variant.objects.filter(product_id=parent_id).order_by('id')
        ]

    def get_many(self, variant_ids: Iterable) -> List[VariantRecord]:
        ids = list(variant_ids)
        found = Variant.objects.in_bulk(ids)
        return [to_record(found[i]) for i in ids if i in found]
