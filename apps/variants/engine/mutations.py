"""
Cell-level and bulk edits over existing variants.

Nothing here patches a matrix in memory: after a successful edit the caller
rebuilds the matrix from the repository.
"""

import logging
from typing import Iterable, List

from .axes import to_decimal
from .exceptions import ValidationError, VariantNotFoundError
from .pricing import PriceAdjustment, round_price
from .repository import VariantRecord, VariantRepository


logger = logging.getLogger(__name__)

CELL_FIELDS = ('sku', 'price', 'quantity')

INVENTORY_SET = 'set'
INVENTORY_INCREMENT = 'increment'
INVENTORY_DECREMENT = 'decrement'
INVENTORY_OPERATIONS = (INVENTORY_SET, INVENTORY_INCREMENT, INVENTORY_DECREMENT)


def whole_number(value, label='value') -> int:
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {label}: {value!r}")
    number = to_decimal(value, label)
    if number != number.to_integral_value():
        raise ValidationError(f"{label.capitalize()} must be a whole number, got {value!r}")
    return int(number)


def clean_cell_value(field: str, value):
    if field not in CELL_FIELDS:
        raise ValidationError(f"Field {field!r} cannot be edited from the matrix")

    if field == 'sku':
        if not isinstance(value, str) or not value.strip():
            raise ValidationError('SKU must be a non-empty string')
        return value.strip()

    if field == 'price':
        price = round_price(to_decimal(value, 'price'))
        if price < 0:
            raise ValidationError('Price must not be negative')
        return price

    quantity = whole_number(value, 'quantity')
    if quantity < 0:
        raise ValidationError('Quantity must not be negative')
    return quantity


def update_cell(repository: VariantRepository, variant_id, field: str, value) -> VariantRecord:
    cleaned = clean_cell_value(field, value)
    return repository.update(variant_id, {field: cleaned})


def _load_selection(repository, variant_ids) -> List[VariantRecord]:
    ids = list(dict.fromkeys(variant_ids or []))
    if not ids:
        raise ValidationError('Select at least one variant')
    records = repository.get_many(ids)
    found = {r.id for r in records}
    missing = [i for i in ids if i not in found]
    if missing:
        raise VariantNotFoundError(missing)
    return records


def bulk_adjust_price(
    repository: VariantRepository,
    variant_ids: Iterable,
    adjustment: PriceAdjustment,
) -> List[VariantRecord]:
    """
    Adjust the price of each selected variant relative to its own current
    price. All new prices are computed before the first write, so a negative
    result leaves every variant untouched.
    """
    records = _load_selection(repository, variant_ids)

    new_prices = []
    for record in records:
        price = adjustment.apply(record.price)
        if price < 0:
            raise ValidationError(
                f"Adjustment would make the price of {record.sku} negative ({price})"
            )
        new_prices.append((record, price))

    logger.info(
        "Adjusting price of %d variants (%s %s)", len(records), adjustment.type, adjustment.value
    )
    return [repository.update(record.id, {'price': price}) for record, price in new_prices]


def adjust_quantity(current: int, operation: str, value: int) -> int:
    if operation not in INVENTORY_OPERATIONS:
        raise ValidationError(f"Unknown inventory operation: {operation!r}")
    current = current or 0
    if operation == INVENTORY_SET:
        quantity = value
    elif operation == INVENTORY_INCREMENT:
        quantity = current + value
    else:
        quantity = current - value
    # Stock never goes below zero
    return max(0, quantity)


def bulk_adjust_inventory(
    repository: VariantRepository,
    variant_ids: Iterable,
    operation: str,
    value,
) -> List[VariantRecord]:
    if operation not in INVENTORY_OPERATIONS:
        raise ValidationError(f"Unknown inventory operation: {operation!r}")
    value = whole_number(value, 'inventory value')

    records = _load_selection(repository, variant_ids)
    logger.info("Adjusting inventory of %d variants (%s %d)", len(records), operation, value)
    return [
        repository.update(record.id, {'quantity': adjust_quantity(record.quantity, operation, value)})
        for record in records
    ]
