"""
Variant generation & matrix reconciliation engine.

Framework-free: everything here works on plain dataclasses and talks to
storage only through a VariantRepository.

- Axis / AxisValue / Combination: variation dimensions and one pick per axis
- iter_combinations: lazy Cartesian product, first axis slowest
- SkuConfig / PricingConfig: identifier and price policies
- generate: idempotent, partial-failure-tolerant variant creation
- reconstruct: Matrix or FlatList view over stored variants
- update_cell / bulk_adjust_price / bulk_adjust_inventory: edits
"""

from .axes import Axis, AxisValue, Combination, axis_signature, validate_axes
from .catalog import AxisCatalogProvider, AxisTemplate
from .combinations import count_combinations, iter_combinations
from .exceptions import (
    CombinatorialExplosionWarning,
    ConflictError,
    PersistenceError,
    ValidationError,
    VariantEngineError,
    VariantNotFoundError,
)
from .generation import (
    GenerationOptions,
    GenerationResult,
    CombinationOutcome,
    generate,
    plan_variants,
    preview,
)
from .identifiers import SkuConfig, custom_sku_map
from .matrix import FlatList, Matrix, MatrixCell, MatrixSummary, reconstruct
from .mutations import bulk_adjust_inventory, bulk_adjust_price, update_cell
from .pricing import PriceAdjustment, PricingConfig, apply_price_adjustment, compute_price
from .repository import GeneratedVariantRequest, ParentItem, VariantRecord, VariantRepository

__all__ = [
    'Axis',
    'AxisValue',
    'Combination',
    'axis_signature',
    'validate_axes',
    'AxisCatalogProvider',
    'AxisTemplate',
    'count_combinations',
    'iter_combinations',
    'CombinatorialExplosionWarning',
    'ConflictError',
    'PersistenceError',
    'ValidationError',
    'VariantEngineError',
    'VariantNotFoundError',
    'GenerationOptions',
    'GenerationResult',
    'CombinationOutcome',
    'generate',
    'plan_variants',
    'preview',
    'SkuConfig',
    'custom_sku_map',
    'FlatList',
    'Matrix',
    'MatrixCell',
    'MatrixSummary',
    'reconstruct',
    'bulk_adjust_inventory',
    'bulk_adjust_price',
    'update_cell',
    'PriceAdjustment',
    'PricingConfig',
    'apply_price_adjustment',
    'compute_price',
    'GeneratedVariantRequest',
    'ParentItem',
    'VariantRecord',
    'VariantRepository',
]
