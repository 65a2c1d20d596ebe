"""
Generation orchestrator.

Turns axes plus pricing/SKU configuration into variant-creation requests,
skips combinations that already exist and drives the persistence
collaborator one combination at a time.

Example:
    result = generate(
        repository,
        ParentItem(id=1, sku='P1', name='Shirt', base_price=Decimal('50')),
        [Axis.from_values('Size', ['S', 'M']), Axis.from_values('Color', ['Red', 'Blue'])],
        PricingConfig(),
        SkuConfig(strategy=SKU_SEQUENTIAL),
    )
    result.created_count  # 4
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .axes import Axis, Combination, validate_axes
from .combinations import count_combinations, iter_combinations
from .exceptions import (
    CombinatorialExplosionWarning,
    ConflictError,
    PersistenceError,
    ValidationError,
)
from .identifiers import SkuConfig, derive_name, derive_sku
from .pricing import PricingConfig, compute_price, price_summary
from .repository import GeneratedVariantRequest, ParentItem, VariantRecord, VariantRepository


logger = logging.getLogger(__name__)

DEFAULT_MAX_COMBINATIONS = 300

OUTCOME_CREATED = 'created'
OUTCOME_SKIPPED = 'skipped'
OUTCOME_FAILED = 'failed'


@dataclass(frozen=True)
class GenerationOptions:
    skip_existing: bool = True
    inherit_fields: Sequence[str] = ()
    default_attributes: Mapping[str, Any] = field(default_factory=dict)
    initial_status: str = 'draft'
    default_quantity: int = 0
    # {combination key: quantity}
    custom_quantities: Mapping[str, int] = field(default_factory=dict)
    track_inventory: bool = True
    low_stock_threshold: Optional[int] = None
    max_combinations: int = DEFAULT_MAX_COMBINATIONS
    confirm_large: bool = False

    def __post_init__(self):
        if self.max_combinations is not None and self.max_combinations < 1:
            raise ValidationError('max_combinations must be positive')
        if self.default_quantity < 0:
            raise ValidationError('default_quantity must not be negative')
        for key, quantity in (self.custom_quantities or {}).items():
            if int(quantity) < 0:
                raise ValidationError(f"Quantity for {key!r} must not be negative")

    def quantity_for(self, combination: Combination) -> int:
        return int(self.custom_quantities.get(combination.key, self.default_quantity))


@dataclass
class CombinationOutcome:
    combination: Combination
    status: str
    variant: Optional[VariantRecord] = None
    error: Optional[Exception] = None

    @property
    def reason(self) -> str:
        return str(self.error) if self.error else ''


@dataclass
class GenerationResult:
    outcomes: List[CombinationOutcome] = field(default_factory=list)

    def _select(self, status):
        return [o for o in self.outcomes if o.status == status]

    @property
    def created(self) -> List[VariantRecord]:
        return [o.variant for o in self._select(OUTCOME_CREATED)]

    @property
    def skipped(self) -> List[Combination]:
        return [o.combination for o in self._select(OUTCOME_SKIPPED)]

    @property
    def failed(self) -> List[CombinationOutcome]:
        return self._select(OUTCOME_FAILED)

    @property
    def created_count(self) -> int:
        return len(self._select(OUTCOME_CREATED))

    @property
    def skipped_count(self) -> int:
        return len(self._select(OUTCOME_SKIPPED))

    @property
    def failed_count(self) -> int:
        return len(self._select(OUTCOME_FAILED))

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def is_partial_failure(self) -> bool:
        return 0 < self.failed_count < self.total

    @property
    def is_total_failure(self) -> bool:
        return self.total > 0 and self.failed_count == self.total


def check_combination_limit(axes: Sequence[Axis], options: GenerationOptions) -> int:
    total = count_combinations(axes)
    limit = options.max_combinations
    if limit is not None and total > limit and not options.confirm_large:
        raise CombinatorialExplosionWarning(total, limit)
    return total


def plan_variants(
    parent: ParentItem,
    axes: Sequence[Axis],
    pricing: PricingConfig,
    sku: SkuConfig,
    options: GenerationOptions,
) -> List[GeneratedVariantRequest]:
    """
    Build every creation request up front. Any validation failure here
    aborts the request before the collaborator is called.
    """
    validate_axes(axes)
    total = check_combination_limit(axes, options)
    base_price = pricing.resolve_base_price(parent)

    inherited = {
        name: parent.fields[name]
        for name in options.inherit_fields
        if name in parent.fields
    }

    requests = []
    seen_keys = {}
    seen_skus = {}
    for combination in iter_combinations(axes):
        # Custom prices, SKUs and quantities are looked up by key
        if combination.key in seen_keys:
            raise ValidationError(
                f"Combinations {seen_keys[combination.key]!r} and {combination.as_dict()!r} "
                f"share the key {combination.key!r}"
            )
        seen_keys[combination.key] = combination.as_dict()

        variant_sku = derive_sku(sku, parent, combination, total)
        if variant_sku in seen_skus:
            raise ValidationError(
                f"SKU {variant_sku!r} is derived for both {seen_skus[variant_sku]!r} "
                f"and {combination.key!r}"
            )
        seen_skus[variant_sku] = combination.key

        requests.append(GeneratedVariantRequest(
            combination=combination,
            sku=variant_sku,
            name=derive_name(sku, parent, combination),
            price=compute_price(pricing, base_price, combination),
            quantity=options.quantity_for(combination),
            status=options.initial_status,
            inherited_fields=dict(inherited),
            attributes=dict(options.default_attributes),
            track_inventory=options.track_inventory,
            low_stock_threshold=options.low_stock_threshold,
        ))
    return requests


def preview(parent, axes, pricing, sku, options=None) -> Dict[str, Any]:
    """Describe what a generation would create without calling the collaborator."""
    options = options or GenerationOptions()
    requests = plan_variants(parent, axes, pricing, sku, options)
    return {
        'total': len(requests),
        'price_range': price_summary(r.price for r in requests),
        'requests': requests,
    }


def generate(
    repository: VariantRepository,
    parent: ParentItem,
    axes: Sequence[Axis],
    pricing: Optional[PricingConfig] = None,
    sku: Optional[SkuConfig] = None,
    options: Optional[GenerationOptions] = None,
) -> GenerationResult:
    pricing = pricing or PricingConfig()
    sku = sku or SkuConfig()
    options = options or GenerationOptions()

    requests = plan_variants(parent, axes, pricing, sku, options)
    logger.info(
        "Generating %d variant combinations for parent %s", len(requests), parent.id
    )

    result = GenerationResult()
    for request in requests:
        result.outcomes.append(_materialize(repository, parent, request, options))

    logger.info(
        "Generated variants for parent %s: %d created, %d skipped, %d failed",
        parent.id, result.created_count, result.skipped_count, result.failed_count,
    )
    return result


def _materialize(repository, parent, request, options) -> CombinationOutcome:
    combination = request.combination
    try:
        if options.skip_existing:
            existing = repository.find_by_parent_and_axis_signature(
                parent.id, request.signature
            )
            if existing is not None:
                logger.debug("Skipping existing combination %s", combination.key)
                return CombinationOutcome(combination, OUTCOME_SKIPPED, existing)

        variant = repository.create(parent.id, request)
        return CombinationOutcome(combination, OUTCOME_CREATED, variant)

    except ConflictError as e:
        # Another run created it between the existence check and the write
        logger.debug("Combination %s created concurrently", combination.key)
        return CombinationOutcome(combination, OUTCOME_SKIPPED, error=e)
    except PersistenceError as e:
        logger.warning("Failed to create variant %s: %s", request.sku, e)
        return CombinationOutcome(combination, OUTCOME_FAILED, error=e)
