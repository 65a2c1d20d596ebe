"""
SKU and display-name derivation for generated variants.

Every function here is a pure function of (parent, combination, ordinal,
total): re-running a generation with the same inputs gives the same SKUs,
which is what lets idempotent re-runs line up with existing variants.
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional

from .axes import Combination
from .exceptions import ValidationError


SKU_PATTERN = 'pattern'
SKU_SEQUENTIAL = 'sequential'
SKU_CUSTOM = 'custom'
SKU_STRATEGIES = (SKU_PATTERN, SKU_SEQUENTIAL, SKU_CUSTOM)

DEFAULT_SKU_PATTERN = '{parent}-{axes}'
DEFAULT_NAME_PATTERN = '{parent} - {values}'

_WHITESPACE = re.compile(r'\s+')


@dataclass(frozen=True)
class SkuConfig:
    strategy: str = SKU_PATTERN
    pattern: str = DEFAULT_SKU_PATTERN
    name_pattern: str = DEFAULT_NAME_PATTERN
    # CUSTOM: called as custom(parent, combination) -> str
    custom: Optional[Callable] = None

    def __post_init__(self):
        if self.strategy not in SKU_STRATEGIES:
            raise ValidationError(f"Unknown SKU strategy: {self.strategy!r}")
        if self.strategy == SKU_CUSTOM and not callable(self.custom):
            raise ValidationError('CUSTOM SKU strategy requires a callable')
        if self.strategy == SKU_PATTERN and not (self.pattern or '').strip():
            raise ValidationError('PATTERN SKU strategy requires a pattern')


def render_sku_pattern(pattern: str, parent_sku: str, combination: Combination) -> str:
    sku = pattern.replace('{parent}', parent_sku)
    sku = sku.replace('{axes}', '-'.join(v.upper() for v in combination.values_in_order))
    for axis_name, value in combination.items():
        sku = sku.replace('{%s}' % axis_name, value.upper())
    return _WHITESPACE.sub('-', sku.strip())


def sequential_sku(parent_sku: str, ordinal: int, total: int) -> str:
    width = len(str(max(total, 1)))
    return f"{parent_sku}-{ordinal + 1:0{width}d}"


def derive_sku(config: SkuConfig, parent, combination: Combination, total: int) -> str:
    if config.strategy == SKU_PATTERN:
        sku = render_sku_pattern(config.pattern, parent.sku, combination)
    elif config.strategy == SKU_SEQUENTIAL:
        sku = sequential_sku(parent.sku, combination.ordinal, total)
    else:
        sku = config.custom(parent, combination)

    if not isinstance(sku, str) or not sku.strip():
        raise ValidationError(f"Empty SKU derived for combination {combination.key!r}")
    return sku.strip()


def derive_name(config: SkuConfig, parent, combination: Combination) -> str:
    name = config.name_pattern.replace('{parent}', parent.name)
    name = name.replace('{values}', ' '.join(combination.values_in_order))
    name = name.replace('{axes}', ' / '.join(combination.values_in_order))
    for axis_name, value in combination.items():
        name = name.replace('{%s}' % axis_name, value)
    return name.strip()


def custom_sku_map(skus, fallback_pattern: str = DEFAULT_SKU_PATTERN) -> Callable:
    """
    Build a CUSTOM strategy callable from a {combination key: sku} map,
    falling back to a pattern for combinations the map does not name.
    """
    skus = dict(skus or {})

    def _lookup(parent, combination):
        if combination.key in skus:
            return skus[combination.key]
        return render_sku_pattern(fallback_pattern, parent.sku, combination)

    return _lookup
