"""
Price computation for generated variants.

All arithmetic is done on Decimals and rounded once, at the end, to two
decimal places with ROUND_HALF_UP.
"""

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Mapping, Optional

from .axes import ADJUSTMENT_FIXED, ADJUSTMENT_PERCENTAGE, Combination, to_decimal
from .exceptions import ValidationError


PRICING_FIXED = 'fixed'
PRICING_PERCENTAGE_INCREASE = 'percentage_increase'
PRICING_AXIS_BASED = 'axis_based'
PRICING_CUSTOM = 'custom'
PRICING_STRATEGIES = (
    PRICING_FIXED,
    PRICING_PERCENTAGE_INCREASE,
    PRICING_AXIS_BASED,
    PRICING_CUSTOM,
)

PERCENTAGE_INCREMENTAL = 'incremental'
PERCENTAGE_UNIFORM = 'uniform'
PERCENTAGE_MODES = (PERCENTAGE_INCREMENTAL, PERCENTAGE_UNIFORM)

ADJUSTMENT_ABSOLUTE = 'absolute'
PRICE_ADJUSTMENT_TYPES = (ADJUSTMENT_FIXED, ADJUSTMENT_PERCENTAGE, ADJUSTMENT_ABSOLUTE)

CENT = Decimal('0.01')
HUNDRED = Decimal('100')


def round_price(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class PricingConfig:
    strategy: str = PRICING_FIXED
    # Overrides the parent's base price when given
    base_price: Optional[Decimal] = None
    percentage: Decimal = Decimal('0')
    percentage_mode: str = PERCENTAGE_INCREMENTAL
    # CUSTOM: {combination key: price}
    custom_prices: Mapping[str, Decimal] = field(default_factory=dict)

    def __post_init__(self):
        if self.strategy not in PRICING_STRATEGIES:
            raise ValidationError(f"Unknown pricing strategy: {self.strategy!r}")
        if self.percentage_mode not in PERCENTAGE_MODES:
            raise ValidationError(f"Unknown percentage mode: {self.percentage_mode!r}")
        if self.base_price is not None:
            base = to_decimal(self.base_price, 'base price')
            if base < 0:
                raise ValidationError('Base price must not be negative')
            object.__setattr__(self, 'base_price', base)
        object.__setattr__(self, 'percentage', to_decimal(self.percentage, 'percentage'))
        object.__setattr__(self, 'custom_prices', {
            str(k): to_decimal(v, f"custom price for {k!r}")
            for k, v in (self.custom_prices or {}).items()
        })

    def resolve_base_price(self, parent) -> Decimal:
        if self.base_price is not None:
            return self.base_price
        base = to_decimal(parent.base_price if parent.base_price is not None else 0, 'base price')
        if base < 0:
            raise ValidationError('Base price must not be negative')
        return base


def apply_axis_adjustments(price: Decimal, combination: Combination) -> Decimal:
    """Apply each chosen value's adjustment in axis declaration order."""
    for _, choice in combination.items_in_order():
        if not choice.has_adjustment:
            continue
        if choice.adjustment_type == ADJUSTMENT_PERCENTAGE:
            price = price * (1 + choice.price_adjustment / HUNDRED)
        else:
            price = price + choice.price_adjustment
    return price


def compute_price(config: PricingConfig, base_price: Decimal, combination: Combination) -> Decimal:
    """
    Price for one combination under the configured strategy.

    Raises ValidationError if the result is negative; prices are never
    clamped.
    """
    base = to_decimal(base_price, 'base price')

    if config.strategy == PRICING_FIXED:
        price = base
    elif config.strategy == PRICING_PERCENTAGE_INCREASE:
        if config.percentage_mode == PERCENTAGE_INCREMENTAL:
            # Linear: ordinal 0 is the base, each step adds one more pct unit
            price = base * (1 + config.percentage * combination.ordinal / HUNDRED)
        else:
            price = base * (1 + config.percentage / HUNDRED)
    elif config.strategy == PRICING_AXIS_BASED:
        price = apply_axis_adjustments(base, combination)
    else:
        price = config.custom_prices.get(combination.key, base)

    price = round_price(price)
    if price < 0:
        raise ValidationError(
            f"Computed price {price} for combination {combination.key!r} is negative"
        )
    return price


def apply_price_adjustment(current_price, adjustment_type: str, value) -> Decimal:
    """
    Adjust an existing price.

    fixed adds `value`, percentage multiplies by (1 + value/100), absolute
    replaces the price with `value`.
    """
    if adjustment_type not in PRICE_ADJUSTMENT_TYPES:
        raise ValidationError(f"Unknown price adjustment type: {adjustment_type!r}")
    current = to_decimal(current_price if current_price is not None else 0, 'price')
    amount = to_decimal(value, 'adjustment value')

    if adjustment_type == ADJUSTMENT_FIXED:
        price = current + amount
    elif adjustment_type == ADJUSTMENT_PERCENTAGE:
        price = current * (1 + amount / HUNDRED)
    else:
        price = amount
    return round_price(price)


def price_summary(prices) -> Dict[str, Optional[Decimal]]:
    prices = list(prices)
    if not prices:
        return {'min': None, 'max': None}
    return {'min': min(prices), 'max': max(prices)}


@dataclass(frozen=True)
class PriceAdjustment:
    """Adjustment applied to an existing price: fixed, percentage or absolute."""
    type: str
    value: Decimal

    def __post_init__(self):
        if self.type not in PRICE_ADJUSTMENT_TYPES:
            raise ValidationError(f"Unknown price adjustment type: {self.type!r}")
        object.__setattr__(self, 'value', to_decimal(self.value, 'adjustment value'))

    def apply(self, price) -> Decimal:
        return apply_price_adjustment(price, self.type, self.value)
