"""
In-memory representation of variation axes and their combinations.

Example:
    size = Axis('Size', [AxisValue('S'), AxisValue('L', Decimal('20'), 'fixed')])
    color = Axis.from_values('Color', ['Red', 'Blue'])
"""

import json
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from .exceptions import ValidationError


ADJUSTMENT_FIXED = 'fixed'
ADJUSTMENT_PERCENTAGE = 'percentage'
AXIS_ADJUSTMENT_TYPES = (ADJUSTMENT_FIXED, ADJUSTMENT_PERCENTAGE)


def to_decimal(value, label='value') -> Decimal:
    """Convert ints, floats, strings and Decimals to a finite Decimal."""
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {label}: {value!r}")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            # str() keeps floats like 0.1 from dragging binary noise along
            result = Decimal(str(value))
        except (InvalidOperation, ValueError, TypeError):
            raise ValidationError(f"Invalid {label}: {value!r}")
    if not result.is_finite():
        raise ValidationError(f"Invalid {label}: {value!r}")
    return result


@dataclass(frozen=True)
class AxisValue:
    value: str
    price_adjustment: Optional[Decimal] = None
    adjustment_type: str = ADJUSTMENT_FIXED

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValidationError(f"Axis value must be a non-empty string, got {self.value!r}")
        if self.adjustment_type not in AXIS_ADJUSTMENT_TYPES:
            raise ValidationError(f"Unknown adjustment type: {self.adjustment_type!r}")
        if self.price_adjustment is not None:
            object.__setattr__(
                self, 'price_adjustment',
                to_decimal(self.price_adjustment, 'price adjustment'),
            )

    @property
    def has_adjustment(self) -> bool:
        return bool(self.price_adjustment)


@dataclass(frozen=True)
class Axis:
    """A named variation dimension. The order of `values` is significant."""
    name: str
    values: Tuple[AxisValue, ...] = ()

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValidationError(f"Axis name must be a non-empty string, got {self.name!r}")
        values = tuple(
            v if isinstance(v, AxisValue) else AxisValue(v)
            for v in self.values
        )
        seen = set()
        for v in values:
            if v.value in seen:
                raise ValidationError(f"Duplicate value {v.value!r} on axis {self.name!r}")
            seen.add(v.value)
        object.__setattr__(self, 'values', values)

    @classmethod
    def from_values(cls, name: str, values: Iterable[str]) -> 'Axis':
        return cls(name, tuple(AxisValue(v) for v in values))

    def __len__(self):
        return len(self.values)

    def get(self, value: str) -> Optional[AxisValue]:
        for v in self.values:
            if v.value == value:
                return v
        return None

    @property
    def value_names(self) -> List[str]:
        return [v.value for v in self.values]


def validate_axes(axes: Sequence[Axis]) -> None:
    """
    Validate a generation request's axes: at least one axis, unique names,
    and every axis carrying at least one value.
    """
    if not axes:
        raise ValidationError('At least one axis is required')
    names = set()
    for axis in axes:
        if not isinstance(axis, Axis):
            raise ValidationError(f"Expected Axis, got {type(axis).__name__}")
        if axis.name in names:
            raise ValidationError(f"Duplicate axis name: {axis.name!r}")
        names.add(axis.name)
        if not axis.values:
            raise ValidationError(f"Axis {axis.name!r} has no values")


def axis_signature(axis_values: Mapping[str, str]) -> str:
    """
    Order-independent identity of an axis-value mapping.
    {'Size': 'M', 'Color': 'Blue'} and {'Color': 'Blue', 'Size': 'M'}
    share the same signature.
    """
    pairs = sorted((str(k), str(v)) for k, v in axis_values.items())
    return json.dumps(pairs, ensure_ascii=False, separators=(',', ':'))


@dataclass(frozen=True)
class Combination(Mapping):
    """
    One chosen value per declared axis, in axis declaration order.

    Built from the axes themselves, so a combination that misses an axis or
    names a value the axis does not declare cannot exist.
    """
    axes: Tuple[Axis, ...]
    choices: Tuple[AxisValue, ...]
    ordinal: int = 0
    _lookup: Dict[str, AxisValue] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        if len(self.axes) != len(self.choices):
            raise ValidationError(
                f"Combination needs exactly one value per axis "
                f"({len(self.axes)} axes, {len(self.choices)} values)"
            )
        for axis, choice in zip(self.axes, self.choices):
            if axis.get(choice.value) is None:
                raise ValidationError(
                    f"Value {choice.value!r} is not declared on axis {axis.name!r}"
                )
        object.__setattr__(
            self, '_lookup',
            {axis.name: choice for axis, choice in zip(self.axes, self.choices)},
        )

    @classmethod
    def from_mapping(cls, axes: Sequence[Axis], values: Mapping[str, str], ordinal: int = 0) -> 'Combination':
        missing = [a.name for a in axes if a.name not in values]
        extra = [k for k in values if k not in {a.name for a in axes}]
        if missing or extra:
            raise ValidationError(
                f"Combination must name every axis exactly once "
                f"(missing={missing}, unknown={extra})"
            )
        choices = []
        for axis in axes:
            choice = axis.get(values[axis.name])
            if choice is None:
                raise ValidationError(
                    f"Value {values[axis.name]!r} is not declared on axis {axis.name!r}"
                )
            choices.append(choice)
        return cls(tuple(axes), tuple(choices), ordinal)

    # Mapping protocol: axis name -> chosen value string
    def __getitem__(self, axis_name: str) -> str:
        return self._lookup[axis_name].value

    def __iter__(self) -> Iterator[str]:
        return (axis.name for axis in self.axes)

    def __len__(self) -> int:
        return len(self.axes)

    def __hash__(self):
        return hash((self.signature, self.ordinal))

    def choice(self, axis_name: str) -> AxisValue:
        return self._lookup[axis_name]

    def items_in_order(self) -> List[Tuple[Axis, AxisValue]]:
        return list(zip(self.axes, self.choices))

    @property
    def values_in_order(self) -> List[str]:
        return [c.value for c in self.choices]

    @property
    def key(self) -> str:
        """Caller-facing key, values joined in declaration order: 'Red-Large'."""
        return '-'.join(self.values_in_order)

    @property
    def signature(self) -> str:
        return axis_signature(self.as_dict())

    def as_dict(self) -> Dict[str, str]:
        return {axis.name: choice.value for axis, choice in zip(self.axes, self.choices)}

    def __repr__(self):
        return f"Combination({self.as_dict()!r}, ordinal={self.ordinal})"
