"""
Matrix reconstruction from stored variants.

Axes and their value domains are inferred from the variants themselves; no
external axis catalog is consulted. The result is either a Matrix (when at
least one variant carries axis values) or a FlatList (when none does).
Callers must handle both:

    view = reconstruct(variants)
    if view.kind == MATRIX:
        ...
    else:
        ...

Reconstruction is read-only and is never cached: callers re-run it after
every mutation.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from itertools import product as cartesian
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from .axes import axis_signature
from .pricing import round_price
from .repository import VariantRecord


MATRIX = 'matrix'
FLAT = 'flat'

LAYOUT_LINEAR = 'linear'
LAYOUT_TABLE = 'table'
LAYOUT_GROUPED = 'grouped'

FLAT_AXIS = 'Variant'


@dataclass(frozen=True)
class MatrixCell:
    combination: Mapping[str, str]
    variant_id: Any = None
    sku: Optional[str] = None
    price: Optional[Decimal] = None
    quantity: Optional[int] = None
    status: Optional[str] = None

    @property
    def is_missing(self) -> bool:
        return self.variant_id is None

    @classmethod
    def for_variant(cls, combination, variant: VariantRecord) -> 'MatrixCell':
        return cls(
            combination=combination,
            variant_id=variant.id,
            sku=variant.sku,
            price=variant.price,
            quantity=variant.quantity,
            status=variant.status,
        )


@dataclass(frozen=True)
class MatrixSummary:
    total_combinations: int
    created_count: int
    missing_count: int

    @classmethod
    def from_cells(cls, cells: Sequence[MatrixCell]) -> 'MatrixSummary':
        created = sum(1 for c in cells if not c.is_missing)
        return cls(len(cells), created, len(cells) - created)


@dataclass(frozen=True)
class MatrixStatistics:
    average_price: Optional[Decimal]
    min_price: Optional[Decimal]
    max_price: Optional[Decimal]
    total_stock: int
    out_of_stock: int

    @classmethod
    def from_cells(cls, cells: Sequence[MatrixCell]) -> 'MatrixStatistics':
        present = [c for c in cells if not c.is_missing]
        prices = [c.price for c in present if c.price is not None]
        average = None
        if prices:
            average = round_price(sum(prices) / len(prices))
        return cls(
            average_price=average,
            min_price=min(prices) if prices else None,
            max_price=max(prices) if prices else None,
            total_stock=sum(c.quantity or 0 for c in present),
            out_of_stock=sum(1 for c in present if not c.quantity),
        )


@dataclass(frozen=True)
class LinearLayout:
    axis: str
    cells: Tuple[MatrixCell, ...]
    kind: str = LAYOUT_LINEAR


@dataclass(frozen=True)
class TableLayout:
    row_axis: str
    column_axis: str
    row_values: Tuple[str, ...]
    column_values: Tuple[str, ...]
    # rows[i][j] is the cell for (row_values[i], column_values[j])
    rows: Tuple[Tuple[MatrixCell, ...], ...]
    kind: str = LAYOUT_TABLE


@dataclass(frozen=True)
class MatrixGroup:
    # Leading-axis values shared by every cell in the group
    label: Mapping[str, str]
    table: TableLayout

    @property
    def title(self) -> str:
        return ' / '.join(f"{k}: {v}" for k, v in self.label.items())


@dataclass(frozen=True)
class GroupedLayout:
    group_axes: Tuple[str, ...]
    groups: Tuple[MatrixGroup, ...]
    kind: str = LAYOUT_GROUPED


Layout = Union[LinearLayout, TableLayout, GroupedLayout]


@dataclass(frozen=True)
class Matrix:
    axes: Tuple[str, ...]
    axis_values: Mapping[str, Tuple[str, ...]]
    cells: Tuple[MatrixCell, ...]
    layout: Layout
    # Variants that could not be placed on a cell
    unplaced: Tuple[VariantRecord, ...] = ()
    kind: str = MATRIX

    @property
    def summary(self) -> MatrixSummary:
        return MatrixSummary.from_cells(self.cells)

    @property
    def statistics(self) -> MatrixStatistics:
        return MatrixStatistics.from_cells(self.cells)

    @property
    def missing_combinations(self) -> List[Mapping[str, str]]:
        return [c.combination for c in self.cells if c.is_missing]

    def cell(self, combination: Mapping[str, str]) -> Optional[MatrixCell]:
        wanted = axis_signature(combination)
        for c in self.cells:
            if axis_signature(c.combination) == wanted:
                return c
        return None


@dataclass(frozen=True)
class FlatList:
    """Degraded view: one single-axis entry per variant, no inferred structure."""
    cells: Tuple[MatrixCell, ...]
    axis: str = FLAT_AXIS
    kind: str = FLAT

    @property
    def axes(self) -> Tuple[str, ...]:
        return (self.axis,)

    @property
    def summary(self) -> MatrixSummary:
        return MatrixSummary.from_cells(self.cells)

    @property
    def statistics(self) -> MatrixStatistics:
        return MatrixStatistics.from_cells(self.cells)


MatrixView = Union[Matrix, FlatList]


def infer_axes(
    variants: Sequence[VariantRecord],
    axis_order: Optional[Sequence[str]] = None,
) -> Dict[str, List[str]]:
    """
    Distinct axis names and, per axis, distinct observed values, both in
    first-appearance order. Axis names listed in `axis_order` come first.
    """
    domains: Dict[str, List[str]] = {}
    for variant in variants:
        for name, value in (variant.axis_values or {}).items():
            values = domains.setdefault(str(name), [])
            value = str(value)
            if value not in values:
                values.append(value)

    if not axis_order:
        return domains
    ordered = {name: domains[name] for name in axis_order if name in domains}
    ordered.update((k, v) for k, v in domains.items() if k not in ordered)
    return ordered


def reconstruct(
    variants: Sequence[VariantRecord],
    axis_order: Optional[Sequence[str]] = None,
) -> MatrixView:
    variants = list(variants)
    if not any(v.has_axis_values for v in variants):
        return _flat_list(variants)

    domains = infer_axes(variants, axis_order)
    axes = tuple(domains)

    by_signature: Dict[str, VariantRecord] = {}
    unplaced = []
    for variant in variants:
        values = {str(k): str(v) for k, v in (variant.axis_values or {}).items()}
        if set(values) != set(axes):
            unplaced.append(variant)
            continue
        signature = axis_signature(values)
        if signature in by_signature:
            unplaced.append(variant)
            continue
        by_signature[signature] = variant

    cells = []
    for chosen in cartesian(*(domains[a] for a in axes)):
        combination = dict(zip(axes, chosen))
        variant = by_signature.get(axis_signature(combination))
        if variant is None:
            cells.append(MatrixCell(combination))
        else:
            cells.append(MatrixCell.for_variant(combination, variant))
    cells = tuple(cells)

    return Matrix(
        axes=axes,
        axis_values={a: tuple(domains[a]) for a in axes},
        cells=cells,
        layout=_layout(axes, domains, cells),
        unplaced=tuple(unplaced),
    )


def _flat_list(variants: Sequence[VariantRecord]) -> FlatList:
    return FlatList(cells=tuple(
        MatrixCell.for_variant({FLAT_AXIS: v.name or v.sku}, v)
        for v in variants
    ))


def _layout(axes, domains, cells) -> Layout:
    if len(axes) == 1:
        return LinearLayout(axis=axes[0], cells=cells)

    index = {axis_signature(c.combination): c for c in cells}

    def table(fixed: Mapping[str, str]) -> TableLayout:
        row_axis, column_axis = axes[-2], axes[-1]
        rows = tuple(
            tuple(
                index[axis_signature({**fixed, row_axis: r, column_axis: c})]
                for c in domains[column_axis]
            )
            for r in domains[row_axis]
        )
        return TableLayout(
            row_axis=row_axis,
            column_axis=column_axis,
            row_values=tuple(domains[row_axis]),
            column_values=tuple(domains[column_axis]),
            rows=rows,
        )

    if len(axes) == 2:
        return table({})

    group_axes = axes[:-2]
    groups = tuple(
        MatrixGroup(label=dict(zip(group_axes, chosen)), table=table(dict(zip(group_axes, chosen))))
        for chosen in cartesian(*(domains[a] for a in group_axes))
    )
    return GroupedLayout(group_axes=group_axes, groups=groups)
