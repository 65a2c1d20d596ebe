"""
Pluggable source of reusable axis definitions ("variant templates").

Templates such as "Clothing Sizes" or "Storage Capacity" are authored and
stored elsewhere; the engine only needs to turn one into an Axis.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence

from .axes import ADJUSTMENT_FIXED, AXIS_ADJUSTMENT_TYPES, Axis, AxisValue


@dataclass(frozen=True)
class AxisTemplate:
    id: Any
    name: str
    axis_name: str
    values: Sequence[str]
    # {value: amount}, applied with `adjustment_type`
    suggested_adjustments: Mapping[str, Any] = field(default_factory=dict)
    adjustment_type: str = ADJUSTMENT_FIXED

    def to_axis(self, values: Optional[Sequence[str]] = None, with_pricing: bool = True) -> Axis:
        """
        Build an Axis from the template, optionally restricted to a subset
        of its values (kept in template order).
        """
        chosen = list(self.values)
        if values is not None:
            wanted = set(values)
            chosen = [v for v in chosen if v in wanted]
        adjustment_type = self.adjustment_type
        if adjustment_type not in AXIS_ADJUSTMENT_TYPES:
            adjustment_type = ADJUSTMENT_FIXED
        return Axis(self.axis_name, tuple(
            AxisValue(
                v,
                self.suggested_adjustments.get(v) if with_pricing else None,
                adjustment_type,
            )
            for v in chosen
        ))


class AxisCatalogProvider(ABC):

    @abstractmethod
    def list_templates(self) -> List[AxisTemplate]:
        ...

    @abstractmethod
    def get_template(self, template_id) -> AxisTemplate:
        ...

    def get_axis(self, template_id, values=None, with_pricing=True) -> Axis:
        return self.get_template(template_id).to_axis(values, with_pricing)
