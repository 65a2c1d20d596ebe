"""
Interfaces the engine consumes from the surrounding application.

The engine never touches storage itself: it hands GeneratedVariantRequests
to a VariantRepository and reads VariantRecords back from it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .axes import Combination


@dataclass(frozen=True)
class ParentItem:
    """Descriptor of the parent item variants are generated from."""
    id: Any
    sku: str
    name: str
    base_price: Optional[Decimal] = None
    # Inheritable parent fields (description, brand, ...)
    fields: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class VariantRecord:
    """
    A stored variant as returned by the persistence collaborator.
    `axis_values` is None for legacy variants stored without axis data.
    """
    id: Any
    sku: str
    name: str = ''
    price: Optional[Decimal] = None
    quantity: int = 0
    status: str = ''
    axis_values: Optional[Mapping[str, str]] = None

    @property
    def has_axis_values(self) -> bool:
        return bool(self.axis_values)


@dataclass
class GeneratedVariantRequest:
    """One variant the orchestrator asks the collaborator to create."""
    combination: Combination
    sku: str
    name: str
    price: Decimal
    quantity: int = 0
    status: str = 'draft'
    inherited_fields: Dict[str, Any] = field(default_factory=dict)
    attributes: Dict[str, Any] = field(default_factory=dict)
    track_inventory: bool = True
    low_stock_threshold: Optional[int] = None

    @property
    def axis_values(self) -> Dict[str, str]:
        return self.combination.as_dict()

    @property
    def signature(self) -> str:
        return self.combination.signature


class VariantRepository(ABC):
    """
    Persistence collaborator.

    `create` must enforce uniqueness of (parent, axis signature) and raise
    ConflictError when it is violated; any other failure should surface as
    PersistenceError.
    """

    @abstractmethod
    def find_by_parent_and_axis_signature(self, parent_id, signature: str) -> Optional[VariantRecord]:
        ...

    @abstractmethod
    def create(self, parent_id, request: GeneratedVariantRequest) -> VariantRecord:
        ...

    @abstractmethod
    def update(self, variant_id, fields: Mapping[str, Any]) -> VariantRecord:
        ...

    @abstractmethod
    def list_by_parent(self, parent_id) -> List[VariantRecord]:
        ...

    @abstractmethod
    def get_many(self, variant_ids: Iterable) -> List[VariantRecord]:
        """Return the records that exist, in the order requested."""
        ...
