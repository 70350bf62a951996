"""
Pydantic schemas for laboratory inventory items.

Inventory items belong to a laboratory (``labId`` is sent alongside the
item fields).  ``status`` is set by the operator; it is not derived
from ``quantity``/``minStock`` or from the expiration date.
"""

from typing import ClassVar, FrozenSet, Literal, Optional

from .common import CamelModel, NonEmptyStr, NonNegativeNumber

InventoryStatus = Literal["disponible", "bajo_stock", "agotado", "vencido"]


class InventoryItemCreate(CamelModel):
    """Schema for adding an item to a laboratory's inventory."""

    selector_fields: ClassVar[FrozenSet[str]] = frozenset({"lab_id"})

    lab_id: Optional[str] = None
    name: NonEmptyStr
    category: NonEmptyStr
    quantity: NonNegativeNumber
    unit: NonEmptyStr
    min_stock: NonNegativeNumber
    expiration_date: NonEmptyStr
    supplier: NonEmptyStr
    notes: Optional[str] = None
    status: InventoryStatus


class InventoryItemUpdate(CamelModel):
    """Partial update; ``labId`` and ``itemId`` select the target item."""

    selector_fields: ClassVar[FrozenSet[str]] = frozenset({"lab_id", "item_id"})

    lab_id: Optional[str] = None
    item_id: Optional[str] = None
    name: Optional[NonEmptyStr] = None
    category: Optional[NonEmptyStr] = None
    quantity: Optional[NonNegativeNumber] = None
    unit: Optional[NonEmptyStr] = None
    min_stock: Optional[NonNegativeNumber] = None
    expiration_date: Optional[NonEmptyStr] = None
    supplier: Optional[NonEmptyStr] = None
    notes: Optional[str] = None
    status: Optional[InventoryStatus] = None
