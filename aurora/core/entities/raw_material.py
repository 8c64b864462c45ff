"""Raw material (thread) catalog entity."""

from enum import Enum
from typing import ClassVar, Literal

from aurora.core.entities.document import Record


class MaterialStatus(str, Enum):
    """Lifecycle status of a raw material."""

    ACTIVE = "ACTIVE"
    DISCONTINUED = "DISCONTINUED"


class RawMaterial(Record):
    """A thread type that can be stocked, allocated and consumed."""

    COLLECTION: ClassVar[str] = "rawMaterials"

    material_code: str
    name: str
    type: str = ""
    color: str = ""
    weight: str = ""
    unit: Literal["KG"] = "KG"
    cost_per_kg: float = 0.0
    supplier: str | None = None
    min_order_qty: float = 0.0
    status: MaterialStatus = MaterialStatus.ACTIVE
    created_by: str | None = None

    @property
    def is_active(self) -> bool:
        return self.status == MaterialStatus.ACTIVE
