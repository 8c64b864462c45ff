"""Thread inventory lot entities."""

from datetime import datetime
from enum import Enum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

from aurora.core.entities.document import Record, utcnow

# Quantities are kept to the gram
KG_PRECISION = 3


class MovementType(str, Enum):
    """Types of stock movements."""

    IN = "IN"
    OUT = "OUT"
    ALLOCATED = "ALLOCATED"
    RELEASED = "RELEASED"
    ADJUSTMENT = "ADJUSTMENT"


class StockMovement(BaseModel):
    """One immutable entry in a lot's movement log."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    moved_at: datetime = Field(default_factory=utcnow, alias="date")
    movement_type: MovementType = Field(alias="type")
    quantity: float  # kg; signed only for ADJUSTMENT
    order_id: str | None = None
    notes: str = ""
    performed_by: str


class StockAlerts(BaseModel):
    """Alert flags derived from the lot's policy bounds."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    low_stock: bool = False
    near_expiry: bool = False
    overstock: bool = False


class ThreadInventoryLot(Record):
    """
    Stock record for one raw material.

    ``available_kg`` and ``total_value`` are projections of the stored inputs;
    they are serialized for readers of the raw documents but never accepted
    as input.
    """

    COLLECTION: ClassVar[str] = "threadInventory"

    raw_material_id: str
    current_stock_kg: float = 0.0
    allocated_kg: float = 0.0
    threshold_kg: float = 0.0
    reorder_point_kg: float = 0.0
    max_stock_kg: float | None = None  # None: no ceiling
    cost_per_kg: float = 0.0
    location: str | None = None
    last_restocked_date: datetime | None = None
    last_restocked_by: str | None = None
    stock_movements: list[StockMovement] = Field(default_factory=list)
    alerts: StockAlerts = Field(default_factory=StockAlerts)
    archived: bool = False

    @computed_field(alias="availableKg")  # type: ignore[prop-decorator]
    @property
    def available_kg(self) -> float:
        return round(self.current_stock_kg - self.allocated_kg, KG_PRECISION)

    @computed_field(alias="totalValue")  # type: ignore[prop-decorator]
    @property
    def total_value(self) -> float:
        return round(self.current_stock_kg * self.cost_per_kg, 2)

    @property
    def needs_reorder(self) -> bool:
        return self.current_stock_kg <= self.reorder_point_kg

    def movements_of(self, movement_type: MovementType) -> list[StockMovement]:
        return [m for m in self.stock_movements if m.movement_type == movement_type]
