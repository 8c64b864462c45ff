"""Order entities."""

from datetime import datetime
from enum import Enum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

from aurora.core.entities.document import Record, utcnow
from aurora.core.entities.status import StatusHistoryEntry


class OrderPriority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"


class OrderStatus(str, Enum):
    DRAFT = "DRAFT"
    CONFIRMED = "CONFIRMED"
    IN_PROGRESS = "IN_PROGRESS"
    PARTIALLY_COMPLETED = "PARTIALLY_COMPLETED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class OrderItemStatus(str, Enum):
    PENDING = "PENDING"
    ALLOCATED = "ALLOCATED"
    ASSIGNED = "ASSIGNED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


class ThreadAllocation(BaseModel):
    """Thread reserved for one order item."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    raw_material_id: str
    allocated_kg: float = 0.0
    cost_per_kg: float = 0.0

    @property
    def cost(self) -> float:
        return self.allocated_kg * self.cost_per_kg


class OrderItem(BaseModel):
    """One product line on an order."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    item_id: str
    product_id: str
    product_code: str = ""
    product_name: str = ""
    size: str = ""
    color: str = ""
    quantity: int = 0
    unit_price: float = 0.0
    thread_allocations: list[ThreadAllocation] = Field(default_factory=list)
    estimated_labor_hours: float = 0.0
    total_wage: float = 0.0
    status: OrderItemStatus = OrderItemStatus.PENDING
    assigned_contractor_id: str | None = None
    quality_checked: bool = False
    quality_notes: str | None = None

    @computed_field(alias="totalPrice")  # type: ignore[prop-decorator]
    @property
    def total_price(self) -> float:
        return round(self.quantity * self.unit_price, 2)


class Order(Record):
    """
    Customer order with line items and derived totals.

    The ``total_*`` and ``estimated_profit`` fields are written only by the
    order aggregator; see ``aurora.core.services.aggregator``.
    """

    COLLECTION: ClassVar[str] = "orders"
    ENTITY_NAME: ClassVar[str] = "order"

    order_number: str = ""
    client_id: str
    order_date: datetime = Field(default_factory=utcnow)
    required_by_date: datetime | None = None
    priority: OrderPriority = OrderPriority.MEDIUM
    status: OrderStatus = OrderStatus.DRAFT
    items: list[OrderItem] = Field(default_factory=list)

    total_items: int = 0
    total_quantity: int = 0
    total_value: float = 0.0
    total_thread_kg: float = 0.0
    total_labor_hours: float = 0.0
    total_cost: float = 0.0
    estimated_profit: float = 0.0

    status_history: list[StatusHistoryEntry] = Field(default_factory=list)
    special_instructions: str | None = None
    created_by: str | None = None
    assigned_to: str | None = None
    assigned_contractor_id: str | None = None
    approved_by: str | None = None
    approved_at: datetime | None = None

    def find_item(self, item_id: str) -> OrderItem | None:
        return next((item for item in self.items if item.item_id == item_id), None)
