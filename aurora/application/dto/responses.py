"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.

Records are returned in their stored shape (camelCase keys, derived fields
included) so dashboard clients read the same documents the store holds.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from aurora.core.entities import (
    Client,
    Contractor,
    Notification,
    Order,
    Product,
    RawMaterial,
    StockAlerts,
    StockMovement,
    Task,
    ThreadInventoryLot,
    Worker,
)


class ComponentHealthResponse(BaseModel):
    """Health of one dependency."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ComponentHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. INSUFFICIENT_STOCK)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)


class PaginatedResponse(BaseModel):
    """Base for paginated responses."""

    count: int
    limit: int
    offset: int
    has_more: bool


class RawMaterialListResponse(PaginatedResponse):
    items: list[RawMaterial]


class LotListResponse(PaginatedResponse):
    items: list[ThreadInventoryLot]


class OrderListResponse(PaginatedResponse):
    items: list[Order]


class TaskListResponse(PaginatedResponse):
    items: list[Task]


class NotificationListResponse(PaginatedResponse):
    items: list[Notification]


class ClientListResponse(PaginatedResponse):
    items: list[Client]


class ContractorListResponse(PaginatedResponse):
    items: list[Contractor]


class WorkerListResponse(PaginatedResponse):
    items: list[Worker]


class ProductListResponse(PaginatedResponse):
    items: list[Product]


class MovementListResponse(BaseModel):
    """A lot's movement log, newest last."""

    lot_id: str
    movements: list[StockMovement]
    allocated_total_kg: float = Field(..., description="Sum of ALLOCATED movements")
    released_total_kg: float = Field(..., description="Sum of RELEASED movements")


class LedgerOperationResponse(BaseModel):
    """A lot after a ledger operation and the movement it recorded."""

    lot: ThreadInventoryLot
    movement: StockMovement | None = None
    alerts_changed: bool = False


class MarkAllReadResponse(BaseModel):
    user_id: str
    marked: int


class LowStockItem(BaseModel):
    """A lot at or below its alert threshold."""

    lot_id: str
    raw_material_id: str
    current_stock_kg: float
    available_kg: float
    threshold_kg: float
    alerts: StockAlerts


class DashboardStatsResponse(BaseModel):
    """Headline figures for the dashboard."""

    total_orders: int
    orders_by_status: dict[str, int]
    total_thread_kg: float = Field(..., description="Physical stock across active lots")
    total_thread_value: float
    low_stock_items: int
    low_stock: list[LowStockItem]
    revenue: float = Field(..., description="Value of completed and partially completed orders")
    active_tasks: int
    pending_approvals: int
    active_clients: int = Field(..., description="Clients with ACTIVE status")
