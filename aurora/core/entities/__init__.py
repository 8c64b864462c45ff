"""Core domain entities."""

from aurora.core.entities.actor import Actor, UserRole
from aurora.core.entities.client import Address, Client, ClientStatus
from aurora.core.entities.contractor import (
    AvailabilityStatus,
    BusinessType,
    Contractor,
    ContractorStatus,
    SkillLevel,
    Worker,
    WorkerStatus,
)
from aurora.core.entities.document import Document, Record
from aurora.core.entities.notification import (
    Notification,
    NotificationPriority,
    NotificationType,
)
from aurora.core.entities.order import (
    Order,
    OrderItem,
    OrderItemStatus,
    OrderPriority,
    OrderStatus,
    ThreadAllocation,
)
from aurora.core.entities.product import (
    Difficulty,
    Product,
    ProductStatus,
    SizeConfig,
    ThreadRequirement,
)
from aurora.core.entities.raw_material import MaterialStatus, RawMaterial
from aurora.core.entities.status import StatusHistoryEntry
from aurora.core.entities.task import ApprovalStatus, DailyProgress, Task, TaskStatus
from aurora.core.entities.thread_inventory import (
    KG_PRECISION,
    MovementType,
    StockAlerts,
    StockMovement,
    ThreadInventoryLot,
)

__all__ = [
    "Actor",
    "UserRole",
    "Address",
    "Client",
    "ClientStatus",
    "AvailabilityStatus",
    "BusinessType",
    "Contractor",
    "ContractorStatus",
    "SkillLevel",
    "Worker",
    "WorkerStatus",
    "Document",
    "Record",
    "Notification",
    "NotificationPriority",
    "NotificationType",
    "Order",
    "OrderItem",
    "OrderItemStatus",
    "OrderPriority",
    "OrderStatus",
    "ThreadAllocation",
    "Difficulty",
    "Product",
    "ProductStatus",
    "SizeConfig",
    "ThreadRequirement",
    "MaterialStatus",
    "RawMaterial",
    "StatusHistoryEntry",
    "ApprovalStatus",
    "DailyProgress",
    "Task",
    "TaskStatus",
    "KG_PRECISION",
    "MovementType",
    "StockAlerts",
    "StockMovement",
    "ThreadInventoryLot",
]
