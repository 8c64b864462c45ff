"""Notification entity."""

from datetime import datetime
from enum import Enum
from typing import ClassVar

from aurora.core.entities.document import Record


class NotificationType(str, Enum):
    TASK_ASSIGNED = "TASK_ASSIGNED"
    TASK_APPROVED = "TASK_APPROVED"
    TASK_REJECTED = "TASK_REJECTED"
    TASK_COMPLETED = "TASK_COMPLETED"
    ORDER_ASSIGNED = "ORDER_ASSIGNED"
    STOCK_LOW = "STOCK_LOW"
    STOCK_CRITICAL = "STOCK_CRITICAL"
    STOCK_RESTOCKED = "STOCK_RESTOCKED"
    SYSTEM_ALERT = "SYSTEM_ALERT"


class NotificationPriority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class Notification(Record):
    """A message addressed to one user."""

    COLLECTION: ClassVar[str] = "notifications"

    to_user_id: str
    from_user_id: str | None = None
    type: NotificationType
    title: str
    message: str
    order_id: str | None = None
    task_id: str | None = None
    lot_id: str | None = None
    priority: NotificationPriority = NotificationPriority.MEDIUM
    read: bool = False
    read_at: datetime | None = None
    action_required: bool = False
