"""
Notifications for stock and task events.

Notifications are written after the change they describe has committed. A
failed notification write is logged and reported as ``None``; it never undoes
or fails the operation that triggered it.
"""

from aurora.config import get_logger, get_settings
from aurora.config.settings import NotificationSettings
from aurora.core.entities.actor import Actor
from aurora.core.entities.document import utcnow
from aurora.core.entities.notification import (
    Notification,
    NotificationPriority,
    NotificationType,
)
from aurora.core.entities.task import Task, TaskStatus
from aurora.core.entities.thread_inventory import ThreadInventoryLot
from aurora.core.exceptions import IndeterminateError, StorageError
from aurora.core.services.optimistic import OptimisticExecutor
from aurora.core.services.stock_ledger import LedgerUpdate

logger = get_logger(__name__)

MARK_ALL_PAGE_SIZE = 500

TASK_EVENTS: dict[TaskStatus, tuple[NotificationType, str]] = {
    TaskStatus.APPROVED: (NotificationType.TASK_APPROVED, "Task approved"),
    TaskStatus.REJECTED: (NotificationType.TASK_REJECTED, "Task rejected"),
    TaskStatus.COMPLETED: (NotificationType.TASK_COMPLETED, "Task completed"),
}


class NotificationService:
    """Writes and reads user notifications."""

    def __init__(
        self,
        executor: OptimisticExecutor,
        settings: NotificationSettings | None = None,
    ):
        self._executor = executor
        self.settings = settings or get_settings().notifications

    async def notify(self, notification: Notification) -> Notification | None:
        if not self.settings.enabled:
            return None
        try:
            saved = await self._executor.create(notification)
        except (StorageError, IndeterminateError) as e:
            logger.warning(
                "notification_write_failed",
                type=notification.type.value,
                to_user_id=notification.to_user_id,
                error=str(e),
            )
            return None
        logger.debug(
            "notification_sent",
            notification_id=saved.id,
            type=saved.type.value,
            to_user_id=saved.to_user_id,
        )
        return saved

    # Stock events

    async def stock_changed(self, update: LedgerUpdate, actor: Actor) -> Notification | None:
        """Alert when a lot has just crossed into low stock."""
        lot = update.lot
        if update.previous_alerts.low_stock or not lot.alerts.low_stock:
            return None

        critical = lot.current_stock_kg <= 0
        return await self.notify(
            Notification(
                to_user_id=self.settings.stock_alert_recipient,
                from_user_id=actor.user_id,
                type=NotificationType.STOCK_CRITICAL if critical else NotificationType.STOCK_LOW,
                title="Thread out of stock" if critical else "Thread stock low",
                message=(
                    f"Lot {lot.id} is at {lot.current_stock_kg} kg "
                    f"(threshold {lot.threshold_kg} kg)"
                ),
                lot_id=lot.id,
                priority=NotificationPriority.CRITICAL if critical else NotificationPriority.HIGH,
                action_required=True,
            )
        )

    async def restocked(
        self, lot: ThreadInventoryLot, quantity_kg: float, actor: Actor
    ) -> Notification | None:
        return await self.notify(
            Notification(
                to_user_id=self.settings.stock_alert_recipient,
                from_user_id=actor.user_id,
                type=NotificationType.STOCK_RESTOCKED,
                title="Thread restocked",
                message=f"Lot {lot.id} restocked with {quantity_kg} kg, now {lot.current_stock_kg} kg",
                lot_id=lot.id,
                priority=NotificationPriority.LOW,
            )
        )

    # Task events

    async def task_status_changed(self, task: Task, actor: Actor) -> Notification | None:
        event = TASK_EVENTS.get(task.status)
        if event is None or not task.created_by:
            return None

        notification_type, title = event
        message = f"{task.task_number or task.id} ({task.product_name}) is now {task.status.value}"
        if task.status == TaskStatus.REJECTED and task.rejection_reason:
            message = f"{message}: {task.rejection_reason}"

        return await self.notify(
            Notification(
                to_user_id=task.created_by,
                from_user_id=actor.user_id,
                type=notification_type,
                title=title,
                message=message,
                order_id=task.order_id,
                task_id=task.id,
                priority=(
                    NotificationPriority.HIGH
                    if task.status == TaskStatus.REJECTED
                    else NotificationPriority.MEDIUM
                ),
            )
        )

    # Inbox

    async def list_for_user(
        self,
        user_id: str,
        unread_only: bool = False,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Notification]:
        filters: dict = {"toUserId": user_id}
        if unread_only:
            filters["read"] = False
        return await self._executor.find(Notification, filters, limit=limit, offset=offset)

    async def mark_read(self, notification_id: str) -> Notification:
        def apply(notification: Notification) -> None:
            if not notification.read:
                notification.read = True
                notification.read_at = utcnow()

        return await self._executor.mutate(Notification, notification_id, apply, "mark_read")

    async def mark_all_read(self, user_id: str) -> int:
        """Mark every unread notification of a user as read. Returns the count."""
        count = 0
        while True:
            # marked rows leave the unread filter, so every page starts at offset 0
            unread = await self.list_for_user(
                user_id, unread_only=True, limit=MARK_ALL_PAGE_SIZE
            )
            if not unread:
                break
            for notification in unread:
                await self.mark_read(notification.id)
            count += len(unread)
        logger.info("notifications_marked_read", user_id=user_id, count=count)
        return count
