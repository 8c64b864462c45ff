"""
Task use cases: create from an order item, change status, log progress.

Task notifications go to the task's creator and are written after the task
itself has been saved.
"""

from aurora.application.dto.requests import (
    ChangeTaskStatusRequest,
    CreateTaskRequest,
    TaskProgressRequest,
)
from aurora.config import get_logger
from aurora.core.entities.actor import Actor
from aurora.core.entities.document import utcnow
from aurora.core.entities.order import Order, OrderItemStatus, OrderStatus
from aurora.core.entities.task import ApprovalStatus, Task, TaskStatus
from aurora.core.exceptions import (
    ConcurrencyError,
    IndeterminateError,
    StorageError,
    ValidationError,
)
from aurora.core.services.notifier import NotificationService
from aurora.core.services.optimistic import OptimisticExecutor
from aurora.core.services.sequences import CodeKind, SequenceGenerator
from aurora.core.services.status_guard import transition
from aurora.core.services.task_progress import apply_progress

logger = get_logger(__name__)

# Orders that can still receive production tasks
ASSIGNABLE_ORDER_STATUSES = {
    OrderStatus.DRAFT,
    OrderStatus.CONFIRMED,
    OrderStatus.IN_PROGRESS,
    OrderStatus.PARTIALLY_COMPLETED,
}


class TaskUseCase:
    """Shared wiring for task operations."""

    def __init__(
        self,
        executor: OptimisticExecutor | None = None,
        sequences: SequenceGenerator | None = None,
        notifier: NotificationService | None = None,
    ):
        self._executor = executor
        self._sequences = sequences
        self._notifier = notifier

    async def _get_executor(self) -> OptimisticExecutor:
        if self._executor is None:
            from aurora.application.services import get_executor

            self._executor = await get_executor()
        return self._executor

    async def _get_sequences(self) -> SequenceGenerator:
        if self._sequences is None:
            from aurora.application.services import get_sequence_generator

            self._sequences = await get_sequence_generator()
        return self._sequences

    async def _get_notifier(self) -> NotificationService:
        if self._notifier is None:
            from aurora.application.services import get_notification_service

            self._notifier = await get_notification_service()
        return self._notifier


class CreateTaskUseCase(TaskUseCase):
    """Assign an order item to a contractor as a task awaiting approval."""

    async def execute(self, request: CreateTaskRequest, actor: Actor) -> Task:
        executor = await self._get_executor()

        order = await executor.get(Order, request.order_id)
        if order.status not in ASSIGNABLE_ORDER_STATUSES:
            raise ValidationError(
                "order_id", f"order is {order.status.value}", request.order_id
            )
        item = order.find_item(request.order_item_id)
        if item is None:
            raise ValidationError("order_item_id", "no such item on the order", request.order_item_id)

        quantity = request.quantity or item.quantity
        if quantity > item.quantity:
            raise ValidationError(
                "quantity", f"exceeds the {item.quantity} pieces ordered", quantity
            )

        task = Task(
            order_id=order.id,
            order_item_id=item.item_id,
            contractor_id=request.contractor_id,
            assigned_worker_ids=request.assigned_worker_ids,
            product_id=item.product_id,
            product_name=item.product_name,
            quantity=quantity,
            size=item.size,
            color=item.color,
            special_instructions=request.special_instructions,
            expected_completion_date=request.expected_completion_date,
            quality_check_required=request.quality_check_required,
            wage_per_piece=request.wage_per_piece,
            created_by=actor.user_id,
            assigned_by=actor.user_id,
        )
        sequences = await self._get_sequences()
        task.task_number = await sequences.next_code(CodeKind.TASK, task.assigned_date)
        task = await executor.create(task)

        # The order side is updated separately; the task stands even if this write fails
        def mark_assigned(order: Order) -> None:
            order_item = order.find_item(task.order_item_id)
            if order_item is not None:
                order_item.assigned_contractor_id = task.contractor_id
                if order_item.status in (OrderItemStatus.PENDING, OrderItemStatus.ALLOCATED):
                    order_item.status = OrderItemStatus.ASSIGNED

        try:
            await executor.mutate(Order, order.id, mark_assigned, "assign_order_item")
        except (ConcurrencyError, IndeterminateError, StorageError) as e:
            logger.warning(
                "order_item_assignment_failed",
                task_id=task.id,
                order_id=order.id,
                order_item_id=task.order_item_id,
                error=str(e),
            )

        logger.info(
            "task_created",
            task_id=task.id,
            task_number=task.task_number,
            order_id=task.order_id,
            contractor_id=task.contractor_id,
            quantity=task.quantity,
        )
        return task


class ChangeTaskStatusUseCase(TaskUseCase):
    """Approve, reject, start, complete or cancel a task."""

    async def execute(
        self, task_id: str, request: ChangeTaskStatusRequest, actor: Actor
    ) -> Task:
        executor = await self._get_executor()

        def apply(task: Task) -> None:
            entry = transition(task, request.status, actor, notes=request.notes)
            if request.status == TaskStatus.APPROVED:
                task.approval_status = ApprovalStatus.APPROVED
                task.approved_by = actor.user_id
                task.approved_at = entry.timestamp
            elif request.status == TaskStatus.REJECTED:
                task.approval_status = ApprovalStatus.REJECTED
                task.rejection_reason = request.notes
            elif request.status == TaskStatus.IN_PROGRESS:
                task.started_date = entry.timestamp
            elif request.status == TaskStatus.COMPLETED:
                task.completed_date = entry.timestamp

        task = await executor.mutate(Task, task_id, apply, "change_task_status")
        logger.info(
            "task_status_changed",
            task_id=task_id,
            status=task.status.value,
            changed_by=actor.user_id,
        )

        notifier = await self._get_notifier()
        await notifier.task_status_changed(task, actor)
        return task


class RecordTaskProgressUseCase(TaskUseCase):
    """Log a day of work on a task in progress."""

    async def execute(
        self, task_id: str, request: TaskProgressRequest, actor: Actor
    ) -> Task:
        executor = await self._get_executor()
        worker_ids = request.worker_ids or [actor.user_id]

        def apply(task: Task) -> None:
            apply_progress(
                task,
                request.pieces_completed,
                request.hours_worked,
                worker_ids=worker_ids,
                notes=request.notes,
                at=utcnow(),
            )

        task = await executor.mutate(Task, task_id, apply, "record_task_progress")
        logger.info(
            "task_progress_recorded",
            task_id=task_id,
            pieces_completed=task.pieces_completed,
            progress_percentage=task.progress_percentage,
        )
        return task
