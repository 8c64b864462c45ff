"""
Status transition guard for orders and tasks.

Status changes go through ``transition`` so that every move is checked against
the lifecycle graph and recorded in the entity's status history.
"""

from datetime import datetime
from enum import Enum
from typing import TypeVar

from aurora.core.entities.actor import Actor
from aurora.core.entities.document import utcnow
from aurora.core.entities.order import Order, OrderStatus
from aurora.core.entities.status import StatusHistoryEntry
from aurora.core.entities.task import Task, TaskStatus
from aurora.core.exceptions import IllegalTransitionError

E = TypeVar("E", Order, Task)

ORDER_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.DRAFT: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.IN_PROGRESS, OrderStatus.CANCELLED}),
    OrderStatus.IN_PROGRESS: frozenset(
        {OrderStatus.PARTIALLY_COMPLETED, OrderStatus.COMPLETED, OrderStatus.CANCELLED}
    ),
    OrderStatus.PARTIALLY_COMPLETED: frozenset({OrderStatus.COMPLETED, OrderStatus.CANCELLED}),
    OrderStatus.COMPLETED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

TASK_TRANSITIONS: dict[TaskStatus, frozenset[TaskStatus]] = {
    TaskStatus.PENDING_APPROVAL: frozenset(
        {TaskStatus.APPROVED, TaskStatus.REJECTED, TaskStatus.CANCELLED}
    ),
    TaskStatus.APPROVED: frozenset({TaskStatus.IN_PROGRESS, TaskStatus.CANCELLED}),
    TaskStatus.IN_PROGRESS: frozenset({TaskStatus.COMPLETED, TaskStatus.CANCELLED}),
    TaskStatus.COMPLETED: frozenset(),
    TaskStatus.REJECTED: frozenset(),
    TaskStatus.CANCELLED: frozenset(),
}


def _graph_for(entity: Order | Task) -> dict:
    if isinstance(entity, Order):
        return ORDER_TRANSITIONS
    return TASK_TRANSITIONS


def can_transition(entity: Order | Task, new_status: Enum) -> bool:
    return new_status in _graph_for(entity).get(entity.status, frozenset())


def is_terminal(entity: Order | Task) -> bool:
    return not _graph_for(entity).get(entity.status)


def transition(
    entity: E,
    new_status: OrderStatus | TaskStatus,
    actor: Actor,
    notes: str | None = None,
    at: datetime | None = None,
) -> StatusHistoryEntry:
    """
    Move ``entity`` to ``new_status`` in place and append a history entry.

    Raises:
        IllegalTransitionError: ``new_status`` is not reachable from the
            current status. The entity is left unchanged.
    """
    if not can_transition(entity, new_status):
        raise IllegalTransitionError(
            entity.ENTITY_NAME,
            entity.id,
            entity.status.value,
            new_status.value,
        )

    entry = StatusHistoryEntry(
        status=new_status.value,
        timestamp=at or utcnow(),
        changed_by=actor.user_id,
        notes=notes,
    )
    entity.status = new_status
    entity.status_history.append(entry)
    return entry
