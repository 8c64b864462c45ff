"""
Order use cases: create, replace items, change status, assign to a contractor.

Every path that touches the items recomputes the order totals as its last
step before the write.
"""

import uuid

from aurora.application.dto.requests import (
    AssignOrderRequest,
    ChangeOrderStatusRequest,
    CreateOrderRequest,
    OrderItemRequest,
)
from aurora.config import get_logger
from aurora.core.entities.actor import Actor
from aurora.core.entities.contractor import Contractor
from aurora.core.entities.order import Order, OrderItem, OrderStatus
from aurora.core.exceptions import NotFoundError, ValidationError
from aurora.core.services.aggregator import apply_order_totals
from aurora.core.services.optimistic import OptimisticExecutor
from aurora.core.services.sequences import CodeKind, SequenceGenerator
from aurora.core.services.status_guard import is_terminal, transition

logger = get_logger(__name__)

# Orders that are reassigned without a status change
IN_PRODUCTION = {OrderStatus.IN_PROGRESS, OrderStatus.PARTIALLY_COMPLETED}


def build_items(requests: list[OrderItemRequest]) -> list[OrderItem]:
    """Turn item requests into order items, generating missing item IDs."""
    items = [
        OrderItem(
            item_id=req.item_id or uuid.uuid4().hex[:12],
            **req.model_dump(exclude={"item_id"}),
        )
        for req in requests
    ]
    seen: set[str] = set()
    for item in items:
        if item.item_id in seen:
            raise ValidationError("items", "duplicate item_id", item.item_id)
        seen.add(item.item_id)
    return items


class OrderUseCase:
    """Shared wiring for order operations."""

    def __init__(
        self,
        executor: OptimisticExecutor | None = None,
        sequences: SequenceGenerator | None = None,
    ):
        self._executor = executor
        self._sequences = sequences

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


class CreateOrderUseCase(OrderUseCase):
    """Create a DRAFT order with a sequential order number."""

    async def execute(self, request: CreateOrderRequest, actor: Actor) -> Order:
        executor = await self._get_executor()
        sequences = await self._get_sequences()

        items = build_items(request.items)
        order = Order(
            client_id=request.client_id,
            required_by_date=request.required_by_date,
            priority=request.priority,
            items=items,
            special_instructions=request.special_instructions,
            assigned_to=request.assigned_to,
            created_by=actor.user_id,
        )
        apply_order_totals(order)
        order.order_number = await sequences.next_code(CodeKind.ORDER, order.order_date)

        order = await executor.create(order)
        logger.info(
            "order_created",
            order_id=order.id,
            order_number=order.order_number,
            items=order.total_items,
            total_value=order.total_value,
        )
        return order


class UpdateOrderItemsUseCase(OrderUseCase):
    """Replace an order's items and recompute its totals."""

    async def execute(
        self, order_id: str, items: list[OrderItemRequest], actor: Actor
    ) -> Order:
        executor = await self._get_executor()
        new_items = build_items(items)

        def apply(order: Order) -> None:
            if is_terminal(order):
                raise ValidationError(
                    "status", "items of a closed order cannot change", order.status.value
                )
            order.items = [item.model_copy(deep=True) for item in new_items]
            apply_order_totals(order)

        order = await executor.mutate(Order, order_id, apply, "update_order_items")
        logger.info(
            "order_items_updated",
            order_id=order_id,
            items=order.total_items,
            total_value=order.total_value,
            updated_by=actor.user_id,
        )
        return order


class ChangeOrderStatusUseCase(OrderUseCase):
    """Move an order along its lifecycle."""

    async def execute(
        self, order_id: str, request: ChangeOrderStatusRequest, actor: Actor
    ) -> Order:
        executor = await self._get_executor()

        def apply(order: Order) -> None:
            entry = transition(order, request.status, actor, notes=request.notes)
            if request.status == OrderStatus.CONFIRMED:
                order.approved_by = actor.user_id
                order.approved_at = entry.timestamp

        order = await executor.mutate(Order, order_id, apply, "change_order_status")
        logger.info(
            "order_status_changed",
            order_id=order_id,
            status=order.status.value,
            changed_by=actor.user_id,
        )
        return order


class AssignOrderToContractorUseCase(OrderUseCase):
    """
    Hand an order to a contractor.

    A CONFIRMED order moves to IN_PROGRESS through the status guard. An order
    already in production is reassigned without a status change.
    """

    async def execute(
        self, order_id: str, request: AssignOrderRequest, actor: Actor
    ) -> Order:
        executor = await self._get_executor()

        try:
            contractor = await executor.get(Contractor, request.contractor_id)
        except NotFoundError as e:
            raise ValidationError(
                "contractor_id", "no such contractor", request.contractor_id
            ) from e
        if not contractor.can_take_work:
            raise ValidationError(
                "contractor_id", f"contractor is {contractor.status.value}", contractor.id
            )

        def apply(order: Order) -> None:
            if order.status not in IN_PRODUCTION:
                transition(
                    order,
                    OrderStatus.IN_PROGRESS,
                    actor,
                    notes=request.notes or f"Assigned to {contractor.contractor_code}",
                )
            order.assigned_contractor_id = contractor.id
            order.assigned_to = actor.user_id

        order = await executor.mutate(Order, order_id, apply, "assign_order")
        logger.info(
            "order_assigned",
            order_id=order_id,
            contractor_id=contractor.id,
            status=order.status.value,
            assigned_by=actor.user_id,
        )
        return order
