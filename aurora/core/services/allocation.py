"""
Allocation engine: reserve and release lot quantity against orders.

Allocation never touches physical stock; it moves quantity between the
available and allocated buckets of one lot. Calls are not deduplicated, so
allocating twice with the same arguments reserves twice.
"""

from datetime import datetime

from aurora.config import get_logger
from aurora.core.entities.actor import Actor
from aurora.core.entities.thread_inventory import MovementType, StockMovement, ThreadInventoryLot
from aurora.core.exceptions import InsufficientStockError, OverReleaseError, ValidationError
from aurora.core.services.optimistic import OptimisticExecutor
from aurora.core.services.stock_ledger import (
    LedgerUpdate,
    StockLedger,
    kg,
    record_movement,
    require_active,
    require_positive,
)

logger = get_logger(__name__)


def require_order(order_id: str) -> None:
    if not order_id or not order_id.strip():
        raise ValidationError("order_id", "an order reference is required")


def apply_allocation(
    lot: ThreadInventoryLot,
    quantity_kg: float,
    order_id: str,
    actor: Actor,
    at: datetime | None = None,
) -> StockMovement:
    require_active(lot)
    require_order(order_id)
    quantity_kg = require_positive("quantity_kg", quantity_kg)
    if quantity_kg > lot.available_kg:
        raise InsufficientStockError(lot.id, quantity_kg, lot.available_kg)
    lot.allocated_kg = kg(lot.allocated_kg + quantity_kg)
    return record_movement(
        lot,
        MovementType.ALLOCATED,
        quantity_kg,
        actor,
        notes=f"Allocated for order {order_id}",
        order_id=order_id,
        at=at,
    )


def apply_release(
    lot: ThreadInventoryLot,
    quantity_kg: float,
    order_id: str,
    actor: Actor,
    at: datetime | None = None,
) -> StockMovement:
    require_active(lot)
    require_order(order_id)
    quantity_kg = require_positive("quantity_kg", quantity_kg)
    if quantity_kg > lot.allocated_kg:
        raise OverReleaseError(lot.id, quantity_kg, lot.allocated_kg)
    lot.allocated_kg = kg(lot.allocated_kg - quantity_kg)
    return record_movement(
        lot,
        MovementType.RELEASED,
        quantity_kg,
        actor,
        notes=f"Released from order {order_id}",
        order_id=order_id,
        at=at,
    )


class AllocationEngine:
    """Reserves and releases thread for orders."""

    def __init__(self, executor: OptimisticExecutor, ledger: StockLedger | None = None):
        self._ledger = ledger or StockLedger(executor)

    async def allocate(
        self, lot_id: str, quantity_kg: float, order_id: str, actor: Actor
    ) -> LedgerUpdate:
        """
        Reserve ``quantity_kg`` of a lot for an order.

        Raises:
            InsufficientStockError: Less than ``quantity_kg`` is available
            ValidationError: Non-positive quantity or archived lot
        """
        update = await self._ledger.apply_to_lot(
            lot_id,
            "allocate",
            lambda lot: apply_allocation(lot, quantity_kg, order_id, actor),
        )
        logger.info(
            "thread_allocated",
            lot_id=lot_id,
            order_id=order_id,
            quantity_kg=quantity_kg,
            allocated_kg=update.lot.allocated_kg,
            available_kg=update.lot.available_kg,
        )
        return update

    async def release(
        self, lot_id: str, quantity_kg: float, order_id: str, actor: Actor
    ) -> LedgerUpdate:
        """
        Return ``quantity_kg`` of an order's reservation to the lot.

        Raises:
            OverReleaseError: More than the allocated quantity requested
            ValidationError: Non-positive quantity or archived lot
        """
        update = await self._ledger.apply_to_lot(
            lot_id,
            "release",
            lambda lot: apply_release(lot, quantity_kg, order_id, actor),
        )
        logger.info(
            "thread_released",
            lot_id=lot_id,
            order_id=order_id,
            quantity_kg=quantity_kg,
            allocated_kg=update.lot.allocated_kg,
            available_kg=update.lot.available_kg,
        )
        return update
