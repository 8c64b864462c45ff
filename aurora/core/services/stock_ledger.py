"""
Stock ledger for thread inventory lots.

The ``apply_*`` functions are the pure ledger rules: they validate against
the lot they are given, change its quantities, append exactly one movement
and refresh the alert flags, or raise without touching the lot.
``StockLedger`` runs them under optimistic concurrency against the store.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from aurora.config import get_logger
from aurora.core.entities.actor import Actor
from aurora.core.entities.document import utcnow
from aurora.core.entities.raw_material import RawMaterial
from aurora.core.entities.thread_inventory import (
    KG_PRECISION,
    MovementType,
    StockAlerts,
    StockMovement,
    ThreadInventoryLot,
)
from aurora.core.exceptions import (
    DuplicateDocumentError,
    InsufficientStockError,
    ValidationError,
)
from aurora.core.services.optimistic import OptimisticExecutor

logger = get_logger(__name__)


def kg(value: float) -> float:
    """Quantize a quantity to the ledger precision."""
    return round(value, KG_PRECISION)


def recompute_alerts(lot: ThreadInventoryLot) -> StockAlerts:
    """Derive alert flags from the lot's current stock and policy bounds."""
    overstock = lot.max_stock_kg is not None and lot.current_stock_kg > lot.max_stock_kg
    return StockAlerts(
        low_stock=lot.current_stock_kg <= lot.threshold_kg,
        near_expiry=False,  # lots carry no expiry dates
        overstock=overstock,
    )


def require_positive(field: str, quantity_kg: float) -> float:
    rounded = kg(quantity_kg)
    if rounded <= 0:
        raise ValidationError(field, "must be at least 0.001 kg", quantity_kg)
    return rounded


def require_active(lot: ThreadInventoryLot) -> None:
    if lot.archived:
        raise ValidationError("lot_id", "lot is archived", lot.id)


def record_movement(
    lot: ThreadInventoryLot,
    movement_type: MovementType,
    quantity_kg: float,
    actor: Actor,
    notes: str = "",
    order_id: str | None = None,
    at: datetime | None = None,
) -> StockMovement:
    """Append a movement and refresh the alerts. Callers change quantities first."""
    movement = StockMovement(
        moved_at=at or utcnow(),
        movement_type=movement_type,
        quantity=quantity_kg,
        order_id=order_id,
        notes=notes,
        performed_by=actor.user_id,
    )
    lot.stock_movements.append(movement)
    lot.alerts = recompute_alerts(lot)
    return movement


def apply_restock(
    lot: ThreadInventoryLot,
    quantity_kg: float,
    actor: Actor,
    notes: str = "",
    at: datetime | None = None,
) -> StockMovement:
    require_active(lot)
    quantity_kg = require_positive("quantity_kg", quantity_kg)
    at = at or utcnow()
    lot.current_stock_kg = kg(lot.current_stock_kg + quantity_kg)
    lot.last_restocked_date = at
    lot.last_restocked_by = actor.user_id
    return record_movement(
        lot, MovementType.IN, quantity_kg, actor, notes=notes or "Restocked", at=at
    )


def apply_adjustment(
    lot: ThreadInventoryLot,
    new_stock_kg: float,
    actor: Actor,
    reason: str,
    at: datetime | None = None,
) -> StockMovement:
    """Set the physical stock directly. The movement quantity is the signed delta."""
    require_active(lot)
    new_stock_kg = kg(new_stock_kg)
    if new_stock_kg < 0:
        raise ValidationError("new_stock_kg", "cannot be negative", new_stock_kg)
    if new_stock_kg < lot.allocated_kg:
        raise ValidationError(
            "new_stock_kg",
            f"cannot be below the {lot.allocated_kg} kg already allocated",
            new_stock_kg,
        )
    if not reason.strip():
        raise ValidationError("reason", "an adjustment needs a reason")
    delta = kg(new_stock_kg - lot.current_stock_kg)
    lot.current_stock_kg = new_stock_kg
    return record_movement(lot, MovementType.ADJUSTMENT, delta, actor, notes=reason, at=at)


def apply_issue(
    lot: ThreadInventoryLot,
    quantity_kg: float,
    actor: Actor,
    order_id: str | None = None,
    notes: str = "",
    at: datetime | None = None,
) -> StockMovement:
    """Consume unallocated stock."""
    require_active(lot)
    quantity_kg = require_positive("quantity_kg", quantity_kg)
    if quantity_kg > lot.available_kg:
        raise InsufficientStockError(lot.id, quantity_kg, lot.available_kg)
    lot.current_stock_kg = kg(lot.current_stock_kg - quantity_kg)
    return record_movement(
        lot,
        MovementType.OUT,
        quantity_kg,
        actor,
        notes=notes or "Issued to production",
        order_id=order_id,
        at=at,
    )


@dataclass
class LedgerUpdate:
    """A lot after a ledger operation and the movement it appended."""

    lot: ThreadInventoryLot
    movement: StockMovement | None
    previous_alerts: StockAlerts


class StockLedger:
    """Authoritative quantity state for thread lots."""

    def __init__(self, executor: OptimisticExecutor):
        self._executor = executor

    async def apply_to_lot(
        self,
        lot_id: str,
        operation: str,
        apply: Callable[[ThreadInventoryLot], Any],
    ) -> LedgerUpdate:
        """Run a ledger rule against a lot and report the movement it appended."""
        captured: dict[str, StockAlerts] = {}

        def apply_and_capture(lot: ThreadInventoryLot) -> None:
            # Re-captured on every attempt so it reflects the state actually written over
            captured["alerts"] = lot.alerts.model_copy()
            apply(lot)

        lot = await self._executor.mutate(ThreadInventoryLot, lot_id, apply_and_capture, operation)
        movement = lot.stock_movements[-1] if lot.stock_movements else None
        return LedgerUpdate(lot=lot, movement=movement, previous_alerts=captured["alerts"])

    async def get_lot(self, lot_id: str) -> ThreadInventoryLot:
        return await self._executor.get(ThreadInventoryLot, lot_id)

    async def open_lot(
        self,
        raw_material_id: str,
        actor: Actor,
        initial_stock_kg: float = 0.0,
        threshold_kg: float = 0.0,
        reorder_point_kg: float = 0.0,
        max_stock_kg: float | None = None,
        cost_per_kg: float | None = None,
        location: str | None = None,
    ) -> ThreadInventoryLot:
        """Create the lot for a raw material. One lot per material."""
        material = await self._executor.get(RawMaterial, raw_material_id)
        if not material.is_active:
            raise ValidationError("raw_material_id", "material is discontinued", raw_material_id)
        if initial_stock_kg < 0:
            raise ValidationError("initial_stock_kg", "cannot be negative", initial_stock_kg)

        lot = ThreadInventoryLot(
            raw_material_id=raw_material_id,
            threshold_kg=threshold_kg,
            reorder_point_kg=reorder_point_kg,
            max_stock_kg=max_stock_kg,
            cost_per_kg=material.cost_per_kg if cost_per_kg is None else cost_per_kg,
            location=location,
        )
        if initial_stock_kg > 0:
            apply_restock(lot, initial_stock_kg, actor, notes="Opening stock")
        else:
            lot.alerts = recompute_alerts(lot)

        # The lot shares its material's ID, so a second lot for it cannot be created
        try:
            lot = await self._executor.create(lot, doc_id=raw_material_id)
        except DuplicateDocumentError:
            raise ValidationError(
                "raw_material_id", "a lot already tracks this material", raw_material_id
            ) from None
        logger.info(
            "thread_lot_opened",
            lot_id=lot.id,
            raw_material_id=raw_material_id,
            current_stock_kg=lot.current_stock_kg,
        )
        return lot

    async def restock(
        self, lot_id: str, quantity_kg: float, actor: Actor, notes: str = ""
    ) -> LedgerUpdate:
        update = await self.apply_to_lot(
            lot_id, "restock", lambda lot: apply_restock(lot, quantity_kg, actor, notes=notes)
        )
        logger.info(
            "thread_restocked",
            lot_id=lot_id,
            quantity_kg=quantity_kg,
            current_stock_kg=update.lot.current_stock_kg,
            performed_by=actor.user_id,
        )
        return update

    async def adjust(
        self, lot_id: str, new_stock_kg: float, actor: Actor, reason: str
    ) -> LedgerUpdate:
        update = await self.apply_to_lot(
            lot_id, "adjust", lambda lot: apply_adjustment(lot, new_stock_kg, actor, reason)
        )
        logger.info(
            "thread_stock_adjusted",
            lot_id=lot_id,
            new_stock_kg=update.lot.current_stock_kg,
            delta_kg=update.movement.quantity if update.movement else None,
            performed_by=actor.user_id,
        )
        return update

    async def issue(
        self,
        lot_id: str,
        quantity_kg: float,
        actor: Actor,
        order_id: str | None = None,
        notes: str = "",
    ) -> LedgerUpdate:
        update = await self.apply_to_lot(
            lot_id,
            "issue",
            lambda lot: apply_issue(lot, quantity_kg, actor, order_id=order_id, notes=notes),
        )
        logger.info(
            "thread_issued",
            lot_id=lot_id,
            quantity_kg=quantity_kg,
            order_id=order_id,
            current_stock_kg=update.lot.current_stock_kg,
        )
        return update

    async def archive(self, lot_id: str, actor: Actor) -> ThreadInventoryLot:
        """Soft-delete a lot. Its movement history stays readable."""

        def apply(lot: ThreadInventoryLot) -> None:
            require_active(lot)
            if lot.allocated_kg > 0:
                raise ValidationError(
                    "lot_id", f"{lot.allocated_kg} kg is still allocated", lot.id
                )
            lot.archived = True

        lot = await self._executor.mutate(ThreadInventoryLot, lot_id, apply, "archive")
        logger.info("thread_lot_archived", lot_id=lot_id, performed_by=actor.user_id)
        return lot
