"""
Thread stock use cases: open, restock, adjust, allocate, release, issue, archive.

Each operation commits the lot first and only then writes any notification
it triggers.
"""

from aurora.application.dto.requests import (
    AdjustStockRequest,
    AllocationRequest,
    IssueThreadRequest,
    OpenLotRequest,
    RestockRequest,
)
from aurora.application.dto.responses import LedgerOperationResponse
from aurora.core.entities.actor import Actor
from aurora.core.entities.thread_inventory import ThreadInventoryLot
from aurora.core.services.allocation import AllocationEngine
from aurora.core.services.notifier import NotificationService
from aurora.core.services.stock_ledger import LedgerUpdate, StockLedger


class ThreadStockUseCase:
    """Shared wiring for lot operations."""

    def __init__(
        self,
        ledger: StockLedger | None = None,
        allocation: AllocationEngine | None = None,
        notifier: NotificationService | None = None,
    ):
        self._ledger = ledger
        self._allocation = allocation
        self._notifier = notifier

    async def _get_ledger(self) -> StockLedger:
        if self._ledger is None:
            from aurora.application.services import get_stock_ledger

            self._ledger = await get_stock_ledger()
        return self._ledger

    async def _get_allocation(self) -> AllocationEngine:
        if self._allocation is None:
            from aurora.application.services import get_allocation_engine

            self._allocation = await get_allocation_engine()
        return self._allocation

    async def _get_notifier(self) -> NotificationService:
        if self._notifier is None:
            from aurora.application.services import get_notification_service

            self._notifier = await get_notification_service()
        return self._notifier

    async def _notify_stock_change(self, update: LedgerUpdate, actor: Actor) -> None:
        notifier = await self._get_notifier()
        await notifier.stock_changed(update, actor)

    @staticmethod
    def to_response(update: LedgerUpdate) -> LedgerOperationResponse:
        return LedgerOperationResponse(
            lot=update.lot,
            movement=update.movement,
            alerts_changed=update.previous_alerts != update.lot.alerts,
        )


class OpenThreadLotUseCase(ThreadStockUseCase):
    """Start tracking stock for a raw material."""

    async def execute(self, request: OpenLotRequest, actor: Actor) -> ThreadInventoryLot:
        ledger = await self._get_ledger()
        return await ledger.open_lot(
            request.raw_material_id,
            actor,
            initial_stock_kg=request.initial_stock_kg,
            threshold_kg=request.threshold_kg,
            reorder_point_kg=request.reorder_point_kg,
            max_stock_kg=request.max_stock_kg,
            cost_per_kg=request.cost_per_kg,
            location=request.location,
        )


class RestockThreadUseCase(ThreadStockUseCase):
    """Receive thread into a lot (IN movement)."""

    async def execute(self, lot_id: str, request: RestockRequest, actor: Actor) -> LedgerUpdate:
        ledger = await self._get_ledger()
        update = await ledger.restock(lot_id, request.quantity_kg, actor, notes=request.notes)

        notifier = await self._get_notifier()
        await notifier.restocked(update.lot, request.quantity_kg, actor)
        return update


class AdjustThreadStockUseCase(ThreadStockUseCase):
    """Correct a lot's physical stock (ADJUSTMENT movement)."""

    async def execute(
        self, lot_id: str, request: AdjustStockRequest, actor: Actor
    ) -> LedgerUpdate:
        ledger = await self._get_ledger()
        update = await ledger.adjust(lot_id, request.new_stock_kg, actor, request.reason)
        await self._notify_stock_change(update, actor)
        return update


class AllocateThreadUseCase(ThreadStockUseCase):
    """Reserve lot quantity for an order (ALLOCATED movement)."""

    async def execute(
        self, lot_id: str, request: AllocationRequest, actor: Actor
    ) -> LedgerUpdate:
        allocation = await self._get_allocation()
        return await allocation.allocate(lot_id, request.quantity_kg, request.order_id, actor)


class ReleaseThreadUseCase(ThreadStockUseCase):
    """Return reserved quantity to the lot (RELEASED movement)."""

    async def execute(
        self, lot_id: str, request: AllocationRequest, actor: Actor
    ) -> LedgerUpdate:
        allocation = await self._get_allocation()
        return await allocation.release(lot_id, request.quantity_kg, request.order_id, actor)


class IssueThreadUseCase(ThreadStockUseCase):
    """Consume free stock from a lot (OUT movement)."""

    async def execute(
        self, lot_id: str, request: IssueThreadRequest, actor: Actor
    ) -> LedgerUpdate:
        ledger = await self._get_ledger()
        update = await ledger.issue(
            lot_id,
            request.quantity_kg,
            actor,
            order_id=request.order_id,
            notes=request.notes,
        )
        await self._notify_stock_change(update, actor)
        return update


class ArchiveThreadLotUseCase(ThreadStockUseCase):
    """Soft-delete a lot with nothing allocated."""

    async def execute(self, lot_id: str, actor: Actor) -> ThreadInventoryLot:
        ledger = await self._get_ledger()
        return await ledger.archive(lot_id, actor)
