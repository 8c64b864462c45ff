"""
Dashboard Stats Use Case.

Headline figures across orders, stock, tasks and clients.
"""

from collections import Counter
from typing import TypeVar

from aurora.application.dto.responses import DashboardStatsResponse, LowStockItem
from aurora.config import get_logger
from aurora.core.entities.client import Client, ClientStatus
from aurora.core.entities.document import Record
from aurora.core.entities.order import Order, OrderStatus
from aurora.core.entities.task import Task, TaskStatus
from aurora.core.entities.thread_inventory import ThreadInventoryLot
from aurora.core.services.optimistic import OptimisticExecutor

logger = get_logger(__name__)

R = TypeVar("R", bound=Record)

PAGE_SIZE = 500

REVENUE_STATUSES = {OrderStatus.COMPLETED, OrderStatus.PARTIALLY_COMPLETED}


class GetDashboardStatsUseCase:
    """Aggregate dashboard figures from the stored records."""

    def __init__(self, executor: OptimisticExecutor | None = None):
        self._executor = executor

    async def _get_executor(self) -> OptimisticExecutor:
        if self._executor is None:
            from aurora.application.services import get_executor

            self._executor = await get_executor()
        return self._executor

    async def _load_all(self, model: type[R]) -> list[R]:
        executor = await self._get_executor()
        records: list[R] = []
        offset = 0
        while True:
            page = await executor.find(model, limit=PAGE_SIZE, offset=offset)
            records.extend(page)
            if len(page) < PAGE_SIZE:
                return records
            offset += PAGE_SIZE

    async def execute(self) -> DashboardStatsResponse:
        orders = await self._load_all(Order)
        lots = [lot for lot in await self._load_all(ThreadInventoryLot) if not lot.archived]
        tasks = await self._load_all(Task)
        clients = await self._load_all(Client)

        low_stock = [
            LowStockItem(
                lot_id=lot.id,
                raw_material_id=lot.raw_material_id,
                current_stock_kg=lot.current_stock_kg,
                available_kg=lot.available_kg,
                threshold_kg=lot.threshold_kg,
                alerts=lot.alerts,
            )
            for lot in lots
            if lot.current_stock_kg <= lot.threshold_kg
        ]

        stats = DashboardStatsResponse(
            total_orders=len(orders),
            orders_by_status=dict(Counter(order.status.value for order in orders)),
            total_thread_kg=round(sum(lot.current_stock_kg for lot in lots), 3),
            total_thread_value=round(sum(lot.total_value for lot in lots), 2),
            low_stock_items=len(low_stock),
            low_stock=low_stock,
            revenue=round(
                sum(order.total_value for order in orders if order.status in REVENUE_STATUSES), 2
            ),
            active_tasks=sum(1 for task in tasks if task.status == TaskStatus.IN_PROGRESS),
            pending_approvals=sum(
                1 for task in tasks if task.status == TaskStatus.PENDING_APPROVAL
            ),
            active_clients=sum(1 for client in clients if client.status == ClientStatus.ACTIVE),
        )
        logger.debug(
            "dashboard_stats_computed",
            total_orders=stats.total_orders,
            low_stock_items=stats.low_stock_items,
        )
        return stats
