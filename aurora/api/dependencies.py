"""
Dependency injection container for FastAPI.

Provides the acting user, services and use case instances to route handlers.
"""

from fastapi import Header, HTTPException, status

from aurora.application.services import (
    get_executor,
    get_notification_service,
    get_stock_ledger,
)
from aurora.application.use_cases import (
    AdjustThreadStockUseCase,
    AllocateThreadUseCase,
    ArchiveThreadLotUseCase,
    AssignOrderToContractorUseCase,
    ChangeOrderStatusUseCase,
    ChangeTaskStatusUseCase,
    CreateOrderUseCase,
    CreateTaskUseCase,
    GetDashboardStatsUseCase,
    IssueThreadUseCase,
    OpenThreadLotUseCase,
    RecordTaskProgressUseCase,
    RegisterClientUseCase,
    RegisterContractorUseCase,
    RegisterProductUseCase,
    RegisterRawMaterialUseCase,
    RegisterWorkerUseCase,
    ReleaseThreadUseCase,
    RestockThreadUseCase,
    UpdateOrderItemsUseCase,
)
from aurora.core.entities.actor import Actor, UserRole
from aurora.core.services import NotificationService, OptimisticExecutor, StockLedger


async def get_actor(
    x_user_id: str | None = Header(default=None),
    x_user_role: UserRole = Header(default=UserRole.INTERNAL_EMPLOYEE),
) -> Actor:
    """Build the acting user from the X-User-Id / X-User-Role headers."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-User-Id header is required",
        )
    return Actor(user_id=x_user_id.strip(), role=x_user_role)


# Service dependencies
async def get_exec() -> OptimisticExecutor:
    """Get the optimistic executor."""
    return await get_executor()


async def get_ledger() -> StockLedger:
    """Get the stock ledger."""
    return await get_stock_ledger()


async def get_notifier() -> NotificationService:
    """Get the notification service."""
    return await get_notification_service()


# Use case dependencies
def get_register_raw_material_use_case() -> RegisterRawMaterialUseCase:
    return RegisterRawMaterialUseCase()


def get_register_client_use_case() -> RegisterClientUseCase:
    return RegisterClientUseCase()


def get_register_contractor_use_case() -> RegisterContractorUseCase:
    return RegisterContractorUseCase()


def get_register_worker_use_case() -> RegisterWorkerUseCase:
    return RegisterWorkerUseCase()


def get_register_product_use_case() -> RegisterProductUseCase:
    return RegisterProductUseCase()


def get_open_lot_use_case() -> OpenThreadLotUseCase:
    return OpenThreadLotUseCase()


def get_restock_use_case() -> RestockThreadUseCase:
    return RestockThreadUseCase()


def get_adjust_use_case() -> AdjustThreadStockUseCase:
    return AdjustThreadStockUseCase()


def get_allocate_use_case() -> AllocateThreadUseCase:
    return AllocateThreadUseCase()


def get_release_use_case() -> ReleaseThreadUseCase:
    return ReleaseThreadUseCase()


def get_issue_use_case() -> IssueThreadUseCase:
    return IssueThreadUseCase()


def get_archive_lot_use_case() -> ArchiveThreadLotUseCase:
    return ArchiveThreadLotUseCase()


def get_create_order_use_case() -> CreateOrderUseCase:
    return CreateOrderUseCase()


def get_update_order_items_use_case() -> UpdateOrderItemsUseCase:
    return UpdateOrderItemsUseCase()


def get_change_order_status_use_case() -> ChangeOrderStatusUseCase:
    return ChangeOrderStatusUseCase()


def get_assign_order_use_case() -> AssignOrderToContractorUseCase:
    return AssignOrderToContractorUseCase()


def get_create_task_use_case() -> CreateTaskUseCase:
    return CreateTaskUseCase()


def get_change_task_status_use_case() -> ChangeTaskStatusUseCase:
    return ChangeTaskStatusUseCase()


def get_record_progress_use_case() -> RecordTaskProgressUseCase:
    return RecordTaskProgressUseCase()


def get_dashboard_stats_use_case() -> GetDashboardStatsUseCase:
    return GetDashboardStatsUseCase()
