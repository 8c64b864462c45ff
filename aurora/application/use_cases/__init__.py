"""Application use cases."""

from aurora.application.use_cases.dashboard_stats import GetDashboardStatsUseCase
from aurora.application.use_cases.orders import (
    AssignOrderToContractorUseCase,
    ChangeOrderStatusUseCase,
    CreateOrderUseCase,
    UpdateOrderItemsUseCase,
)
from aurora.application.use_cases.register_raw_material import RegisterRawMaterialUseCase
from aurora.application.use_cases.registry import (
    RegisterClientUseCase,
    RegisterContractorUseCase,
    RegisterProductUseCase,
    RegisterWorkerUseCase,
)
from aurora.application.use_cases.tasks import (
    ChangeTaskStatusUseCase,
    CreateTaskUseCase,
    RecordTaskProgressUseCase,
)
from aurora.application.use_cases.thread_stock import (
    AdjustThreadStockUseCase,
    AllocateThreadUseCase,
    ArchiveThreadLotUseCase,
    IssueThreadUseCase,
    OpenThreadLotUseCase,
    ReleaseThreadUseCase,
    RestockThreadUseCase,
)

__all__ = [
    "RegisterRawMaterialUseCase",
    "RegisterClientUseCase",
    "RegisterContractorUseCase",
    "RegisterWorkerUseCase",
    "RegisterProductUseCase",
    "OpenThreadLotUseCase",
    "RestockThreadUseCase",
    "AdjustThreadStockUseCase",
    "AllocateThreadUseCase",
    "ReleaseThreadUseCase",
    "IssueThreadUseCase",
    "ArchiveThreadLotUseCase",
    "CreateOrderUseCase",
    "UpdateOrderItemsUseCase",
    "ChangeOrderStatusUseCase",
    "AssignOrderToContractorUseCase",
    "CreateTaskUseCase",
    "ChangeTaskStatusUseCase",
    "RecordTaskProgressUseCase",
    "GetDashboardStatsUseCase",
]
