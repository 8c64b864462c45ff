"""API test fixtures: the app wired to an in-memory document store."""

import pytest
from httpx import ASGITransport, AsyncClient

from aurora.api import dependencies as deps
from aurora.api.main import app
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


@pytest.fixture
def overrides(executor, ledger, allocation, notifier, sequences):
    stock = {"ledger": ledger, "allocation": allocation, "notifier": notifier}
    orders = {"executor": executor, "sequences": sequences}
    tasks = {"executor": executor, "sequences": sequences, "notifier": notifier}
    return {
        deps.get_exec: lambda: executor,
        deps.get_ledger: lambda: ledger,
        deps.get_notifier: lambda: notifier,
        deps.get_register_raw_material_use_case: lambda: RegisterRawMaterialUseCase(executor),
        deps.get_register_client_use_case: lambda: RegisterClientUseCase(**orders),
        deps.get_register_contractor_use_case: lambda: RegisterContractorUseCase(**orders),
        deps.get_register_worker_use_case: lambda: RegisterWorkerUseCase(**orders),
        deps.get_register_product_use_case: lambda: RegisterProductUseCase(**orders),
        deps.get_open_lot_use_case: lambda: OpenThreadLotUseCase(**stock),
        deps.get_restock_use_case: lambda: RestockThreadUseCase(**stock),
        deps.get_adjust_use_case: lambda: AdjustThreadStockUseCase(**stock),
        deps.get_allocate_use_case: lambda: AllocateThreadUseCase(**stock),
        deps.get_release_use_case: lambda: ReleaseThreadUseCase(**stock),
        deps.get_issue_use_case: lambda: IssueThreadUseCase(**stock),
        deps.get_archive_lot_use_case: lambda: ArchiveThreadLotUseCase(**stock),
        deps.get_create_order_use_case: lambda: CreateOrderUseCase(**orders),
        deps.get_update_order_items_use_case: lambda: UpdateOrderItemsUseCase(**orders),
        deps.get_change_order_status_use_case: lambda: ChangeOrderStatusUseCase(**orders),
        deps.get_assign_order_use_case: lambda: AssignOrderToContractorUseCase(**orders),
        deps.get_create_task_use_case: lambda: CreateTaskUseCase(**tasks),
        deps.get_change_task_status_use_case: lambda: ChangeTaskStatusUseCase(**tasks),
        deps.get_record_progress_use_case: lambda: RecordTaskProgressUseCase(**tasks),
        deps.get_dashboard_stats_use_case: lambda: GetDashboardStatsUseCase(executor),
    }


@pytest.fixture
async def client(overrides):
    app.dependency_overrides.update(overrides)
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        headers={"X-User-Id": "emp-1"},
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def lot_id(client, material) -> str:
    """A lot of 100 kg with a 20 kg low-stock threshold."""
    response = await client.post(
        "/api/thread-inventory",
        json={"raw_material_id": material.id, "initial_stock_kg": 100, "threshold_kg": 20},
    )
    assert response.status_code == 201
    return response.json()["id"]
