"""Tests for the order use cases."""

from unittest.mock import AsyncMock

import pytest

from aurora.application.dto.requests import (
    AssignOrderRequest,
    ChangeOrderStatusRequest,
    CreateContractorRequest,
    CreateOrderRequest,
    OrderItemRequest,
    ThreadAllocationRequest,
)
from aurora.application.use_cases import (
    AssignOrderToContractorUseCase,
    ChangeOrderStatusUseCase,
    CreateOrderUseCase,
    RegisterContractorUseCase,
    UpdateOrderItemsUseCase,
)
from aurora.application.use_cases.orders import build_items
from aurora.core.entities import Contractor, ContractorStatus, Order, OrderStatus
from aurora.core.exceptions import IllegalTransitionError, ValidationError

ITEMS = [
    OrderItemRequest(item_id="a", product_id="p1", quantity=2, unit_price=100),
    OrderItemRequest(
        item_id="b",
        product_id="p2",
        quantity=3,
        unit_price=50,
        thread_allocations=[
            ThreadAllocationRequest(raw_material_id="m1", allocated_kg=1.5, cost_per_kg=8)
        ],
        total_wage=30,
    ),
]


@pytest.fixture
def create_uc(executor, sequences) -> CreateOrderUseCase:
    return CreateOrderUseCase(executor=executor, sequences=sequences)


@pytest.fixture
async def order(create_uc, actor) -> Order:
    return await create_uc.execute(CreateOrderRequest(client_id="c1", items=ITEMS), actor)


class TestBuildItems:
    def test_generates_missing_ids(self):
        items = build_items([OrderItemRequest(product_id="p1", quantity=1, unit_price=1)])
        assert len(items[0].item_id) == 12

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ValidationError):
            build_items([ITEMS[0], ITEMS[0]])

    def test_thread_allocations_carried(self):
        assert build_items(ITEMS)[1].thread_allocations[0].allocated_kg == 1.5


class TestCreateOrder:
    async def test_totals_and_number(self, order, actor):
        assert order.id is not None
        assert order.status == OrderStatus.DRAFT
        assert order.order_number == f"AUR-ORD-{order.order_date.year}-001"
        assert order.total_quantity == 5
        assert order.total_value == 350
        assert order.total_cost == 42
        assert order.estimated_profit == 308
        assert order.created_by == actor.user_id

    async def test_numbers_increase(self, create_uc, order, actor):
        second = await create_uc.execute(CreateOrderRequest(client_id="c2"), actor)
        assert second.order_number.endswith("-002")

    async def test_uses_injected_services(self, actor):
        executor = AsyncMock()
        executor.create.side_effect = lambda record: record
        sequences = AsyncMock()
        sequences.next_code.return_value = "AUR-ORD-2024-017"

        order = await CreateOrderUseCase(executor=executor, sequences=sequences).execute(
            CreateOrderRequest(client_id="c1", items=ITEMS[:1]), actor
        )
        assert order.order_number == "AUR-ORD-2024-017"
        assert order.total_value == 200


class TestUpdateOrderItems:
    async def test_replaces_items_and_recomputes(self, executor, order, actor):
        use_case = UpdateOrderItemsUseCase(executor=executor)
        updated = await use_case.execute(
            order.id,
            [OrderItemRequest(item_id="c", product_id="p3", quantity=10, unit_price=12.5)],
            actor,
        )
        assert [item.item_id for item in updated.items] == ["c"]
        assert updated.total_value == 125
        assert updated.total_cost == 0
        assert updated.version == order.version + 1

    async def test_closed_order_rejected(self, executor, order, actor):
        await ChangeOrderStatusUseCase(executor=executor).execute(
            order.id, ChangeOrderStatusRequest(status=OrderStatus.CANCELLED), actor
        )
        with pytest.raises(ValidationError):
            await UpdateOrderItemsUseCase(executor=executor).execute(order.id, ITEMS, actor)


class TestChangeOrderStatus:
    async def test_confirm_stamps_approval(self, executor, order, admin):
        updated = await ChangeOrderStatusUseCase(executor=executor).execute(
            order.id, ChangeOrderStatusRequest(status=OrderStatus.CONFIRMED, notes="ok"), admin
        )
        assert updated.status == OrderStatus.CONFIRMED
        assert updated.approved_by == "admin"
        assert updated.approved_at == updated.status_history[-1].timestamp

    async def test_illegal_move_leaves_order_unchanged(self, executor, order, admin):
        with pytest.raises(IllegalTransitionError):
            await ChangeOrderStatusUseCase(executor=executor).execute(
                order.id, ChangeOrderStatusRequest(status=OrderStatus.COMPLETED), admin
            )
        stored = await executor.get(Order, order.id)
        assert stored.status == OrderStatus.DRAFT
        assert stored.version == order.version


@pytest.fixture
async def contractor(executor, sequences, admin) -> Contractor:
    return await RegisterContractorUseCase(executor=executor, sequences=sequences).execute(
        CreateContractorRequest(contact_person_name="Ravi", phone="555-0101"), admin
    )


class TestAssignOrderToContractor:
    async def test_confirmed_order_starts_production(self, executor, order, contractor, admin):
        await ChangeOrderStatusUseCase(executor=executor).execute(
            order.id, ChangeOrderStatusRequest(status=OrderStatus.CONFIRMED), admin
        )
        assigned = await AssignOrderToContractorUseCase(executor=executor).execute(
            order.id, AssignOrderRequest(contractor_id=contractor.id), admin
        )
        assert assigned.status == OrderStatus.IN_PROGRESS
        assert assigned.assigned_contractor_id == contractor.id
        assert assigned.assigned_to == "admin"
        assert assigned.status_history[-1].notes == "Assigned to CONT-001"

    async def test_reassignment_keeps_status(self, executor, order, contractor, sequences, admin):
        use_case = AssignOrderToContractorUseCase(executor=executor)
        status_uc = ChangeOrderStatusUseCase(executor=executor)
        await status_uc.execute(order.id, ChangeOrderStatusRequest(status=OrderStatus.CONFIRMED), admin)
        first = await use_case.execute(order.id, AssignOrderRequest(contractor_id=contractor.id), admin)
        other = await RegisterContractorUseCase(executor=executor, sequences=sequences).execute(
            CreateContractorRequest(contact_person_name="Meena", phone="555-0102"), admin
        )

        second = await use_case.execute(order.id, AssignOrderRequest(contractor_id=other.id), admin)

        assert second.status == OrderStatus.IN_PROGRESS
        assert second.assigned_contractor_id == other.id
        assert len(second.status_history) == len(first.status_history)

    async def test_draft_order_cannot_be_assigned(self, executor, order, contractor, admin):
        with pytest.raises(IllegalTransitionError):
            await AssignOrderToContractorUseCase(executor=executor).execute(
                order.id, AssignOrderRequest(contractor_id=contractor.id), admin
            )
        stored = await executor.get(Order, order.id)
        assert stored.assigned_contractor_id is None

    async def test_unknown_contractor(self, executor, order, admin):
        with pytest.raises(ValidationError):
            await AssignOrderToContractorUseCase(executor=executor).execute(
                order.id, AssignOrderRequest(contractor_id="nobody"), admin
            )

    async def test_suspended_contractor(self, executor, order, contractor, admin):
        def suspend(record: Contractor) -> None:
            record.status = ContractorStatus.SUSPENDED

        await executor.mutate(Contractor, contractor.id, suspend, "suspend_contractor")
        with pytest.raises(ValidationError):
            await AssignOrderToContractorUseCase(executor=executor).execute(
                order.id, AssignOrderRequest(contractor_id=contractor.id), admin
            )
