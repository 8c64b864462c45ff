"""Tests for the allocation engine."""

import pytest

from aurora.core.entities import Actor, MovementType, ThreadInventoryLot
from aurora.core.exceptions import InsufficientStockError, OverReleaseError, ValidationError
from aurora.core.services import apply_allocation, apply_release

ACTOR = Actor(user_id="emp-1")


def allocated_balance(lot: ThreadInventoryLot) -> float:
    allocated = sum(m.quantity for m in lot.movements_of(MovementType.ALLOCATED))
    released = sum(m.quantity for m in lot.movements_of(MovementType.RELEASED))
    return round(allocated - released, 3)


@pytest.fixture
async def lot_id(ledger, material, actor) -> str:
    lot = await ledger.open_lot(material.id, actor, initial_stock_kg=100, threshold_kg=20)
    return lot.id


class TestApplyAllocation:
    def test_reserves_without_touching_stock(self):
        lot = ThreadInventoryLot(id="lot1", raw_material_id="m1", current_stock_kg=100)
        movement = apply_allocation(lot, 30, "o1", ACTOR)

        assert lot.current_stock_kg == 100
        assert lot.allocated_kg == 30
        assert movement.movement_type == MovementType.ALLOCATED
        assert movement.order_id == "o1"
        assert movement.performed_by == "emp-1"

    def test_requires_order(self):
        lot = ThreadInventoryLot(id="lot1", raw_material_id="m1", current_stock_kg=100)
        with pytest.raises(ValidationError):
            apply_allocation(lot, 1, " ", ACTOR)

    @pytest.mark.parametrize("quantity", [0, -1, 0.0004])
    def test_rejects_quantities_that_round_to_nothing(self, quantity):
        lot = ThreadInventoryLot(id="lot1", raw_material_id="m1", current_stock_kg=100)
        with pytest.raises(ValidationError):
            apply_allocation(lot, quantity, "o1", ACTOR)
        assert lot.allocated_kg == 0
        assert lot.stock_movements == []

    def test_sub_gram_release_rejected(self):
        lot = ThreadInventoryLot(
            id="lot1", raw_material_id="m1", current_stock_kg=100, allocated_kg=10
        )
        with pytest.raises(ValidationError):
            apply_release(lot, 0.0004, "o1", ACTOR)
        assert lot.allocated_kg == 10

    def test_release_more_than_allocated(self):
        lot = ThreadInventoryLot(
            id="lot1", raw_material_id="m1", current_stock_kg=100, allocated_kg=10
        )
        with pytest.raises(OverReleaseError) as exc_info:
            apply_release(lot, 10.5, "o1", ACTOR)
        assert exc_info.value.details["allocated"] == 10
        assert lot.allocated_kg == 10


class TestAllocationEngine:
    async def test_scenario_allocate_then_release(self, allocation, lot_id, actor):
        update = await allocation.allocate(lot_id, 30, "O1", actor)
        assert update.lot.allocated_kg == 30
        assert update.lot.available_kg == 70
        assert len(update.lot.movements_of(MovementType.ALLOCATED)) == 1
        assert update.lot.alerts.low_stock is False

        update = await allocation.release(lot_id, 10, "O1", actor)
        assert update.lot.allocated_kg == 20
        assert update.lot.available_kg == 80
        assert len(update.lot.movements_of(MovementType.RELEASED)) == 1
        assert update.lot.alerts.low_stock is False

    async def test_allocate_exactly_available(self, allocation, lot_id, actor):
        update = await allocation.allocate(lot_id, 100, "o1", actor)
        assert update.lot.available_kg == 0

    async def test_allocate_just_over_available(self, allocation, ledger, lot_id, actor):
        with pytest.raises(InsufficientStockError):
            await allocation.allocate(lot_id, 100.01, "o1", actor)
        lot = await ledger.get_lot(lot_id)
        assert lot.allocated_kg == 0
        assert lot.version == 1

    async def test_release_restores_previous_state(self, allocation, ledger, lot_id, actor):
        await allocation.allocate(lot_id, 12.5, "o1", actor)
        before = await ledger.get_lot(lot_id)

        await allocation.allocate(lot_id, 7.25, "o2", actor)
        update = await allocation.release(lot_id, 7.25, "o2", actor)

        assert update.lot.allocated_kg == before.allocated_kg
        assert update.lot.available_kg == before.available_kg

    async def test_calls_are_not_deduplicated(self, allocation, lot_id, actor):
        await allocation.allocate(lot_id, 10, "o1", actor)
        update = await allocation.allocate(lot_id, 10, "o1", actor)
        assert update.lot.allocated_kg == 20

    async def test_movement_log_matches_allocated_total(self, allocation, lot_id, actor):
        for quantity, order in [(10.1, "o1"), (20.2, "o2"), (5.05, "o3")]:
            await allocation.allocate(lot_id, quantity, order, actor)
        await allocation.release(lot_id, 4.1, "o1", actor)
        update = await allocation.release(lot_id, 20.2, "o2", actor)

        assert allocated_balance(update.lot) == update.lot.allocated_kg
        assert update.lot.available_kg == round(
            update.lot.current_stock_kg - update.lot.allocated_kg, 3
        )
        assert update.lot.available_kg >= 0

    async def test_over_release_is_reported(self, allocation, lot_id, actor):
        await allocation.allocate(lot_id, 5, "o1", actor)
        with pytest.raises(OverReleaseError):
            await allocation.release(lot_id, 6, "o1", actor)
