"""Concurrent writers against the SQLite document store."""

import asyncio

import pytest

from aurora.core.entities import Actor, MovementType, RawMaterial
from aurora.core.exceptions import InsufficientStockError
from aurora.core.services import (
    AllocationEngine,
    CodeKind,
    OptimisticExecutor,
    SequenceGenerator,
    StockLedger,
)


@pytest.fixture
def sqlite_executor(sqlite_store) -> OptimisticExecutor:
    return OptimisticExecutor(
        sqlite_store, max_attempts=10, retry_delay=0.001, retry_max_delay=0.01, timeout=10
    )


@pytest.fixture
async def lot_id(sqlite_executor) -> str:
    material = await sqlite_executor.create(
        RawMaterial(material_code="THR-1", name="Cotton", cost_per_kg=8)
    )
    ledger = StockLedger(sqlite_executor)
    lot = await ledger.open_lot(material.id, Actor(user_id="emp-1"), initial_stock_kg=100)
    return lot.id


class TestConcurrentAllocation:
    async def test_only_one_of_two_competing_allocations_wins(self, sqlite_executor, lot_id):
        engine = AllocationEngine(sqlite_executor)
        results = await asyncio.gather(
            engine.allocate(lot_id, 60, "O1", Actor(user_id="a")),
            engine.allocate(lot_id, 60, "O2", Actor(user_id="b")),
            return_exceptions=True,
        )

        failures = [r for r in results if isinstance(r, Exception)]
        assert len(failures) == 1
        assert isinstance(failures[0], InsufficientStockError)

        lot = await StockLedger(sqlite_executor).get_lot(lot_id)
        assert lot.allocated_kg == 60
        assert lot.available_kg == 40
        assert len(lot.movements_of(MovementType.ALLOCATED)) == 1

    async def test_no_lost_updates(self, sqlite_executor, lot_id):
        engine = AllocationEngine(sqlite_executor)
        results = await asyncio.gather(
            *(engine.allocate(lot_id, 25, f"O{i}", Actor(user_id="a")) for i in range(5)),
            return_exceptions=True,
        )

        assert sum(1 for r in results if isinstance(r, InsufficientStockError)) == 1
        lot = await StockLedger(sqlite_executor).get_lot(lot_id)
        assert lot.allocated_kg == 100
        assert lot.available_kg == 0
        assert len(lot.movements_of(MovementType.ALLOCATED)) == 4


class TestConcurrentSequences:
    async def test_codes_are_unique(self, sqlite_executor):
        sequences = SequenceGenerator(sqlite_executor)
        values = await asyncio.gather(*(sequences.next_value(CodeKind.TASK) for _ in range(4)))
        assert sorted(values) == [1, 2, 3, 4]
