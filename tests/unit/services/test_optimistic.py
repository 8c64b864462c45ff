"""Tests for the optimistic concurrency executor."""

import asyncio
from typing import Any

import pytest

from aurora.core.entities import Document, ThreadInventoryLot
from aurora.core.exceptions import (
    ConcurrencyError,
    IndeterminateError,
    NotFoundError,
    StoreTimeoutError,
    ValidationError,
)
from aurora.core.services import OptimisticExecutor


class RacingStore:
    """Wraps a store and lets another writer bump the document before each of our writes."""

    def __init__(self, inner, races: int):
        self.inner = inner
        self.races = races

    def __getattr__(self, name: str) -> Any:
        return getattr(self.inner, name)

    async def update_document(self, collection, doc_id, data, expected_version=None):
        if self.races > 0:
            self.races -= 1
            await self.inner.update_document(collection, doc_id, {"touched": self.races})
        return await self.inner.update_document(
            collection, doc_id, data, expected_version=expected_version
        )


class SlowStore:
    def __init__(self, inner):
        self.inner = inner

    def __getattr__(self, name: str) -> Any:
        return getattr(self.inner, name)

    async def get_document(self, collection, doc_id):
        await asyncio.sleep(1)
        return await self.inner.get_document(collection, doc_id)

    async def update_document(self, collection, doc_id, data, expected_version=None):
        await asyncio.sleep(1)
        return await self.inner.update_document(collection, doc_id, data, expected_version)


def bump(doc: Document) -> dict[str, Any]:
    return {"value": doc.data["value"] + 1}


@pytest.fixture
async def counter(store) -> Document:
    return await store.create_document("counters", {"value": 0}, doc_id="c")


class TestMutateDocument:
    async def test_writes_against_read_version(self, executor, counter):
        doc = await executor.mutate_document("counters", "c", bump, "bump")
        assert doc.version == 2
        assert doc.data["value"] == 1

    async def test_conflict_retries_from_fresh_read(self, store, counter):
        racing = RacingStore(store, races=2)
        executor = OptimisticExecutor(racing, max_attempts=3, retry_delay=0, retry_max_delay=0)
        seen: list[int] = []

        def apply(doc: Document) -> dict[str, Any]:
            seen.append(doc.version)
            return bump(doc)

        doc = await executor.mutate_document("counters", "c", apply, "bump")
        assert seen == [1, 2, 3]
        assert doc.data["value"] == 1

    async def test_retry_budget_exhausted(self, store, counter):
        racing = RacingStore(store, races=10)
        executor = OptimisticExecutor(racing, max_attempts=3, retry_delay=0, retry_max_delay=0)
        with pytest.raises(ConcurrencyError) as exc_info:
            await executor.mutate_document("counters", "c", bump, "bump")
        assert exc_info.value.details["attempts"] == 3

    async def test_domain_error_aborts_without_retry(self, executor, store, counter):
        calls = 0

        def refuse(doc: Document) -> dict[str, Any]:
            nonlocal calls
            calls += 1
            raise ValidationError("value", "nope")

        with pytest.raises(ValidationError):
            await executor.mutate_document("counters", "c", refuse, "refuse")
        assert calls == 1
        assert store.update_calls == 0

    async def test_missing_document(self, executor):
        with pytest.raises(NotFoundError):
            await executor.mutate_document("counters", "nope", bump, "bump")


class TestTimeouts:
    async def test_read_timeout_is_clean(self, store, counter):
        executor = OptimisticExecutor(SlowStore(store), timeout=0.01)
        with pytest.raises(StoreTimeoutError):
            await executor.read_document("counters", "c")

    async def test_write_timeout_is_indeterminate(self, store, counter):
        slow = SlowStore(store)
        slow.get_document = store.get_document
        executor = OptimisticExecutor(slow, timeout=0.01)
        with pytest.raises(IndeterminateError):
            await executor.mutate_document("counters", "c", bump, "bump")


class TestTypedHelpers:
    async def test_create_get_mutate(self, executor):
        lot = await executor.create(ThreadInventoryLot(raw_material_id="m1"), doc_id="m1")
        assert lot.id == "m1"

        def restock(record: ThreadInventoryLot) -> None:
            record.current_stock_kg = 12

        updated = await executor.mutate(ThreadInventoryLot, "m1", restock, "restock")
        assert updated.current_stock_kg == 12
        assert updated.version == 2
        assert (await executor.get(ThreadInventoryLot, "m1")).current_stock_kg == 12

    async def test_find_with_filters(self, executor):
        await executor.create(ThreadInventoryLot(raw_material_id="a", archived=True), doc_id="a")
        await executor.create(ThreadInventoryLot(raw_material_id="b"), doc_id="b")
        active = await executor.find(ThreadInventoryLot, {"archived": False})
        assert [lot.id for lot in active] == ["b"]
