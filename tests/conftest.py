"""Pytest configuration and fixtures."""

import copy
import uuid
from enum import Enum
from typing import Any

import pytest

from aurora.config.settings import NotificationSettings
from aurora.core.entities import Actor, RawMaterial, UserRole
from aurora.core.entities.document import Document, utcnow
from aurora.core.exceptions import ConflictError, DuplicateDocumentError, NotFoundError
from aurora.core.interfaces import IDocumentStore
from aurora.core.services import (
    AllocationEngine,
    NotificationService,
    OptimisticExecutor,
    SequenceGenerator,
    StockLedger,
)


def _lookup(data: dict[str, Any], path: str) -> Any:
    value: Any = data
    for part in path.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


class InMemoryDocumentStore(IDocumentStore):
    """Dict-backed document store with the same version semantics as SQLite."""

    def __init__(self) -> None:
        self.collections: dict[str, dict[str, Document]] = {}
        self.update_calls = 0

    def _collection(self, collection: str) -> dict[str, Document]:
        return self.collections.setdefault(collection, {})

    async def get_document(self, collection: str, doc_id: str) -> Document | None:
        doc = self._collection(collection).get(doc_id)
        return doc.model_copy(deep=True) if doc else None

    async def query_documents(
        self,
        collection: str,
        filters: dict[str, Any] | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Document]:
        docs = list(self._collection(collection).values())
        for field, value in (filters or {}).items():
            if isinstance(value, Enum):
                value = value.value
            docs = [d for d in docs if _lookup(d.data, field) == value]
        return [d.model_copy(deep=True) for d in docs[offset : offset + limit]]

    async def count_documents(self, collection: str) -> int:
        return len(self._collection(collection))

    async def create_document(
        self,
        collection: str,
        data: dict[str, Any],
        doc_id: str | None = None,
    ) -> Document:
        doc_id = doc_id or uuid.uuid4().hex
        if doc_id in self._collection(collection):
            raise DuplicateDocumentError(collection, doc_id)
        now = utcnow()
        doc = Document(
            id=doc_id,
            collection=collection,
            version=1,
            data=copy.deepcopy(data),
            created_at=now,
            updated_at=now,
        )
        self._collection(collection)[doc_id] = doc
        return doc.model_copy(deep=True)

    async def update_document(
        self,
        collection: str,
        doc_id: str,
        data: dict[str, Any],
        expected_version: int | None = None,
    ) -> Document:
        self.update_calls += 1
        current = self._collection(collection).get(doc_id)
        if current is None:
            raise NotFoundError(collection, doc_id)
        if expected_version is not None and current.version != expected_version:
            raise ConflictError(collection, doc_id, expected_version, current.version)
        updated = current.model_copy(
            update={
                "data": {**current.data, **copy.deepcopy(data)},
                "version": current.version + 1,
                "updated_at": utcnow(),
            }
        )
        self._collection(collection)[doc_id] = updated
        return updated.model_copy(deep=True)

    async def delete_document(self, collection: str, doc_id: str) -> bool:
        return self._collection(collection).pop(doc_id, None) is not None


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def executor(store: InMemoryDocumentStore) -> OptimisticExecutor:
    return OptimisticExecutor(store, max_attempts=3, retry_delay=0, retry_max_delay=0, timeout=2.0)


@pytest.fixture
def actor() -> Actor:
    return Actor(user_id="emp-1", role=UserRole.INTERNAL_EMPLOYEE)


@pytest.fixture
def admin() -> Actor:
    return Actor(user_id="admin", role=UserRole.ADMIN)


@pytest.fixture
def ledger(executor: OptimisticExecutor) -> StockLedger:
    return StockLedger(executor)


@pytest.fixture
def allocation(executor: OptimisticExecutor, ledger: StockLedger) -> AllocationEngine:
    return AllocationEngine(executor, ledger=ledger)


@pytest.fixture
def notifier(executor: OptimisticExecutor) -> NotificationService:
    return NotificationService(executor, settings=NotificationSettings())


@pytest.fixture
def sequences(executor: OptimisticExecutor) -> SequenceGenerator:
    return SequenceGenerator(executor)


@pytest.fixture
async def material(executor: OptimisticExecutor) -> RawMaterial:
    """A registered cotton thread at 8.50 per kg."""
    return await executor.create(
        RawMaterial(
            material_code="THR-COT-40",
            name="Cotton 40s White",
            type="Cotton",
            color="White",
            weight="40s",
            cost_per_kg=8.5,
        )
    )
