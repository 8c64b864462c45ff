"""
Human-readable sequential codes for orders, tasks, workers and contractors.

Each kind has a counter document in the ``counters`` collection. The first use
seeds it from the size of the collection it numbers, so codes continue after
existing data; every later code comes from a conditional increment.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from aurora.config import get_logger
from aurora.core.entities.document import Document, utcnow
from aurora.core.exceptions import DuplicateDocumentError, NotFoundError
from aurora.core.services.optimistic import OptimisticExecutor

logger = get_logger(__name__)

COUNTERS_COLLECTION = "counters"


class CodeKind(str, Enum):
    ORDER = "order"
    TASK = "task"
    WORKER = "worker"
    CONTRACTOR = "contractor"


# Collection each kind numbers, used to seed its counter
SEED_COLLECTIONS: dict[CodeKind, str] = {
    CodeKind.ORDER: "orders",
    CodeKind.TASK: "tasks",
    CodeKind.WORKER: "workers",
    CodeKind.CONTRACTOR: "contractors",
}


def format_code(kind: CodeKind, sequence: int, year: int | None = None) -> str:
    """
    Render a code in its stored format.

    Examples:
        >>> format_code(CodeKind.ORDER, 7, 2024)
        'AUR-ORD-2024-007'
        >>> format_code(CodeKind.WORKER, 12)
        'WRK-0012'
    """
    if kind == CodeKind.ORDER:
        return f"AUR-ORD-{year}-{sequence:03d}"
    if kind == CodeKind.TASK:
        return f"TSK-{year}-{sequence:04d}"
    if kind == CodeKind.WORKER:
        return f"WRK-{sequence:04d}"
    return f"CONT-{sequence:03d}"


class SequenceGenerator:
    """Hands out unique, increasing sequence numbers per code kind."""

    def __init__(self, executor: OptimisticExecutor):
        self._executor = executor

    async def _ensure_counter(self, kind: CodeKind) -> None:
        try:
            await self._executor.read_document(COUNTERS_COLLECTION, kind.value)
            return
        except NotFoundError:
            pass

        seed = await self._executor.count_documents(SEED_COLLECTIONS[kind])
        try:
            await self._executor.create_document(
                COUNTERS_COLLECTION, {"value": seed}, doc_id=kind.value
            )
            logger.info("sequence_counter_seeded", kind=kind.value, seed=seed)
        except DuplicateDocumentError:
            # Another caller seeded it first
            pass

    async def next_value(self, kind: CodeKind) -> int:
        await self._ensure_counter(kind)

        def increment(doc: Document) -> dict[str, Any]:
            return {"value": int(doc.data.get("value", 0)) + 1}

        doc = await self._executor.mutate_document(
            COUNTERS_COLLECTION, kind.value, increment, f"next_{kind.value}_sequence"
        )
        return int(doc.data["value"])

    async def next_code(self, kind: CodeKind, at: datetime | None = None) -> str:
        sequence = await self.next_value(kind)
        return format_code(kind, sequence, (at or utcnow()).year)
