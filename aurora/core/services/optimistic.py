"""
Optimistic concurrency for document writes.

Every mutation follows the same loop: read the document and its version,
apply the change in memory, write back conditionally on the version. A
version conflict restarts the loop from the read; anything else raised while
applying the change aborts without writing.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from tenacity import (
    RetryCallState,
    RetryError,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from aurora.config import get_logger, get_settings
from aurora.core.entities.document import Document, Record
from aurora.core.exceptions import (
    ConcurrencyError,
    ConflictError,
    IndeterminateError,
    NotFoundError,
    StoreTimeoutError,
)
from aurora.core.interfaces.document_store import IDocumentStore

logger = get_logger(__name__)

T = TypeVar("T")
R = TypeVar("R", bound=Record)


class OptimisticExecutor:
    """Runs reads and conditional writes against a document store."""

    def __init__(
        self,
        store: IDocumentStore,
        max_attempts: int | None = None,
        retry_delay: float | None = None,
        retry_max_delay: float | None = None,
        timeout: float | None = None,
    ):
        settings = get_settings().ledger
        self.store = store
        self.max_attempts = max_attempts or settings.max_attempts
        self.retry_delay = retry_delay if retry_delay is not None else settings.retry_delay
        self.retry_max_delay = (
            retry_max_delay if retry_max_delay is not None else settings.retry_max_delay
        )
        self.timeout = timeout or settings.store_timeout

    # Bounded store calls

    async def _bounded(
        self,
        operation: str,
        call: Awaitable[T],
        *,
        collection: str,
        doc_id: str | None,
        write: bool,
    ) -> T:
        try:
            return await asyncio.wait_for(call, timeout=self.timeout)
        except TimeoutError:
            if write:
                logger.error(
                    "store_write_indeterminate",
                    operation=operation,
                    collection=collection,
                    doc_id=doc_id,
                    timeout=self.timeout,
                )
                raise IndeterminateError(operation, collection, doc_id, self.timeout)
            raise StoreTimeoutError(operation, self.timeout)

    async def read_document(self, collection: str, doc_id: str) -> Document:
        doc = await self._bounded(
            "get_document",
            self.store.get_document(collection, doc_id),
            collection=collection,
            doc_id=doc_id,
            write=False,
        )
        if doc is None:
            raise NotFoundError(collection, doc_id)
        return doc

    async def query_documents(
        self,
        collection: str,
        filters: dict[str, Any] | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Document]:
        return await self._bounded(
            "query_documents",
            self.store.query_documents(collection, filters, limit=limit, offset=offset),
            collection=collection,
            doc_id=None,
            write=False,
        )

    async def count_documents(self, collection: str) -> int:
        return await self._bounded(
            "count_documents",
            self.store.count_documents(collection),
            collection=collection,
            doc_id=None,
            write=False,
        )

    async def create_document(
        self,
        collection: str,
        data: dict[str, Any],
        doc_id: str | None = None,
    ) -> Document:
        return await self._bounded(
            "create_document",
            self.store.create_document(collection, data, doc_id=doc_id),
            collection=collection,
            doc_id=doc_id,
            write=True,
        )

    # Conditional writes

    def _get_retry_decorator(self) -> Any:
        """Get tenacity retry decorator for version conflicts."""
        return retry(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(
                multiplier=self.retry_delay,
                min=self.retry_delay,
                max=self.retry_max_delay,
            ),
            retry=retry_if_exception_type(ConflictError),
            before_sleep=self._log_conflict,
        )

    @staticmethod
    def _log_conflict(retry_state: RetryCallState) -> None:
        logger.info(
            "optimistic_write_conflict",
            attempt=retry_state.attempt_number,
            error=str(retry_state.outcome.exception()) if retry_state.outcome else None,
        )

    async def _attempt(
        self,
        collection: str,
        doc_id: str,
        apply: Callable[[Document], dict[str, Any]],
        operation: str,
    ) -> Document:
        doc = await self.read_document(collection, doc_id)
        data = apply(doc)
        return await self._bounded(
            operation,
            self.store.update_document(collection, doc_id, data, expected_version=doc.version),
            collection=collection,
            doc_id=doc_id,
            write=True,
        )

    async def mutate_document(
        self,
        collection: str,
        doc_id: str,
        apply: Callable[[Document], dict[str, Any]],
        operation: str,
    ) -> Document:
        """
        Apply a change to a document under optimistic concurrency.

        Args:
            collection: Collection name
            doc_id: Document ID
            apply: Receives the freshly read document and returns the fields
                to write. Raising aborts the operation without a write.
            operation: Name used in logs and errors

        Raises:
            NotFoundError: Document does not exist
            ConcurrencyError: Every attempt hit a version conflict
            IndeterminateError: The write timed out
        """
        retry_decorator = self._get_retry_decorator()
        try:
            return await retry_decorator(self._attempt)(collection, doc_id, apply, operation)
        except RetryError as e:
            logger.warning(
                "optimistic_retries_exhausted",
                operation=operation,
                collection=collection,
                doc_id=doc_id,
                attempts=self.max_attempts,
            )
            raise ConcurrencyError(collection, doc_id, self.max_attempts) from e

    # Typed helpers

    async def get(self, model: type[R], doc_id: str) -> R:
        return model.from_document(await self.read_document(model.COLLECTION, doc_id))

    async def find(
        self,
        model: type[R],
        filters: dict[str, Any] | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[R]:
        docs = await self.query_documents(model.COLLECTION, filters, limit=limit, offset=offset)
        return [model.from_document(doc) for doc in docs]

    async def create(self, record: R, doc_id: str | None = None) -> R:
        doc = await self.create_document(record.COLLECTION, record.to_data(), doc_id=doc_id)
        return type(record).from_document(doc)

    async def mutate(
        self,
        model: type[R],
        doc_id: str,
        apply: Callable[[R], Any],
        operation: str,
    ) -> R:
        """Load a record, let ``apply`` change it in place, write it back."""

        def apply_to_record(doc: Document) -> dict[str, Any]:
            record = model.from_document(doc)
            apply(record)
            return record.to_data()

        doc = await self.mutate_document(model.COLLECTION, doc_id, apply_to_record, operation)
        return model.from_document(doc)
