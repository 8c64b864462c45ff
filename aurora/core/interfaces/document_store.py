"""Abstract interface for document persistence."""

from abc import ABC, abstractmethod
from typing import Any

from aurora.core.entities.document import Document


class IDocumentStore(ABC):
    """
    Collection/document persistence with per-document versions.

    Implementations must make ``update_document`` with an ``expected_version``
    a compare-and-swap: the write is applied only if the stored version still
    equals ``expected_version``, otherwise ``ConflictError`` is raised and
    nothing changes.
    """

    @abstractmethod
    async def get_document(self, collection: str, doc_id: str) -> Document | None:
        """Get a document by ID, or None if it does not exist."""
        pass

    @abstractmethod
    async def query_documents(
        self,
        collection: str,
        filters: dict[str, Any] | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Document]:
        """List documents whose top-level fields equal every filter value."""
        pass

    @abstractmethod
    async def count_documents(self, collection: str) -> int:
        """Count documents in a collection."""
        pass

    @abstractmethod
    async def create_document(
        self,
        collection: str,
        data: dict[str, Any],
        doc_id: str | None = None,
    ) -> Document:
        """
        Create a document at version 1.

        Raises DuplicateDocumentError if ``doc_id`` is given and taken.
        """
        pass

    @abstractmethod
    async def update_document(
        self,
        collection: str,
        doc_id: str,
        data: dict[str, Any],
        expected_version: int | None = None,
    ) -> Document:
        """
        Merge ``data`` into a document and bump its version.

        Raises NotFoundError if missing, ConflictError on version mismatch.
        """
        pass

    @abstractmethod
    async def delete_document(self, collection: str, doc_id: str) -> bool:
        """Delete a document. Returns False if it did not exist."""
        pass
