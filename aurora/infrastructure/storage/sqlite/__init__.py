"""SQLite storage implementations."""

from aurora.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from aurora.infrastructure.storage.sqlite.document_store import SQLiteDocumentStore

# Type aliases for convenience
DocumentStore = SQLiteDocumentStore

# Singleton instances
_document_store: SQLiteDocumentStore | None = None


async def get_document_store() -> SQLiteDocumentStore:
    """Get singleton document store instance."""
    global _document_store
    if _document_store is None:
        _document_store = SQLiteDocumentStore()
    return _document_store


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    # Store classes
    "SQLiteDocumentStore",
    "DocumentStore",
    # Factory functions
    "get_document_store",
]
