"""
Domain exceptions for the Aurora ledger.

Every error carries a machine-readable code and a details mapping so the API
layer can report it without guessing.
"""

from typing import Any


class AuroraError(Exception):
    """Base exception for all Aurora errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Storage Exceptions
class StorageError(AuroraError):
    """Base exception for storage operations."""

    pass


class NotFoundError(StorageError):
    """Referenced document does not exist."""

    def __init__(self, collection: str, doc_id: str):
        super().__init__(
            f"Document not found: {collection}/{doc_id}",
            code="NOT_FOUND",
            details={"collection": collection, "doc_id": doc_id},
        )


class ConflictError(StorageError):
    """Conditional write rejected because the document changed since it was read."""

    def __init__(
        self,
        collection: str,
        doc_id: str,
        expected_version: int,
        actual_version: int | None = None,
    ):
        super().__init__(
            f"Version conflict on {collection}/{doc_id}: "
            f"expected v{expected_version}, found v{actual_version}",
            code="VERSION_CONFLICT",
            details={
                "collection": collection,
                "doc_id": doc_id,
                "expected_version": expected_version,
                "actual_version": actual_version,
            },
        )


class DuplicateDocumentError(StorageError):
    """Document with the same id already exists in the collection."""

    def __init__(self, collection: str, doc_id: str):
        super().__init__(
            f"Document already exists: {collection}/{doc_id}",
            code="DUPLICATE_DOCUMENT",
            details={"collection": collection, "doc_id": doc_id},
        )


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


class StoreTimeoutError(StorageError):
    """A read against the store timed out. Nothing was written."""

    def __init__(self, operation: str, timeout: float):
        super().__init__(
            f"Store {operation} timed out after {timeout} seconds",
            code="STORE_TIMEOUT",
            details={"operation": operation, "timeout": timeout},
        )


# Concurrency Exceptions
class ConcurrencyError(AuroraError):
    """Optimistic-concurrency retry budget exhausted."""

    def __init__(self, collection: str, doc_id: str, attempts: int):
        super().__init__(
            f"Gave up writing {collection}/{doc_id} after {attempts} conflicting attempts",
            code="CONCURRENCY_ERROR",
            details={"collection": collection, "doc_id": doc_id, "attempts": attempts},
        )


class IndeterminateError(AuroraError):
    """A write timed out and may or may not have been applied."""

    def __init__(self, operation: str, collection: str, doc_id: str | None, timeout: float):
        super().__init__(
            f"Outcome of {operation} on {collection}/{doc_id} is unknown "
            f"after {timeout} seconds; re-read before retrying",
            code="INDETERMINATE_WRITE",
            details={
                "operation": operation,
                "collection": collection,
                "doc_id": doc_id,
                "timeout": timeout,
            },
        )


# Inventory Exceptions
class InventoryError(AuroraError):
    """Base exception for stock ledger business rules."""

    pass


class InsufficientStockError(InventoryError):
    """Requested quantity exceeds what is available on the lot."""

    def __init__(self, lot_id: str | None, requested: float, available: float):
        super().__init__(
            f"Insufficient stock on lot {lot_id}: requested {requested} kg, "
            f"available {available} kg",
            code="INSUFFICIENT_STOCK",
            details={"lot_id": lot_id, "requested": requested, "available": available},
        )


class OverReleaseError(InventoryError):
    """Release quantity exceeds what is currently allocated."""

    def __init__(self, lot_id: str | None, requested: float, allocated: float):
        super().__init__(
            f"Cannot release {requested} kg from lot {lot_id}: only {allocated} kg allocated",
            code="OVER_RELEASE",
            details={"lot_id": lot_id, "requested": requested, "allocated": allocated},
        )


# Workflow Exceptions
class IllegalTransitionError(AuroraError):
    """Status change not permitted from the current status."""

    def __init__(self, entity: str, entity_id: str | None, current: str, attempted: str):
        super().__init__(
            f"Illegal {entity} status transition {current} -> {attempted}",
            code="ILLEGAL_TRANSITION",
            details={
                "entity": entity,
                "entity_id": entity_id,
                "current": current,
                "attempted": attempted,
            },
        )
        self.current = current
        self.attempted = attempted


# Validation Exceptions
class ValidationError(AuroraError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class ConfigurationError(AuroraError):
    """Configuration error."""

    pass
