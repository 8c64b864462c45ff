"""
SQLite implementation of document storage.

All collections share one ``documents`` table keyed by (collection, id). The
body is stored as JSON; ``version`` is bumped on every write and conditional
updates are checked against it while holding the database write lock.
"""

import json
import uuid
from datetime import datetime
from enum import Enum
from typing import Any

import aiosqlite

from aurora.config import get_logger
from aurora.core.entities.document import Document, utcnow
from aurora.core.exceptions import (
    ConflictError,
    DatabaseError,
    DuplicateDocumentError,
    NotFoundError,
)
from aurora.core.interfaces import IDocumentStore
from aurora.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


def _filter_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    return value


class SQLiteDocumentStore(IDocumentStore):
    """SQLite implementation of document storage."""

    async def get_document(self, collection: str, doc_id: str) -> Document | None:
        """Get document by ID."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM documents WHERE collection = ? AND id = ?",
                (collection, doc_id),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_document(row)

    async def query_documents(
        self,
        collection: str,
        filters: dict[str, Any] | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Document]:
        """List documents in creation order, optionally filtered by field equality."""
        sql = "SELECT * FROM documents WHERE collection = ?"
        params: list[Any] = [collection]
        for field, value in (filters or {}).items():
            if value is None:
                sql += " AND json_extract(data_json, ?) IS NULL"
                params.append(f"$.{field}")
            else:
                sql += " AND json_extract(data_json, ?) = ?"
                params.extend([f"$.{field}", _filter_value(value)])
        sql += " ORDER BY created_at, id LIMIT ? OFFSET ?"
        params.extend([limit, offset])

        async with get_connection() as conn:
            cursor = await conn.execute(sql, params)
            rows = await cursor.fetchall()
            return [self._row_to_document(row) for row in rows]

    async def count_documents(self, collection: str) -> int:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT COUNT(*) FROM documents WHERE collection = ?", (collection,)
            )
            row = await cursor.fetchone()
            return row[0] if row else 0

    async def create_document(
        self,
        collection: str,
        data: dict[str, Any],
        doc_id: str | None = None,
    ) -> Document:
        """Create a new document at version 1."""
        now = utcnow()
        document = Document(
            id=doc_id or uuid.uuid4().hex,
            collection=collection,
            version=1,
            data=data,
            created_at=now,
            updated_at=now,
        )
        try:
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    INSERT INTO documents (collection, id, version, data_json, created_at, updated_at)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (
                        collection,
                        document.id,
                        document.version,
                        json.dumps(data),
                        now.isoformat(),
                        now.isoformat(),
                    ),
                )
        except aiosqlite.IntegrityError:
            raise DuplicateDocumentError(collection, document.id) from None
        except aiosqlite.Error as e:
            raise DatabaseError("create_document", str(e)) from e

        logger.debug("document_created", collection=collection, doc_id=document.id)
        return document

    async def update_document(
        self,
        collection: str,
        doc_id: str,
        data: dict[str, Any],
        expected_version: int | None = None,
    ) -> Document:
        """
        Merge ``data`` into the stored body and bump the version.

        With ``expected_version`` the read, the version check and the write all
        happen under one write lock, so a concurrent writer cannot slip in
        between them.
        """
        try:
            async with get_transaction(immediate=True) as conn:
                cursor = await conn.execute(
                    "SELECT * FROM documents WHERE collection = ? AND id = ?",
                    (collection, doc_id),
                )
                row = await cursor.fetchone()
                if row is None:
                    raise NotFoundError(collection, doc_id)

                current = self._row_to_document(row)
                if expected_version is not None and current.version != expected_version:
                    raise ConflictError(collection, doc_id, expected_version, current.version)

                merged = {**current.data, **data}
                now = utcnow()
                await conn.execute(
                    """
                    UPDATE documents SET data_json = ?, version = ?, updated_at = ?
                    WHERE collection = ? AND id = ?
                    """,
                    (json.dumps(merged), current.version + 1, now.isoformat(), collection, doc_id),
                )
        except aiosqlite.Error as e:
            raise DatabaseError("update_document", str(e)) from e

        logger.debug(
            "document_updated",
            collection=collection,
            doc_id=doc_id,
            version=current.version + 1,
        )
        return current.model_copy(
            update={"data": merged, "version": current.version + 1, "updated_at": now}
        )

    async def delete_document(self, collection: str, doc_id: str) -> bool:
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "DELETE FROM documents WHERE collection = ? AND id = ?",
                (collection, doc_id),
            )
            deleted = cursor.rowcount > 0
        if deleted:
            logger.info("document_deleted", collection=collection, doc_id=doc_id)
        return deleted

    @staticmethod
    def _row_to_document(row: aiosqlite.Row) -> Document:
        """Convert a database row to a Document."""
        return Document(
            id=row["id"],
            collection=row["collection"],
            version=row["version"],
            data=json.loads(row["data_json"]) if row["data_json"] else {},
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )
