"""Tests for the schema migrator."""

from pathlib import Path

import aiosqlite
import pytest

from aurora.infrastructure.storage.sqlite.migrations import (
    discover_migrations,
    get_migration_status,
    initialize_database,
    verify_schema_integrity,
)
from aurora.infrastructure.storage.sqlite.migrations.migrator import MigrationInfo


class TestDiscoverMigrations:
    def test_ships_documents_migration(self):
        migrations = discover_migrations()
        assert migrations[0].version == "001"
        assert migrations[0].name == "documents"
        assert len(migrations[0].checksum) == 16

    def test_sorted_by_version(self, tmp_path: Path):
        (tmp_path / "v002_second.sql").write_text("SELECT 2;")
        (tmp_path / "v001_first.sql").write_text("SELECT 1;")
        (tmp_path / "notes.txt").write_text("ignored")
        assert [m.version for m in discover_migrations(tmp_path)] == ["001", "002"]

    def test_from_file_rejects_bad_name(self, tmp_path: Path):
        path = tmp_path / "bad.sql"
        path.write_text("")
        with pytest.raises(ValueError, match="bad.sql"):
            MigrationInfo.from_file(path)


class TestInitializeDatabase:
    async def test_fresh_database(self, temp_db_path: Path):
        results = await initialize_database(temp_db_path, create_backup_before=False)
        assert [r.success for r in results] == [True]

        async with aiosqlite.connect(temp_db_path) as conn:
            cursor = await conn.execute("SELECT version FROM schema_migrations")
            assert [row[0] for row in await cursor.fetchall()] == ["001"]

    async def test_idempotent(self, initialized_db: Path):
        assert await initialize_database(initialized_db, create_backup_before=False) == []

    async def test_backup_removed_after_success(self, initialized_db: Path):
        await initialize_database(initialized_db)
        assert list(initialized_db.parent.glob("*.backup_*")) == []

    async def test_status(self, initialized_db: Path):
        status = await get_migration_status(initialized_db)
        assert status["exists"] is True
        assert status["current_version"] == "001"
        assert status["pending_migrations"] == []

    async def test_status_missing_database(self, temp_db_path: Path):
        status = await get_migration_status(temp_db_path)
        assert status["exists"] is False

    async def test_verify(self, initialized_db: Path):
        checks = await verify_schema_integrity(initialized_db)
        assert all(check["status"] == "PASS" for check in checks)
        assert [check["check"] for check in checks] == [
            "integrity",
            "required_tables",
            "document_columns",
        ]

    async def test_status_counts_documents_per_collection(self, initialized_db: Path):
        async with aiosqlite.connect(initialized_db) as conn:
            await conn.executemany(
                "INSERT INTO documents (collection, id, version, data_json, created_at, updated_at) "
                "VALUES (?, ?, 1, '{}', 'now', 'now')",
                [("orders", "o1"), ("orders", "o2"), ("workers", "w1")],
            )
            await conn.commit()

        status = await get_migration_status(initialized_db)
        assert status["collections"] == {"orders": 2, "workers": 1}

    async def test_verify_flags_missing_document_columns(self, temp_db_path: Path):
        async with aiosqlite.connect(temp_db_path) as conn:
            await conn.execute("CREATE TABLE documents (collection TEXT, id TEXT)")
            await conn.execute("CREATE TABLE schema_migrations (version TEXT)")
            await conn.commit()

        checks = {c["check"]: c for c in await verify_schema_integrity(temp_db_path)}
        assert checks["document_columns"]["status"] == "FAIL"
        assert "data_json" in checks["document_columns"]["missing"]

    async def test_version_must_be_positive(self, initialized_db: Path):
        async with aiosqlite.connect(initialized_db) as conn:
            with pytest.raises(aiosqlite.IntegrityError):
                await conn.execute(
                    "INSERT INTO documents (collection, id, version, data_json, created_at, updated_at) "
                    "VALUES ('orders', 'o1', 0, '{}', 'now', 'now')"
                )
