"""
Schema migrations for the Aurora document database.

Every collection (raw materials, thread lots, orders, tasks, notifications,
counters and the registries) is stored as rows of the single ``documents``
table, so a migration only ever touches that table, its indexes and the
``schema_migrations`` bookkeeping table.

Migration files are named ``v<NNN>_<name>.sql`` and applied in version order.
An applied file is pinned by its checksum; schema changes go in a new file.
"""

import asyncio
import hashlib
import re
import shutil
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import aiosqlite

from aurora.config import get_logger, get_settings

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent

REQUIRED_TABLES = ["documents", "schema_migrations"]

# Columns the document store reads and writes
DOCUMENT_COLUMNS = ["collection", "id", "version", "data_json", "created_at", "updated_at"]

FILENAME_PATTERN = re.compile(r"v(\d+)_(.+)\.sql")


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


@dataclass
class MigrationInfo:
    """A migration file on disk."""

    version: str
    name: str
    path: Path
    checksum: str

    @classmethod
    def from_file(cls, path: Path) -> "MigrationInfo":
        match = FILENAME_PATTERN.fullmatch(path.name)
        if not match:
            raise ValueError(f"Migration file {path.name} does not match v<NNN>_<name>.sql")

        sql = path.read_text(encoding="utf-8")
        return cls(
            version=match.group(1),
            name=match.group(2),
            path=path,
            checksum=hashlib.sha256(sql.encode()).hexdigest()[:16],
        )


@dataclass
class MigrationResult:
    version: str
    name: str
    success: bool
    execution_time_ms: int
    error: str | None = None


async def get_applied_migrations(conn: aiosqlite.Connection) -> dict[str, str]:
    """Map of applied version to the checksum recorded when it ran."""
    try:
        cursor = await conn.execute(
            "SELECT version, checksum FROM schema_migrations ORDER BY version"
        )
    except aiosqlite.OperationalError:
        # fresh database
        return {}
    return {version: checksum for version, checksum in await cursor.fetchall()}


async def get_current_version(conn: aiosqlite.Connection) -> str | None:
    applied = await get_applied_migrations(conn)
    return max(applied) if applied else None


def discover_migrations(directory: Path = MIGRATIONS_DIR) -> list[MigrationInfo]:
    """Migration files in ``directory``, lowest version first."""
    migrations = []
    for path in sorted(directory.glob("v*.sql")):
        try:
            migrations.append(MigrationInfo.from_file(path))
        except ValueError as e:
            logger.warning("schema_migration_skipped", path=str(path), error=str(e))
    return migrations


async def apply_migration(
    conn: aiosqlite.Connection,
    migration: MigrationInfo,
) -> MigrationResult:
    """Run one migration script and record it. Failures are rolled back."""
    logger.info("schema_migration_started", version=migration.version, name=migration.name)
    started = time.perf_counter()

    try:
        await conn.executescript(migration.path.read_text(encoding="utf-8"))
        await conn.execute(
            "INSERT OR REPLACE INTO schema_migrations "
            "(version, name, checksum, execution_time_ms) VALUES (?, ?, ?, ?)",
            (migration.version, migration.name, migration.checksum, _elapsed_ms(started)),
        )
        await conn.commit()
    except aiosqlite.Error as e:
        await conn.rollback()
        logger.error(
            "schema_migration_failed",
            version=migration.version,
            name=migration.name,
            error=str(e),
        )
        return MigrationResult(
            version=migration.version,
            name=migration.name,
            success=False,
            execution_time_ms=_elapsed_ms(started),
            error=str(e),
        )

    result = MigrationResult(
        version=migration.version,
        name=migration.name,
        success=True,
        execution_time_ms=_elapsed_ms(started),
    )
    logger.info(
        "schema_migration_applied",
        version=result.version,
        name=result.name,
        execution_time_ms=result.execution_time_ms,
    )
    return result


def create_backup(db_path: Path) -> Path:
    """Copy the database file aside before it is migrated."""
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    backup_path = db_path.with_suffix(f".backup_{stamp}.db")
    shutil.copy2(db_path, backup_path)
    logger.info("document_db_backup_created", backup_path=str(backup_path))
    return backup_path


def restore_backup(db_path: Path, backup_path: Path) -> None:
    shutil.copy2(backup_path, db_path)
    logger.warning("document_db_restored", backup_path=str(backup_path))


async def initialize_database(
    db_path: Path | None = None,
    create_backup_before: bool = True,
) -> list[MigrationResult]:
    """
    Create or upgrade the document database.

    Pending migrations run in version order and stop at the first failure or
    at an applied file whose checksum no longer matches. An existing database
    is copied aside first and restored if the run raises.

    Args:
        db_path: Database file; defaults to ``storage.db_path`` from settings.
        create_backup_before: Copy an existing file aside before migrating.

    Returns:
        One result per migration attempted in this run.
    """
    db_path = db_path or get_settings().storage.db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info("document_db_migrating", db_path=str(db_path))

    backup_path = None
    if create_backup_before and db_path.exists():
        backup_path = create_backup(db_path)

    results: list[MigrationResult] = []
    try:
        async with aiosqlite.connect(db_path) as conn:
            await conn.execute("PRAGMA journal_mode=WAL")
            applied = await get_applied_migrations(conn)

            for migration in discover_migrations():
                recorded = applied.get(migration.version)
                if recorded == migration.checksum:
                    continue
                if recorded is not None:
                    logger.error(
                        "schema_checksum_mismatch",
                        version=migration.version,
                        recorded=recorded,
                        on_disk=migration.checksum,
                    )
                    break

                result = await apply_migration(conn, migration)
                results.append(result)
                if not result.success:
                    break
    except Exception as e:
        logger.error("document_db_migration_aborted", db_path=str(db_path), error=str(e))
        if backup_path and backup_path.exists():
            restore_backup(db_path, backup_path)
        raise

    if backup_path and all(result.success for result in results):
        backup_path.unlink()
        logger.debug("document_db_backup_removed", backup_path=str(backup_path))

    return results


run_migrations = initialize_database


async def count_documents_by_collection(conn: aiosqlite.Connection) -> dict[str, int]:
    cursor = await conn.execute(
        "SELECT collection, COUNT(*) FROM documents GROUP BY collection ORDER BY collection"
    )
    return {collection: count for collection, count in await cursor.fetchall()}


async def get_migration_status(db_path: Path | None = None) -> dict:
    """Applied and pending versions, plus how many documents each collection holds."""
    db_path = db_path or get_settings().storage.db_path

    if not db_path.exists():
        return {
            "exists": False,
            "current_version": None,
            "applied_migrations": [],
            "pending_migrations": [],
            "collections": {},
        }

    async with aiosqlite.connect(db_path) as conn:
        applied = await get_applied_migrations(conn)
        discovered = discover_migrations()
        try:
            collections = await count_documents_by_collection(conn)
        except aiosqlite.OperationalError:
            collections = {}

    return {
        "exists": True,
        "current_version": max(applied) if applied else None,
        "applied_migrations": list(applied),
        "pending_migrations": [m.version for m in discovered if m.version not in applied],
        "total_migrations": len(discovered),
        "collections": collections,
    }


async def verify_schema_integrity(db_path: Path | None = None) -> list[dict]:
    """
    Check the file and the document table layout.

    Returns one dict per check with ``check`` and ``status`` (PASS or FAIL)
    and whatever detail the check found.
    """
    db_path = db_path or get_settings().storage.db_path
    checks = []

    async with aiosqlite.connect(db_path) as conn:
        cursor = await conn.execute("PRAGMA integrity_check")
        (integrity,) = await cursor.fetchone()
        checks.append({
            "check": "integrity",
            "status": "PASS" if integrity == "ok" else "FAIL",
            "result": integrity,
        })

        cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
        tables = {row[0] for row in await cursor.fetchall()}
        missing_tables = [t for t in REQUIRED_TABLES if t not in tables]
        checks.append({
            "check": "required_tables",
            "status": "PASS" if not missing_tables else "FAIL",
            "missing": missing_tables,
        })

        cursor = await conn.execute("PRAGMA table_info(documents)")
        columns = {row[1] for row in await cursor.fetchall()}
        missing_columns = [c for c in DOCUMENT_COLUMNS if c not in columns]
        checks.append({
            "check": "document_columns",
            "status": "PASS" if not missing_columns else "FAIL",
            "missing": missing_columns,
        })

    return checks


def main() -> None:
    """``aurora-migrate``: upgrade, inspect or verify the document database."""
    import argparse

    parser = argparse.ArgumentParser(description="Aurora document database migrations")
    parser.add_argument("--db-path", type=Path, help="Database file (default from settings)")
    parser.add_argument("--status", action="store_true", help="Show versions and collection sizes")
    parser.add_argument("--verify", action="store_true", help="Check the document table layout")
    parser.add_argument("--no-backup", action="store_true", help="Do not copy the file aside first")
    args = parser.parse_args()

    async def run():
        if args.status:
            status = await get_migration_status(args.db_path)
            print(f"Database exists: {status['exists']}")
            print(f"Schema version:  {status['current_version'] or '-'}")
            print(f"Pending:         {', '.join(status['pending_migrations']) or 'none'}")
            for collection, count in status["collections"].items():
                print(f"  {collection:<16} {count:>8}")

        elif args.verify:
            for check in await verify_schema_integrity(args.db_path):
                print(f"[{check['status']}] {check['check']}")
                if check["status"] != "PASS":
                    for key, value in check.items():
                        if key not in ("check", "status"):
                            print(f"       {key}: {value}")

        else:
            results = await initialize_database(
                args.db_path,
                create_backup_before=not args.no_backup,
            )
            if not results:
                print("Schema is up to date")
            for result in results:
                outcome = "OK" if result.success else "FAILED"
                print(f"[{outcome}] v{result.version} {result.name} ({result.execution_time_ms}ms)")
                if result.error:
                    print(f"       {result.error}")

    asyncio.run(run())


if __name__ == "__main__":
    main()
