"""
Schema migrations for the ledger database.

Each `vNNN_<name>.sql` file in this package is applied once, in version
order, inside its own transaction. The applied version and a checksum of
the script are recorded in `schema_migrations`; an edited script that was
already applied is reported but never re-run.
"""

import argparse
import asyncio
import hashlib
import re
import sys
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

import aiosqlite

from siteledger.config import get_logger, get_settings
from siteledger.core.exceptions import DatabaseError

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent

_FILENAME = re.compile(r"^v(\d{3})_([a-z0-9_]+)\.sql$")

_TRACKING_DDL = """
CREATE TABLE IF NOT EXISTS schema_migrations (
    version INTEGER PRIMARY KEY,
    name TEXT NOT NULL,
    checksum TEXT NOT NULL,
    applied_at TEXT NOT NULL
)
"""

# What the stores rely on: the tables, the per-project ledger scans and the
# append-only guard on project_inventory.
LEDGER_TABLES = ("products", "projects", "project_inventory", "schema_migrations")
LEDGER_INDEXES = ("idx_project_inventory_project", "idx_project_inventory_product")
LEDGER_TRIGGERS = (
    "project_inventory_no_edit",
    "project_inventory_record_id_once",
    "project_inventory_no_delete",
)


@dataclass(frozen=True)
class Migration:
    version: int
    name: str
    sql: str

    @property
    def checksum(self) -> str:
        return hashlib.sha256(self.sql.encode()).hexdigest()[:16]

    @property
    def label(self) -> str:
        return f"v{self.version:03d}_{self.name}"


def load_migrations(directory: Path = MIGRATIONS_DIR) -> list[Migration]:
    """Read every migration script in `directory`, oldest first."""
    migrations: dict[int, Migration] = {}
    for path in sorted(directory.glob("*.sql")):
        match = _FILENAME.match(path.name)
        if match is None:
            raise DatabaseError("load_migrations", f"bad migration filename {path.name}")
        version = int(match.group(1))
        if version in migrations:
            raise DatabaseError("load_migrations", f"duplicate migration version {version:03d}")
        migrations[version] = Migration(version, match.group(2), path.read_text())
    return [migrations[v] for v in sorted(migrations)]


async def _applied(conn: aiosqlite.Connection) -> dict[int, str]:
    cursor = await conn.execute("SELECT version, checksum FROM schema_migrations")
    return {version: checksum for version, checksum in await cursor.fetchall()}


async def _apply(conn: aiosqlite.Connection, migration: Migration) -> None:
    applied_at = datetime.now(UTC).isoformat()
    script = (
        "BEGIN;\n"
        f"{migration.sql}\n"
        "INSERT INTO schema_migrations (version, name, checksum, applied_at) "
        f"VALUES ({migration.version}, '{migration.name}', "
        f"'{migration.checksum}', '{applied_at}');\n"
        "COMMIT;"
    )
    try:
        await conn.executescript(script)
    except aiosqlite.Error as e:
        await conn.rollback()
        logger.error("migration_failed", migration=migration.label, error=str(e))
        raise DatabaseError(f"migration {migration.label}", str(e)) from e
    logger.info("migration_applied", migration=migration.label)


async def migrate(
    db_path: Path | None = None, directory: Path = MIGRATIONS_DIR
) -> list[Migration]:
    """Bring the database up to date; returns the migrations it applied."""
    db_path = db_path or get_settings().storage.db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    migrations = load_migrations(directory)

    async with aiosqlite.connect(db_path) as conn:
        await conn.execute(_TRACKING_DDL)
        await conn.commit()
        applied = await _applied(conn)

        done = []
        for migration in migrations:
            recorded = applied.get(migration.version)
            if recorded is None:
                await _apply(conn, migration)
                done.append(migration)
            elif recorded != migration.checksum:
                logger.warning(
                    "migration_changed_after_apply",
                    migration=migration.label,
                    recorded=recorded,
                    current=migration.checksum,
                )

    logger.info("database_migrated", db_path=str(db_path), applied=len(done))
    return done


run_migrations = migrate


async def migration_status(db_path: Path | None = None) -> dict:
    """Applied and pending migrations, without touching the database."""
    db_path = db_path or get_settings().storage.db_path
    migrations = load_migrations()
    applied: dict[int, str] = {}

    if db_path.exists():
        async with aiosqlite.connect(db_path) as conn:
            cursor = await conn.execute(
                "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = 'schema_migrations'"
            )
            if await cursor.fetchone() is not None:
                applied = await _applied(conn)

    return {
        "db_path": str(db_path),
        "applied": [m.label for m in migrations if m.version in applied],
        "pending": [m.label for m in migrations if m.version not in applied],
    }


async def verify_ledger_schema(db_path: Path | None = None) -> list[str]:
    """
    Check a migrated database for what the ledger depends on.

    Returns one message per problem; an empty list means the schema is sound.
    """
    db_path = db_path or get_settings().storage.db_path
    if not db_path.exists():
        return [f"database {db_path} does not exist"]

    async with aiosqlite.connect(db_path) as conn:
        cursor = await conn.execute("SELECT type, name FROM sqlite_master")
        present = {(kind, name) for kind, name in await cursor.fetchall()}
        cursor = await conn.execute("PRAGMA foreign_key_check")
        violations = await cursor.fetchall()

    problems = [f"missing table {t}" for t in LEDGER_TABLES if ("table", t) not in present]
    problems += [f"missing index {i}" for i in LEDGER_INDEXES if ("index", i) not in present]
    problems += [
        f"missing trigger {t}" for t in LEDGER_TRIGGERS if ("trigger", t) not in present
    ]
    problems += [f"foreign key violation in {row[0]} row {row[1]}" for row in violations]
    return problems


def main() -> None:
    """Command-line entry point: `siteledger-migrate [--status | --verify]`."""
    parser = argparse.ArgumentParser(description="Migrate the siteledger database")
    parser.add_argument("--db-path", type=Path, help="database file (default: from settings)")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--status", action="store_true", help="list applied and pending migrations")
    group.add_argument("--verify", action="store_true", help="check tables, indexes and triggers")
    args = parser.parse_args()

    if args.status:
        status = asyncio.run(migration_status(args.db_path))
        print(f"Database: {status['db_path']}")
        for label in status["applied"]:
            print(f"  applied  {label}")
        for label in status["pending"]:
            print(f"  pending  {label}")
        return

    if args.verify:
        problems = asyncio.run(verify_ledger_schema(args.db_path))
        for problem in problems:
            print(problem, file=sys.stderr)
        if problems:
            raise SystemExit(1)
        print("Schema OK")
        return

    applied = asyncio.run(migrate(args.db_path))
    print(f"Applied {len(applied)} migration(s)")


if __name__ == "__main__":
    main()
