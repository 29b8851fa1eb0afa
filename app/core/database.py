"""
SQLite database bootstrap and recovery.

The application stores everything in a single embedded SQLite file. This
module owns the lifecycle of that file:

- configure_sqlite_connection: per-connection pragmas (WAL journal, foreign keys)
- check_integrity: run ``PRAGMA integrity_check`` against a database file
- remove_database_files: delete the database file and its WAL/SHM companions
- bootstrap_database: verify integrity, recreate the file when corrupt, migrate

Recovery Policy:
    A file that fails the integrity check, or cannot be opened as a SQLite
    database at all, is deleted and recreated empty. Data loss is accepted;
    there is no repair attempt.

Usage:
    from core.database import bootstrap_database

    report = bootstrap_database()
    if report.recreated:
        logger.warning("Database was recreated from scratch")

    # Or from the command line:
    #   python manage.py bootstrap_db
"""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass
from pathlib import Path

from django.conf import settings
from django.core.management import call_command
from django.db import connections

logger = logging.getLogger(__name__)

# Files SQLite creates next to the main database in WAL mode
SQLITE_COMPANION_SUFFIXES = ("-wal", "-shm", "-journal")


@dataclass
class BootstrapReport:
    """Outcome of a bootstrap run."""

    database: str
    path: Path | None
    integrity_ok: bool
    recreated: bool


def configure_sqlite_connection(sender, connection, **kwargs):
    """
    Apply pragmas to every new SQLite connection.

    Connected to ``connection_created`` in CoreConfig.ready(). Other
    database vendors are left untouched.
    """
    if connection.vendor != "sqlite":
        return
    with connection.cursor() as cursor:
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.execute("PRAGMA journal_mode = WAL")


def get_sqlite_path(using: str = "default") -> Path | None:
    """
    Return the on-disk path of a SQLite database alias.

    Returns None for non-SQLite databases and in-memory databases.
    """
    db_settings = settings.DATABASES[using]
    if "sqlite3" not in db_settings["ENGINE"]:
        return None
    name = str(db_settings["NAME"])
    if not name or name == ":memory:" or name.startswith("file:"):
        return None
    return Path(name)


def check_integrity(path: Path) -> bool:
    """
    Run ``PRAGMA integrity_check`` against a SQLite file.

    Args:
        path: Database file to inspect

    Returns:
        True if SQLite reports "ok"; False if it reports problems or the file
        is not a readable database.
    """
    try:
        conn = sqlite3.connect(str(path))
    except sqlite3.Error as exc:
        logger.error(f"Cannot open database {path}: {exc}")
        return False

    try:
        rows = conn.execute("PRAGMA integrity_check").fetchall()
    except sqlite3.DatabaseError as exc:
        logger.error(f"Integrity check failed to run on {path}: {exc}")
        return False
    finally:
        conn.close()

    if rows == [("ok",)]:
        return True

    logger.error(
        f"Integrity check reported {len(rows)} problem(s) in {path}: "
        f"{rows[0][0] if rows else 'no output'}"
    )
    return False


def remove_database_files(path: Path) -> list[Path]:
    """
    Delete a SQLite database file and its WAL/SHM/journal companions.

    Returns:
        The paths that were actually removed
    """
    removed = []
    for candidate in [path, *(Path(f"{path}{s}") for s in SQLITE_COMPANION_SUFFIXES)]:
        if candidate.exists():
            candidate.unlink()
            removed.append(candidate)
    return removed


def bootstrap_database(using: str = "default", verbosity: int = 0) -> BootstrapReport:
    """
    Make the database usable: verify, recreate if corrupt, then migrate.

    Migrations are idempotent, so running this on every deploy or start-up
    only creates missing tables and columns.

    Args:
        using: Database alias from settings.DATABASES
        verbosity: Passed through to the migrate command

    Returns:
        BootstrapReport describing what happened
    """
    path = get_sqlite_path(using)
    integrity_ok = True
    recreated = False

    if path is not None and path.exists():
        integrity_ok = check_integrity(path)
        if not integrity_ok:
            # Drop any open handle before deleting the file underneath it
            connections[using].close()
            removed = remove_database_files(path)
            recreated = True
            logger.error(
                f"Database {path} is corrupt; deleted {len(removed)} file(s) "
                "and recreating it from scratch"
            )

    if path is not None:
        path.parent.mkdir(parents=True, exist_ok=True)

    call_command("migrate", database=using, interactive=False, verbosity=verbosity)

    logger.info(
        f"Database '{using}' ready (integrity_ok={integrity_ok}, recreated={recreated})"
    )
    return BootstrapReport(
        database=using,
        path=path,
        integrity_ok=integrity_ok,
        recreated=recreated,
    )
