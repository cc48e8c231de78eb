"""
SQLite database operations for the SongLink backend
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from loguru import logger

from .config import get_data_dir

# Database schema version for migrations
SCHEMA_VERSION = 2

PathLike = Union[str, Path]


def get_database_path(path: Optional[PathLike] = None) -> Path:
    """Get the path to the SQLite database file."""
    if path:
        return Path(path)
    return get_data_dir() / "songlink.db"


@contextmanager
def get_db_connection(path: Optional[PathLike] = None) -> Iterator[sqlite3.Connection]:
    """Get a database connection with proper cleanup and concurrency support."""
    db_path = get_database_path(path)
    # check_same_thread=False: FastAPI may resolve the dependency and run the
    # endpoint on different threads.
    conn = sqlite3.connect(db_path, timeout=30.0, check_same_thread=False)
    conn.row_factory = sqlite3.Row

    # WAL mode allows reads during writes
    conn.execute("PRAGMA journal_mode=WAL")

    try:
        yield conn
    finally:
        conn.close()


def migrate_database(conn: sqlite3.Connection, current_version: int) -> None:
    """Migrate database from current_version to latest schema."""
    if current_version < 2:
        # Migration from v1 to v2: persist spectator service preference
        columns = {row["name"] for row in conn.execute("PRAGMA table_info(users)")}
        if "preferred_service" not in columns:
            conn.execute("ALTER TABLE users ADD COLUMN preferred_service TEXT")
        conn.commit()


def init_database(path: Optional[PathLike] = None) -> None:
    """Initialize the database with required tables."""
    db_path = get_database_path(path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    with get_db_connection(db_path) as conn:
        conn.execute("""
            CREATE TABLE IF NOT EXISTS schema_version (
                version INTEGER PRIMARY KEY
            )
        """)

        conn.execute("""
            CREATE TABLE IF NOT EXISTS users (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                email TEXT UNIQUE NOT NULL,
                password TEXT NOT NULL,
                username TEXT UNIQUE NOT NULL,
                default_timestamp INTEGER NOT NULL,
                preferred_service TEXT,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        row = conn.execute("SELECT MAX(version) AS version FROM schema_version").fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        if current_version < SCHEMA_VERSION:
            if current_version > 0:
                logger.info(
                    f"Migrating database from v{current_version} to v{SCHEMA_VERSION}"
                )
            migrate_database(conn, current_version)
            conn.execute(
                "INSERT OR REPLACE INTO schema_version (version) VALUES (?)",
                (SCHEMA_VERSION,),
            )

        conn.commit()

    logger.debug(f"Database ready: {db_path}")
