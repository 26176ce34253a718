"""SQLite connection management and schema creation for the odometer log."""

from __future__ import annotations

import logging
import sqlite3
from functools import lru_cache
from pathlib import Path
from threading import Lock
from typing import Optional

from models.contract import OdometerEntry
from settings import get_settings

logger = logging.getLogger(__name__)

DATABASE_VERSION = 1

IN_MEMORY = ":memory:"

SQL_CREATE_ENTRIES_TABLE = (
    f"CREATE TABLE {OdometerEntry.TABLE_NAME} ("
    f"{OdometerEntry.ID} INTEGER PRIMARY KEY AUTOINCREMENT, "
    f"{OdometerEntry.COLUMN_VEHICLE_ID} INTEGER NOT NULL, "
    f"{OdometerEntry.COLUMN_DATE} TEXT NOT NULL, "
    f"{OdometerEntry.COLUMN_ODOMETER} INTEGER NOT NULL DEFAULT 0)"
)

SQL_DROP_ENTRIES_TABLE = f"DROP TABLE IF EXISTS {OdometerEntry.TABLE_NAME}"


class OdometerDbHelper:
    """Opens the odometer database on demand and keeps its schema current.

    One connection is opened lazily and shared by readable and writable
    callers until :meth:`close` is called. Requests may arrive on different
    threads, so access to the connection slot is serialised.
    """

    def __init__(self, path: str | Path, version: int = DATABASE_VERSION) -> None:
        if version < 1:
            raise ValueError(f"Database version must be >= 1, got {version}.")
        self.path = str(path)
        self.version = version
        self._connection: Optional[sqlite3.Connection] = None
        self._lock = Lock()

    def get_readable_database(self) -> sqlite3.Connection:
        return self._get_database()

    def get_writable_database(self) -> sqlite3.Connection:
        return self._get_database()

    def close(self) -> None:
        with self._lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None

    def on_create(self, db: sqlite3.Connection) -> None:
        db.execute(SQL_CREATE_ENTRIES_TABLE)
        logger.info("Created odometer schema", extra={"db_path": self.path})

    def on_upgrade(self, db: sqlite3.Connection, old_version: int, new_version: int) -> None:
        # Readings are only cached locally, so an upgrade starts from an empty table.
        logger.info(
            "Upgrading odometer schema from version %s",
            old_version,
            extra={"db_path": self.path, "schema_version": new_version},
        )
        db.execute(SQL_DROP_ENTRIES_TABLE)
        self.on_create(db)

    def _get_database(self) -> sqlite3.Connection:
        with self._lock:
            if self._connection is None:
                self._connection = self._open()
            return self._connection

    def _open(self) -> sqlite3.Connection:
        if self.path != IN_MEMORY:
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)

        connection = sqlite3.connect(self.path, check_same_thread=False)
        connection.row_factory = sqlite3.Row
        try:
            self._migrate(connection)
        except sqlite3.Error:
            connection.close()
            raise
        return connection

    def _migrate(self, connection: sqlite3.Connection) -> None:
        current = connection.execute("PRAGMA user_version").fetchone()[0]
        if current == self.version:
            return
        if current > self.version:
            raise sqlite3.DatabaseError(
                f"Cannot downgrade database {self.path!r} from version {current} to {self.version}."
            )

        with connection:
            if current == 0:
                self.on_create(connection)
            else:
                self.on_upgrade(connection, current, self.version)
            connection.execute(f"PRAGMA user_version = {int(self.version)}")


@lru_cache
def build_default_helper(path: Optional[str] = None) -> OdometerDbHelper:
    settings = get_settings()
    db_path = settings.database_path if path is None else path
    return OdometerDbHelper(path=db_path)
