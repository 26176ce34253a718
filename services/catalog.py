"""Reading, inserting and displaying odometer entries."""

from __future__ import annotations

import logging
import sqlite3
from contextlib import closing
from functools import lru_cache
from typing import Iterable, List, Optional

from app.schemas import ActionResult, MenuAction, ReadingCreate
from datastore.odometer_db import OdometerDbHelper, build_default_helper
from models.contract import OdometerEntry
from models.records import Reading

logger = logging.getLogger(__name__)

# Debug row added by the "insert dummy data" menu action.
DUMMY_READING = ReadingCreate(vehicle_id=1, date="1/1/2017", odometer=100)

_SELECT_ALL = (
    f"SELECT {', '.join(OdometerEntry.PROJECTION)} FROM {OdometerEntry.TABLE_NAME}"
)
_INSERT = (
    f"INSERT INTO {OdometerEntry.TABLE_NAME} "
    f"({OdometerEntry.COLUMN_VEHICLE_ID}, {OdometerEntry.COLUMN_DATE}, {OdometerEntry.COLUMN_ODOMETER}) "
    "VALUES (?, ?, ?)"
)


def query_readings(db: sqlite3.Connection) -> List[Reading]:
    """Return every stored reading in the order SQLite yields them.

    The cursor is closed before returning, also when reading a row fails.
    """
    with closing(db.execute(_SELECT_ALL)) as cursor:
        return [Reading.from_row(row) for row in cursor]


def format_catalog(readings: Iterable[Reading]) -> str:
    rows = list(readings)
    lines = [
        f"The {OdometerEntry.TABLE_NAME} table contains {len(rows)} entries.\n\n",
        " - ".join(OdometerEntry.PROJECTION) + "\n",
    ]
    for reading in rows:
        lines.append(
            f"\n{reading.id} - {reading.vehicle_id} - {reading.date} - {reading.odometer}"
        )
    return "".join(lines)


def insert_reading(db: sqlite3.Connection, vehicle_id: int, date: str, odometer: int) -> int:
    """Insert one row and return the id SQLite assigned to it."""
    with db:
        cursor = db.execute(_INSERT, (vehicle_id, date, odometer))
    row_id = cursor.lastrowid
    cursor.close()
    if row_id is None:
        raise sqlite3.DatabaseError("Insert did not produce a row id.")
    return int(row_id)


class CatalogService:
    """Backs the catalog screen: shows the stored readings and runs menu actions."""

    def __init__(self, helper: OdometerDbHelper) -> None:
        self.helper = helper
        self.display_text = ""

    def on_start(self) -> str:
        return self.display_database_info()

    def list_readings(self) -> List[Reading]:
        return query_readings(self.helper.get_readable_database())

    def display_database_info(self) -> str:
        readings = self.list_readings()
        self.display_text = format_catalog(readings)
        logger.debug("Loaded catalog", extra={"row_count": len(readings)})
        return self.display_text

    def insert_mileage(self, values: ReadingCreate = DUMMY_READING) -> int:
        db = self.helper.get_writable_database()
        row_id = insert_reading(db, values.vehicle_id, values.date, values.odometer)
        logger.info(
            "Inserted odometer reading",
            extra={"row_id": row_id, "vehicle_id": values.vehicle_id},
        )
        return row_id

    def delete_all_entries(self) -> None:
        # Menu entry exists but deleting is not supported yet.
        logger.info(
            "Delete all entries requested; nothing removed",
            extra={"action": MenuAction.delete_all_entries.value},
        )

    def handle_action(self, action: MenuAction | str) -> ActionResult:
        """Run a menu action. Unknown action names are reported as unhandled."""
        try:
            selected = MenuAction(action)
        except ValueError:
            logger.warning("Ignoring unknown menu action", extra={"action": str(action)})
            return ActionResult(action=str(action), handled=False)

        if selected is MenuAction.insert_dummy_data:
            row_id = self.insert_mileage()
            text = self.display_database_info()
            return ActionResult(action=selected.value, handled=True, inserted_id=row_id, text=text)

        self.delete_all_entries()
        return ActionResult(action=selected.value, handled=True)


@lru_cache
def build_default_catalog(path: Optional[str] = None) -> CatalogService:
    """Factory that wires the catalog with the configured database."""
    return CatalogService(helper=build_default_helper(path))
