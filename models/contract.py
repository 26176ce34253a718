"""Table and column names for the odometer database."""

from __future__ import annotations


class OdometerEntry:
    """Names for the single ``mileage`` table. Each row is one odometer reading."""

    TABLE_NAME = "mileage"

    # Assigned by SQLite on insert.
    ID = "_id"
    COLUMN_VEHICLE_ID = "vehicle_id"
    COLUMN_DATE = "date"
    COLUMN_ODOMETER = "odometer"

    PROJECTION = (ID, COLUMN_VEHICLE_ID, COLUMN_DATE, COLUMN_ODOMETER)
