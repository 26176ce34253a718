"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from models.contract import OdometerEntry


@dataclass(slots=True)
class Reading:
    """A single odometer reading stored in the mileage table."""

    id: int
    vehicle_id: int
    date: str
    odometer: int

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Reading":
        return cls(
            id=int(row[OdometerEntry.ID]),
            vehicle_id=int(row[OdometerEntry.COLUMN_VEHICLE_ID]),
            date=str(row[OdometerEntry.COLUMN_DATE]),
            odometer=int(row[OdometerEntry.COLUMN_ODOMETER]),
        )
