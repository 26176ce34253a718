"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

# Signed 64-bit range of a SQLite INTEGER.
SQLITE_INTEGER_MIN = -(2**63)
SQLITE_INTEGER_MAX = 2**63 - 1


class MenuAction(str, Enum):
    """Actions offered by the catalog screen's options menu."""

    insert_dummy_data = "insert_dummy_data"
    delete_all_entries = "delete_all_entries"


class ReadingCreate(BaseModel):
    """Values for a new odometer reading.

    Integers only have to fit a SQLite INTEGER column; no domain ranges are checked.
    """

    vehicle_id: int = Field(..., ge=SQLITE_INTEGER_MIN, le=SQLITE_INTEGER_MAX)
    date: str
    odometer: int = Field(..., ge=SQLITE_INTEGER_MIN, le=SQLITE_INTEGER_MAX)


class ReadingOut(BaseModel):
    """A stored odometer reading."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Row identifier assigned by the database.")
    vehicle_id: int
    date: str
    odometer: int


class CatalogResponse(BaseModel):
    """All stored readings plus the rendered catalog text."""

    count: int = Field(..., ge=0)
    readings: List[ReadingOut] = Field(default_factory=list)
    text: str


class ActionResult(BaseModel):
    """Outcome of a menu action."""

    action: str
    handled: bool
    inserted_id: Optional[int] = Field(
        default=None, description="Row id created by the action, if any."
    )
    text: Optional[str] = Field(
        default=None, description="Catalog text after the action ran, if it was refreshed."
    )
