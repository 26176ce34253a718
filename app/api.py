"""HTTP route definitions for the service."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import PlainTextResponse

from app.schemas import ActionResult, CatalogResponse, ReadingCreate, ReadingOut
from services.catalog import CatalogService, build_default_catalog, format_catalog

router = APIRouter()


def get_catalog() -> CatalogService:
    return build_default_catalog()


@router.get(
    "/readings",
    response_model=CatalogResponse,
    summary="List every stored odometer reading.",
)
async def list_readings(
    catalog: CatalogService = Depends(get_catalog),
) -> CatalogResponse:
    readings = catalog.list_readings()
    return CatalogResponse(
        count=len(readings),
        readings=[ReadingOut.model_validate(reading) for reading in readings],
        text=format_catalog(readings),
    )


@router.get(
    "/readings/text",
    response_class=PlainTextResponse,
    summary="Render the catalog as plain text.",
)
async def catalog_text(
    catalog: CatalogService = Depends(get_catalog),
) -> str:
    return catalog.display_database_info()


@router.post(
    "/readings",
    status_code=status.HTTP_201_CREATED,
    response_model=ReadingOut,
    summary="Store a new odometer reading.",
)
async def create_reading(
    payload: ReadingCreate,
    catalog: CatalogService = Depends(get_catalog),
) -> ReadingOut:
    row_id = catalog.insert_mileage(payload)
    return ReadingOut(id=row_id, **payload.model_dump())


@router.post(
    "/actions/{action}",
    response_model=ActionResult,
    summary="Run a catalog menu action.",
)
async def run_action(
    action: str,
    catalog: CatalogService = Depends(get_catalog),
) -> ActionResult:
    result = catalog.handle_action(action)
    if not result.handled:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown action {action!r}.",
        )
    return result


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /readings for stored entries or /ui for the catalog page."}
