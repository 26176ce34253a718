from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from app.schemas import MenuAction
from services.catalog import CatalogService, build_default_catalog


templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))


def get_catalog() -> CatalogService:
    return build_default_catalog()


router = APIRouter(include_in_schema=False)


@router.get("/ui", name="ui_index", response_class=HTMLResponse)
async def ui_index(
    request: Request,
    catalog: CatalogService = Depends(get_catalog),
) -> HTMLResponse:
    text = catalog.display_database_info()
    return templates.TemplateResponse(
        request,
        "ui/index.html",
        {
            "catalog_text": text,
            "actions": list(MenuAction),
        },
    )


@router.post("/ui/actions/{action}", name="ui_run_action")
async def ui_run_action(
    request: Request,
    action: str,
    catalog: CatalogService = Depends(get_catalog),
) -> RedirectResponse:
    result = catalog.handle_action(action)
    if not result.handled:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown action {action!r}.",
        )
    return RedirectResponse(
        url=str(request.url_for("ui_index")),
        status_code=status.HTTP_303_SEE_OTHER,
    )
