from __future__ import annotations

from typing import Any, Dict

import typer


def render_catalog(payload: Dict[str, Any]) -> None:
    typer.echo(payload.get("text") or "")


def render_action(payload: Dict[str, Any]) -> None:
    action = payload.get("action")
    inserted_id = payload.get("inserted_id")
    if inserted_id is not None:
        typer.secho(f"{action}: inserted row {inserted_id}", fg=typer.colors.GREEN)
    else:
        typer.secho(f"{action}: no rows changed", fg=typer.colors.YELLOW)

    text = payload.get("text")
    if text:
        typer.echo()
        typer.echo(text)
