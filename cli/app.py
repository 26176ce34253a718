from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import typer

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_action, render_catalog


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Record and list vehicle odometer readings through the odometer log service.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1)
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Service base URL (defaults to API_BASE_URL env or http://localhost:8000).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for each request.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("show")
def show_command(ctx: typer.Context) -> None:
    """Print every stored reading."""
    state = _get_state(ctx)
    render_catalog(state.client.get_catalog())


@app.command("add")
def add_command(
    ctx: typer.Context,
    vehicle_id: int = typer.Argument(..., help="Vehicle the reading belongs to."),
    date: str = typer.Argument(..., help="Date of the reading, e.g. 1/1/2017."),
    odometer: int = typer.Argument(..., help="Odometer value."),
) -> None:
    """Store a new reading."""
    state = _get_state(ctx)
    reading_id = state.client.add_reading(vehicle_id, date, odometer)
    typer.secho(f"Reading stored. id={reading_id}", fg=typer.colors.GREEN)


@app.command("insert-dummy")
def insert_dummy_command(ctx: typer.Context) -> None:
    """Insert the fixed debug reading and print the catalog."""
    state = _get_state(ctx)
    render_action(state.client.run_action("insert_dummy_data"))


@app.command("delete-all")
def delete_all_command(ctx: typer.Context) -> None:
    """Request deletion of all readings (not supported by the server yet)."""
    state = _get_state(ctx)
    render_action(state.client.run_action("delete_all_entries"))
