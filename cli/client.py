from __future__ import annotations

from typing import Any, Dict, NoReturn

import httpx
import typer

from cli.config import CLIConfig


class ApiClient:
    """Thin HTTP client for the odometer log service."""

    def __init__(self, config: CLIConfig) -> None:
        self._config = config
        self._client = httpx.Client(base_url=config.base_url, timeout=config.timeout)

    def close(self) -> None:
        self._client.close()

    def get_catalog(self) -> Dict[str, Any]:
        try:
            response = self._client.get("/readings")
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        return response.json()

    def add_reading(self, vehicle_id: int, date: str, odometer: int) -> int:
        try:
            response = self._client.post(
                "/readings",
                json={"vehicle_id": vehicle_id, "date": date, "odometer": odometer},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        reading_id = response.json().get("id")
        if not isinstance(reading_id, int):
            raise typer.BadParameter("Unexpected response payload when adding a reading.")
        return reading_id

    def run_action(self, action: str) -> Dict[str, Any]:
        try:
            response = self._client.post(f"/actions/{action}")
            if response.status_code == 404:
                raise typer.BadParameter(f"Action {action} is not supported by the server.")
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        return response.json()

    @staticmethod
    def _handle_http_error(exc: httpx.HTTPStatusError) -> NoReturn:
        try:
            data = exc.response.json()
        except ValueError:
            data = None
        if isinstance(data, dict):
            detail = data.get("detail")
        else:
            detail = exc.response.text.strip()
        message = (
            f"Request failed with status {exc.response.status_code}: {detail or 'no detail provided.'}"
        )
        typer.secho(message, fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
