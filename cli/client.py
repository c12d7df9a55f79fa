from __future__ import annotations

from typing import Any, Dict, NoReturn, Optional

import httpx
import typer

from cli.config import CLIConfig


class ApiClient:
    """Minimal HTTP client for the habitat monitor service."""

    def __init__(self, config: CLIConfig) -> None:
        self._config = config
        self._client = httpx.Client(base_url=config.base_url, timeout=config.timeout)

    def close(self) -> None:
        self._client.close()

    def send_reading(self, readings: Dict[str, float]) -> Dict[str, Any]:
        if not readings:
            raise typer.BadParameter("Provide at least one reading to send.")
        return self._request("POST", "/api/webhook", json=readings)

    def get_snapshot(self) -> Dict[str, Any]:
        return self._request("GET", "/api/webhook")

    def get_analysis(self) -> Dict[str, Any]:
        return self._request("GET", "/api/analysis")

    def advance(self, simulate: bool = False, time_label: Optional[str] = None) -> Dict[str, Any]:
        body: Dict[str, Any] = {"simulate": simulate}
        if time_label:
            body["timeLabel"] = time_label
        return self._request("POST", "/api/webhook/tick", json=body)

    def _request(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        try:
            response = self._client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        except httpx.TransportError as exc:
            typer.secho(
                f"Could not reach {self._config.base_url}: {exc}",
                fg=typer.colors.RED,
                err=True,
            )
            raise typer.Exit(code=1) from exc
        return response.json()

    @staticmethod
    def _handle_http_error(exc: httpx.HTTPStatusError) -> NoReturn:
        detail: str | None = None
        try:
            data = exc.response.json()
            if isinstance(data, dict):
                detail = data.get("detail") or data.get("message")
        except ValueError:
            detail = exc.response.text.strip()
        message = (
            f"Request failed with status {exc.response.status_code}: {detail or 'no detail provided.'}"
        )
        typer.secho(message, fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
