from __future__ import annotations

from typing import Any, Dict, List, NoReturn, Optional

import httpx
import typer

from cli.config import CLIConfig


class ApiClient:
    """Minimal HTTP client for the telemetry relay."""

    def __init__(self, config: CLIConfig) -> None:
        self._config = config
        self._client = httpx.Client(base_url=config.base_url, timeout=config.timeout)

    def close(self) -> None:
        self._client.close()

    def send_reading(
        self,
        distance: Optional[float] = None,
        temperature: Optional[float] = None,
        rfid: Optional[str] = None,
    ) -> Dict[str, Any]:
        payload = {
            key: value
            for key, value in (("distance", distance), ("temperature", temperature), ("rfid", rfid))
            if value is not None
        }
        return self._request("POST", "/api/sensor", json=payload)

    def get_latest(self) -> Dict[str, Any]:
        return self._request("GET", "/api/data")

    def get_history(self) -> List[Dict[str, Any]]:
        payload = self._request("GET", "/api/history")
        if not isinstance(payload, list):
            raise typer.BadParameter("Unexpected response payload when fetching history.")
        return payload

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
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
            detail = data.get("detail")
        except Exception:  # noqa: BLE001 - best effort parsing
            detail = exc.response.text.strip()
        message = (
            f"Request failed with status {exc.response.status_code}: {detail or 'no detail provided.'}"
        )
        typer.secho(message, fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
