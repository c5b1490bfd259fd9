from __future__ import annotations

from typing import Any, Dict
from urllib.parse import quote

import httpx
import typer

from cli.config import CLIConfig


class ApiClient:
    """Minimal HTTP client for the weather lookup service."""

    def __init__(self, config: CLIConfig) -> None:
        self._config = config
        self._client = httpx.Client(base_url=config.base_url, timeout=config.timeout)

    def close(self) -> None:
        self._client.close()

    def lookup(self, location: str, date: str) -> Dict[str, Any]:
        return self._request("GET", f"/weather/{_segment(location)}/{_segment(date)}")

    def load_range(self, location: str, start_date: str, end_date: str) -> Dict[str, Any]:
        return self._request(
            "POST",
            f"/weather/{_segment(location)}/range",
            json={"start_date": start_date, "end_date": end_date},
        )

    def preload(self, location: str, date: str) -> Dict[str, Any]:
        return self._request(
            "POST", f"/weather/{_segment(location)}/preload/{_segment(date)}"
        )

    def get_cached(self, date: str) -> Dict[str, Any]:
        return self._request("GET", f"/cache/{_segment(date)}")

    def _request(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        try:
            response = self._client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        except httpx.HTTPError as exc:
            typer.secho(f"Could not reach {self._config.base_url}: {exc}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1) from exc
        return response.json()

    @staticmethod
    def _handle_http_error(exc: httpx.HTTPStatusError) -> None:
        detail: Any = None
        try:
            data = exc.response.json()
            detail = data.get("detail")
        except ValueError:
            detail = exc.response.text.strip()
        if isinstance(detail, dict):
            detail = detail.get("message") or detail.get("error")
        message = (
            f"Request failed with status {exc.response.status_code}: {detail or 'no detail provided.'}"
        )
        typer.secho(message, fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


def _segment(value: str) -> str:
    return quote(value, safe="")
