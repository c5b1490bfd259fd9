"""HTTP client for the Visual Crossing timeline API."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from app.schemas import TimelineResponse
from models.readings import DailyReading
from services.errors import RemoteError
from settings import get_settings

logger = logging.getLogger(__name__)

INCLUDE_MODE = "days"
ELEMENTS = "datetime,tempmax,tempmin"


class WeatherSource:
    """Fetches daily temperatures; performs no connectivity check of its own."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._client = client or httpx.AsyncClient(base_url=self.base_url, timeout=timeout)

    async def close(self) -> None:
        await self._client.aclose()

    async def fetch_day(self, location: str, date: str) -> DailyReading:
        timeline = await self._get_timeline(self._timeline_path(location, date))
        if not timeline.days:
            raise RemoteError("empty response body", status=200)
        return timeline.days[0].to_reading()

    async def fetch_range(
        self, location: str, start_date: str, end_date: str
    ) -> List[DailyReading]:
        timeline = await self._get_timeline(
            self._timeline_path(location, start_date, end_date)
        )
        return [day.to_reading() for day in timeline.days]

    def _params(self) -> Dict[str, Any]:
        return {"key": self._api_key, "include": INCLUDE_MODE, "elements": ELEMENTS}

    @staticmethod
    def _timeline_path(location: str, *dates: str) -> str:
        segments = [quote(location, safe="")] + [quote(date, safe="") for date in dates]
        return "/timeline/" + "/".join(segments)

    async def _get_timeline(self, path: str) -> TimelineResponse:
        try:
            response = await self._client.get(path, params=self._params())
        except httpx.HTTPError as exc:
            raise RemoteError(str(exc) or exc.__class__.__name__) from exc

        if not response.is_success:
            logger.info(
                "Weather provider rejected request",
                extra={"status": response.status_code, "reason": response.reason_phrase},
            )
            raise RemoteError(
                response.reason_phrase or "request failed", status=response.status_code
            )

        if not response.content.strip():
            raise RemoteError("empty response body", status=response.status_code)

        try:
            return TimelineResponse.model_validate(response.json())
        except ValueError as exc:
            raise RemoteError(f"malformed response body: {exc}") from exc


def build_default_source() -> WeatherSource:
    """Factory that wires the source from environment settings."""
    settings = get_settings()
    return WeatherSource(
        base_url=settings.api_base_url,
        api_key=settings.api_key,
        timeout=settings.http_timeout,
    )
