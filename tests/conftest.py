from __future__ import annotations

from datetime import date
from typing import Callable, Dict, List, Optional

import httpx
import pytest

from datastore.weather_store import WeatherStore
from services.coordinator import WeatherQueryCoordinator
from services.weather_source import WeatherSource

BASE_URL = "https://weather.test/rest/services"
TODAY = date(2024, 6, 15)


class FakeTimelineApi:
    """In-memory stand-in for the remote timeline endpoints."""

    def __init__(self) -> None:
        self.days: Dict[str, dict] = {}
        self.statuses: Dict[str, int] = {}
        self.errors: Dict[str, Exception] = {}
        self.requests: List[httpx.Request] = []
        self.on_request: Optional[Callable[[httpx.Request], None]] = None

    def add_day(
        self, day: str, tempmax: float, tempmin: float, description: Optional[str] = None
    ) -> None:
        payload = {"datetime": day, "tempmax": tempmax, "tempmin": tempmin}
        if description is not None:
            payload["description"] = description
        self.days[day] = payload

    def fail_with_status(self, day: str, status: int) -> None:
        self.statuses[day] = status

    def fail_with_error(self, day: str, error: Exception) -> None:
        self.errors[day] = error

    @property
    def requested_dates(self) -> List[str]:
        return ["/".join(self._segments(request)[1:]) for request in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.on_request is not None:
            self.on_request(request)
        dates = self._segments(request)[1:]
        first = dates[0]
        if first in self.errors:
            raise self.errors[first]
        if first in self.statuses:
            return httpx.Response(self.statuses[first], request=request)
        if len(dates) == 1:
            selected = [self.days[first]] if first in self.days else []
        else:
            start, end = dates
            selected = [self.days[key] for key in sorted(self.days) if start <= key <= end]
        return httpx.Response(200, json={"days": selected}, request=request)

    def source(self) -> WeatherSource:
        client = httpx.AsyncClient(
            base_url=BASE_URL, transport=httpx.MockTransport(self.handler)
        )
        return WeatherSource(base_url=BASE_URL, api_key="test-key", client=client)

    @staticmethod
    def _segments(request: httpx.Request) -> List[str]:
        return request.url.path.split("/timeline/", 1)[1].split("/")


class StubProbe:
    def __init__(self, available: bool = True) -> None:
        self.available = available
        self.calls = 0

    async def is_available(self) -> bool:
        self.calls += 1
        return self.available


@pytest.fixture()
def timeline_api() -> FakeTimelineApi:
    return FakeTimelineApi()


@pytest.fixture()
def probe() -> StubProbe:
    return StubProbe()


@pytest.fixture()
def store(tmp_path) -> WeatherStore:
    return WeatherStore(persistence_path=tmp_path / "weather.json")


@pytest.fixture()
def coordinator(timeline_api, store, probe) -> WeatherQueryCoordinator:
    return WeatherQueryCoordinator(
        source=timeline_api.source(),
        store=store,
        probe=probe,
        today=lambda: TODAY,
    )
