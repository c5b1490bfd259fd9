"""Tests for the timeline API client."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from models.readings import DailyReading
from services.errors import RemoteError
from services.weather_source import WeatherSource

from conftest import BASE_URL


def _source(handler) -> WeatherSource:
    client = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))
    return WeatherSource(base_url=BASE_URL, api_key="secret", client=client)


def test_fetch_day_builds_request_and_parses_first_day(timeline_api) -> None:
    timeline_api.add_day("2023-03-25", 61.5, 40.2, description="Clear")
    source = timeline_api.source()

    reading = asyncio.run(source.fetch_day("New York, NY", "2023-03-25"))

    assert reading == DailyReading(
        date="2023-03-25", max_temp=61.5, min_temp=40.2, description="Clear"
    )
    request = timeline_api.requests[0]
    assert request.method == "GET"
    assert request.url.path == "/rest/services/timeline/New York, NY/2023-03-25"
    assert request.url.params["key"] == "test-key"
    assert request.url.params["include"] == "days"
    assert request.url.params["elements"] == "datetime,tempmax,tempmin"


def test_fetch_range_returns_every_day(timeline_api) -> None:
    timeline_api.add_day("2023-03-24", 55.0, 38.0)
    timeline_api.add_day("2023-03-25", 60.0, 41.0)
    timeline_api.add_day("2023-03-27", 65.0, 44.0)
    source = timeline_api.source()

    readings = asyncio.run(source.fetch_range("Paris", "2023-03-24", "2023-03-26"))

    assert [reading.date for reading in readings] == ["2023-03-24", "2023-03-25"]
    assert timeline_api.requested_dates == ["2023-03-24/2023-03-26"]


def test_non_success_status_raises_remote_error(timeline_api) -> None:
    timeline_api.fail_with_status("2023-03-25", 401)
    source = timeline_api.source()

    with pytest.raises(RemoteError) as exc_info:
        asyncio.run(source.fetch_day("Paris", "2023-03-25"))

    assert exc_info.value.status == 401
    assert exc_info.value.message == "Error: Unauthorized (HTTP 401)"


def test_day_without_entries_raises_remote_error(timeline_api) -> None:
    source = timeline_api.source()

    with pytest.raises(RemoteError) as exc_info:
        asyncio.run(source.fetch_day("Paris", "2023-03-25"))

    assert exc_info.value.detail == "empty response body"


def test_empty_body_raises_remote_error() -> None:
    source = _source(lambda request: httpx.Response(200, content=b"", request=request))

    with pytest.raises(RemoteError) as exc_info:
        asyncio.run(source.fetch_range("Paris", "2023-03-24", "2023-03-26"))

    assert exc_info.value.detail == "empty response body"


def test_malformed_body_raises_remote_error() -> None:
    source = _source(
        lambda request: httpx.Response(200, json={"days": [{"datetime": "x"}]}, request=request)
    )

    with pytest.raises(RemoteError) as exc_info:
        asyncio.run(source.fetch_day("Paris", "2023-03-25"))

    assert exc_info.value.status is None
    assert "malformed response body" in exc_info.value.detail


def test_transport_failure_raises_remote_error(timeline_api) -> None:
    timeline_api.fail_with_error("2023-03-25", httpx.ConnectError("connection refused"))
    source = timeline_api.source()

    with pytest.raises(RemoteError) as exc_info:
        asyncio.run(source.fetch_day("Paris", "2023-03-25"))

    assert exc_info.value.status is None
    assert exc_info.value.message == "Exception: connection refused"


def test_close_releases_client(timeline_api) -> None:
    source = timeline_api.source()

    asyncio.run(source.close())

    assert source._client.is_closed
