"""Request orchestration for weather lookups."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import date
from functools import lru_cache
from typing import Callable, Iterator, Optional

from app.schemas import CachedReading, OutcomeStatus, ReadingPayload, RequestOutcome
from datastore.weather_store import WeatherStore, build_default_store
from models.readings import DailyReading
from services.averager import HistoricalAverager
from services.connectivity import ConnectivityProbe, build_default_probe
from services.dates import (
    adjusted_anchor_date,
    format_iso_date,
    is_future,
    parse_iso_date,
    subtract_years,
)
from services.errors import NoConnectivity, NotFound, WeatherQueryError
from services.weather_source import WeatherSource, build_default_source
from settings import get_settings

logger = logging.getLogger(__name__)


class WeatherQueryCoordinator:
    """Routes each user request to a live fetch, a prediction, a range load, or the store.

    Every public operation settles into its own ``RequestOutcome``; nothing is
    shared between calls except the in-flight counter behind ``loading``.
    """

    def __init__(
        self,
        source: WeatherSource,
        store: WeatherStore,
        probe: ConnectivityProbe,
        averager: Optional[HistoricalAverager] = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.source = source
        self.store = store
        self.probe = probe
        self.averager = averager or HistoricalAverager(source=source, store=store)
        self._today = today
        self._in_flight = 0

    @property
    def loading(self) -> bool:
        return self._in_flight > 0

    async def request_single_date(self, location: str, date_text: str) -> RequestOutcome:
        """Fetch a past or current day directly, or predict a future one."""
        with self._track():
            try:
                entered = parse_iso_date(date_text)
                await self._ensure_connected()
                today = self._today()
                if not is_future(entered, today):
                    reading = await self._fetch_single_day(location, format_iso_date(entered))
                else:
                    anchor = adjusted_anchor_date(entered, today)
                    logger.info(
                        "Predicting future date from past years",
                        extra={
                            "location": location,
                            "date": format_iso_date(entered),
                            "anchor_date": format_iso_date(anchor),
                        },
                    )
                    reading = await self.averager.predict(location, anchor, entered)
            except WeatherQueryError as exc:
                return self._failure(exc, location=location, date=date_text)
            return RequestOutcome(
                status=OutcomeStatus.succeeded,
                result=ReadingPayload.from_reading(reading),
            )

    async def request_range(
        self, location: str, start_date: str, end_date: str
    ) -> RequestOutcome:
        """Load a contiguous range into the store without producing a result."""
        with self._track():
            try:
                start = format_iso_date(parse_iso_date(start_date))
                end = format_iso_date(parse_iso_date(end_date))
                await self._ensure_connected()
                readings = await self.source.fetch_range(location, start, end)
                stored = self.store.upsert_all(
                    CachedReading.from_reading(reading) for reading in readings
                )
            except WeatherQueryError as exc:
                return self._failure(
                    exc, location=location, start_date=start_date, end_date=end_date
                )
            logger.info(
                "Stored weather range",
                extra={
                    "location": location,
                    "start_date": start,
                    "end_date": end,
                    "stored_count": stored,
                },
            )
            return RequestOutcome(
                status=OutcomeStatus.succeeded,
                success_message=f"Stored {stored} days from {start} to {end}",
                stored_count=stored,
            )

    async def request_preceding_year(self, location: str, date_text: str) -> RequestOutcome:
        """Load the year ending at ``date_text`` for later offline lookups."""
        with self._track():
            try:
                end = parse_iso_date(date_text)
            except WeatherQueryError as exc:
                return self._failure(exc, location=location, date=date_text)
            start = subtract_years(end, 1)
            return await self.request_range(
                location, format_iso_date(start), format_iso_date(end)
            )

    async def request_from_cache(self, date_text: str) -> RequestOutcome:
        """Read a stored reading by exact date; needs no network."""
        with self._track():
            try:
                key = format_iso_date(parse_iso_date(date_text))
                cached = self.store.find_by_date(key)
                if cached is None:
                    raise NotFound(key)
            except WeatherQueryError as exc:
                return self._failure(exc, date=date_text)
            return RequestOutcome(
                status=OutcomeStatus.succeeded,
                result=ReadingPayload.from_reading(cached.to_reading()),
            )

    async def shutdown(self) -> None:
        await self.source.close()

    async def _ensure_connected(self) -> None:
        if not await self.probe.is_available():
            raise NoConnectivity()

    async def _fetch_single_day(self, location: str, date_text: str) -> DailyReading:
        reading = await self.source.fetch_day(location, date_text)
        self.store.upsert(CachedReading.from_reading(reading))
        return reading

    @contextmanager
    def _track(self) -> Iterator[None]:
        self._in_flight += 1
        try:
            yield
        finally:
            self._in_flight -= 1

    @staticmethod
    def _failure(exc: WeatherQueryError, **context: str) -> RequestOutcome:
        logger.warning(
            "Weather request failed",
            extra={**context, "status": exc.code.value, "reason": exc.message},
        )
        return RequestOutcome(
            status=OutcomeStatus.failed,
            error=exc.code,
            error_message=exc.message,
        )


@lru_cache
def build_default_coordinator() -> WeatherQueryCoordinator:
    """Factory that wires the coordinator with settings-driven collaborators."""
    settings = get_settings()
    source = build_default_source()
    store = build_default_store()
    averager = HistoricalAverager(
        source=source, store=store, lookback_years=settings.lookback_years
    )
    return WeatherQueryCoordinator(
        source=source,
        store=store,
        probe=build_default_probe(),
        averager=averager,
    )
