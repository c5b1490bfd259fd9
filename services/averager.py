"""Estimate a future day's temperatures from the same calendar day in past years."""

from __future__ import annotations

import logging
from datetime import date

from app.schemas import CachedReading
from datastore.weather_store import WeatherStore
from models.readings import DailyReading
from services.dates import format_iso_date, subtract_years
from services.errors import NoPredictionData, RemoteError
from services.weather_source import WeatherSource

logger = logging.getLogger(__name__)

DEFAULT_LOOKBACK_YEARS = 10


class HistoricalAverager:
    """Averages past readings sequentially, tolerating missing years."""

    def __init__(
        self,
        source: WeatherSource,
        store: WeatherStore,
        lookback_years: int = DEFAULT_LOOKBACK_YEARS,
    ) -> None:
        self.source = source
        self.store = store
        self.lookback_years = lookback_years

    async def predict(self, location: str, anchor: date, target: date) -> DailyReading:
        """Average ``anchor`` and the preceding years, storing the result under ``target``.

        Years that fail to load are skipped. Raises ``NoPredictionData`` when
        none of them produced a reading.
        """
        total_max = 0.0
        total_min = 0.0
        count = 0

        for years_back in range(self.lookback_years):
            past_date = format_iso_date(subtract_years(anchor, years_back))
            try:
                reading = await self.source.fetch_day(location, past_date)
            except RemoteError as exc:
                logger.debug(
                    "Skipping year without data",
                    extra={"date": past_date, "years_back": years_back, "reason": exc.message},
                )
                continue
            total_max += reading.max_temp
            total_min += reading.min_temp
            count += 1

        target_text = format_iso_date(target)
        if count == 0:
            logger.info(
                "No past years available for prediction",
                extra={"location": location, "date": target_text},
            )
            raise NoPredictionData(target_text)

        average = CachedReading(
            date=target_text,
            max_temp=total_max / count,
            min_temp=total_min / count,
        )
        self.store.upsert(average)
        logger.info(
            "Stored averaged reading",
            extra={"location": location, "date": target_text, "success_count": count},
        )
        return average.to_reading()
