"""Pydantic schemas for the HTTP API layer and the local store."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from models.readings import DESCRIPTION_NOT_AVAILABLE, DailyReading, fahrenheit_to_celsius


class OutcomeStatus(str, Enum):
    """Settled state of a single coordinator request."""

    succeeded = "succeeded"
    failed = "failed"


class ErrorCode(str, Enum):
    """Failure categories surfaced to callers."""

    invalid_date_format = "invalid_date_format"
    no_connectivity = "no_connectivity"
    remote_error = "remote_error"
    no_prediction_data = "no_prediction_data"
    not_found = "not_found"
    storage_error = "storage_error"


class CachedReading(BaseModel):
    """Persisted form of a daily reading; ``date`` is the primary key."""

    date: str = Field(..., description="ISO 8601 calendar date (YYYY-MM-DD).")
    max_temp: float = Field(..., description="Maximum temperature in Fahrenheit.")
    min_temp: float = Field(..., description="Minimum temperature in Fahrenheit.")

    @classmethod
    def from_reading(cls, reading: DailyReading) -> CachedReading:
        return cls(date=reading.date, max_temp=reading.max_temp, min_temp=reading.min_temp)

    def to_reading(self) -> DailyReading:
        return DailyReading(
            date=self.date,
            max_temp=self.max_temp,
            min_temp=self.min_temp,
            description=DESCRIPTION_NOT_AVAILABLE,
        )


class ReadingPayload(BaseModel):
    """A reading as presented to clients, with Celsius values for display."""

    date: str
    max_temp: float
    min_temp: float
    description: Optional[str] = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def max_temp_celsius(self) -> float:
        return fahrenheit_to_celsius(self.max_temp)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def min_temp_celsius(self) -> float:
        return fahrenheit_to_celsius(self.min_temp)

    @classmethod
    def from_reading(cls, reading: DailyReading) -> ReadingPayload:
        return cls(
            date=reading.date,
            max_temp=reading.max_temp,
            min_temp=reading.min_temp,
            description=reading.description,
        )


class RequestOutcome(BaseModel):
    """Result of one coordinator request, returned per call."""

    status: OutcomeStatus
    result: Optional[ReadingPayload] = None
    error: Optional[ErrorCode] = None
    error_message: Optional[str] = None
    success_message: Optional[str] = None
    stored_count: Optional[int] = Field(
        default=None, ge=0, description="Readings written by a range request."
    )

    @property
    def succeeded(self) -> bool:
        return self.status is OutcomeStatus.succeeded


class RangeRequest(BaseModel):
    """Request body for loading a contiguous date range into the store."""

    start_date: str = Field(..., description="First day of the range (YYYY-MM-DD).")
    end_date: str = Field(..., description="Last day of the range (YYYY-MM-DD).")


class TimelineDay(BaseModel):
    """One entry of the remote ``days`` array."""

    datetime: str
    tempmax: float
    tempmin: float
    description: Optional[str] = None

    def to_reading(self) -> DailyReading:
        return DailyReading(
            date=self.datetime,
            max_temp=self.tempmax,
            min_temp=self.tempmin,
            description=self.description,
        )


class TimelineResponse(BaseModel):
    """Body returned by the remote timeline endpoints."""

    days: list[TimelineDay] = Field(default_factory=list)
