"""Exceptions raised by the weather services and handled by the coordinator."""

from __future__ import annotations

from typing import Optional

from app.schemas import ErrorCode


class WeatherQueryError(Exception):
    """Base class for failures that are reported back to the user."""

    code: ErrorCode = ErrorCode.remote_error

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidDateFormat(WeatherQueryError):
    code = ErrorCode.invalid_date_format

    def __init__(self, date_text: str) -> None:
        super().__init__("Invalid Date Format")
        self.date_text = date_text


class NoConnectivity(WeatherQueryError):
    code = ErrorCode.no_connectivity

    def __init__(self) -> None:
        super().__init__("No Internet Connection")


class RemoteError(WeatherQueryError):
    """Non-2xx response, empty body, or transport failure from the provider."""

    code = ErrorCode.remote_error

    def __init__(self, detail: str, status: Optional[int] = None) -> None:
        if status is None:
            message = f"Exception: {detail}"
        else:
            message = f"Error: {detail} (HTTP {status})"
        super().__init__(message)
        self.detail = detail
        self.status = status


class NoPredictionData(WeatherQueryError):
    code = ErrorCode.no_prediction_data

    def __init__(self, date: str) -> None:
        super().__init__("No data available for future prediction")
        self.date = date


class NotFound(WeatherQueryError):
    code = ErrorCode.not_found

    def __init__(self, date: str) -> None:
        super().__init__("No data available for this date")
        self.date = date


class StorageError(WeatherQueryError):
    """The local store could not be written; the previous rows are kept."""

    code = ErrorCode.storage_error

    def __init__(self, detail: str) -> None:
        super().__init__(f"Could not save weather data: {detail}")
        self.detail = detail
