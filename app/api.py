"""HTTP route definitions for the service."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from app.schemas import CachedReading, ErrorCode, RangeRequest, RequestOutcome
from datastore.weather_store import WeatherStore, build_default_store
from services.coordinator import WeatherQueryCoordinator, build_default_coordinator

router = APIRouter()

_ERROR_STATUS = {
    ErrorCode.invalid_date_format: status.HTTP_400_BAD_REQUEST,
    ErrorCode.no_connectivity: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.remote_error: status.HTTP_502_BAD_GATEWAY,
    ErrorCode.no_prediction_data: status.HTTP_404_NOT_FOUND,
    ErrorCode.not_found: status.HTTP_404_NOT_FOUND,
    ErrorCode.storage_error: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def get_coordinator() -> WeatherQueryCoordinator:
    return build_default_coordinator()


def get_store() -> WeatherStore:
    return build_default_store()


def _settle(outcome: RequestOutcome) -> RequestOutcome:
    if outcome.succeeded:
        return outcome
    code = outcome.error or ErrorCode.remote_error
    raise HTTPException(
        status_code=_ERROR_STATUS[code],
        detail={"error": code.value, "message": outcome.error_message},
    )


@router.get(
    "/weather/{location}/{date}",
    response_model=RequestOutcome,
    summary="Look up one day, predicting it from past years when it is in the future.",
)
async def get_weather(
    location: str,
    date: str,
    coordinator: WeatherQueryCoordinator = Depends(get_coordinator),
) -> RequestOutcome:
    return _settle(await coordinator.request_single_date(location, date))


@router.post(
    "/weather/{location}/range",
    response_model=RequestOutcome,
    summary="Fetch a date range and store every day for offline lookups.",
)
async def load_range(
    location: str,
    body: RangeRequest,
    coordinator: WeatherQueryCoordinator = Depends(get_coordinator),
) -> RequestOutcome:
    return _settle(
        await coordinator.request_range(location, body.start_date, body.end_date)
    )


@router.post(
    "/weather/{location}/preload/{date}",
    response_model=RequestOutcome,
    summary="Store the year of readings that ends on the given date.",
)
async def preload_year(
    location: str,
    date: str,
    coordinator: WeatherQueryCoordinator = Depends(get_coordinator),
) -> RequestOutcome:
    return _settle(await coordinator.request_preceding_year(location, date))


@router.get(
    "/cache/{date}",
    response_model=RequestOutcome,
    summary="Read a stored reading without touching the network.",
)
async def get_cached(
    date: str,
    coordinator: WeatherQueryCoordinator = Depends(get_coordinator),
) -> RequestOutcome:
    return _settle(await coordinator.request_from_cache(date))


@router.get(
    "/cache",
    response_model=list[CachedReading],
    summary="List every stored reading ordered by date.",
)
async def list_cached(store: WeatherStore = Depends(get_store)) -> list[CachedReading]:
    return store.scan()


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /health for service status."}
