from __future__ import annotations
import json
import logging
from functools import lru_cache
from pathlib import Path
from threading import Lock
from typing import Dict, Iterable, Optional

from app.schemas import CachedReading
from services.errors import StorageError
from settings import get_settings

logger = logging.getLogger(__name__)


class WeatherStore:
    """Date-keyed reading table; every write is an insert-or-replace."""

    def __init__(self, persistence_path: Optional[Path] = None) -> None:
        self._items: Dict[str, CachedReading] = {}
        self.persistence_path = persistence_path
        self._lock = Lock()
        if persistence_path:
            persistence_path.parent.mkdir(parents=True, exist_ok=True)
            self._load_from_disk()

    def upsert(self, reading: CachedReading) -> None:
        with self._lock:
            staged = dict(self._items)
            staged[reading.date] = reading.model_copy(deep=True)
            self._commit(staged)

    def upsert_all(self, readings: Iterable[CachedReading]) -> int:
        """Write a batch under one lock and one flush; later duplicates win."""
        with self._lock:
            staged = dict(self._items)
            count = 0
            for reading in readings:
                staged[reading.date] = reading.model_copy(deep=True)
                count += 1
            self._commit(staged)
        return count

    def find_by_date(self, date: str) -> Optional[CachedReading]:
        with self._lock:
            item = self._items.get(date)
            if item is None:
                return None
            return item.model_copy(deep=True)

    def scan(self) -> list[CachedReading]:
        """Return copies of all stored readings ordered by date."""

        with self._lock:
            return [
                self._items[key].model_copy(deep=True) for key in sorted(self._items)
            ]

    def _commit(self, staged: Dict[str, CachedReading]) -> None:
        """Swap in ``staged`` only once it has been written to disk."""
        self._persist(staged)
        self._items = staged

    def _persist(self, items: Dict[str, CachedReading]) -> None:
        if not self.persistence_path:
            return
        payload = {date: item.model_dump(mode="json") for date, item in items.items()}
        try:
            self.persistence_path.write_text(json.dumps(payload, indent=2, sort_keys=True))
        except OSError as exc:
            raise StorageError(str(exc)) from exc

    def _load_from_disk(self) -> None:
        if not self.persistence_path or not self.persistence_path.exists():
            return

        try:
            raw = self.persistence_path.read_text() or "{}"
            data = json.loads(raw)
        except (OSError, json.JSONDecodeError):
            logger.warning(
                "Ignoring unreadable weather store file",
                extra={"reason": str(self.persistence_path)},
            )
            data = {}

        for date, payload in data.items():
            self._items[date] = CachedReading.model_validate(payload)


@lru_cache
def build_default_store(path: Optional[str] = None) -> WeatherStore:
    settings = get_settings()
    store_path = settings.store_path if path is None else path
    persistence = Path(store_path) if store_path else None
    return WeatherStore(persistence_path=persistence)
