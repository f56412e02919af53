import logging
import threading
import uuid
from datetime import datetime, timezone

from models import ForecastNotFound, StoreEntry

logger = logging.getLogger(__name__)


def _utcnow():
    return datetime.now(timezone.utc)


class ForecastStore:
    """
    In-memory, process-local mapping of generated id -> StoreEntry.
    Every operation holds the same lock, and callers only ever see copies,
    never the underlying dict.
    """

    def __init__(self, clock=_utcnow):
        self._entries: dict[str, StoreEntry] = {}
        self._lock = threading.Lock()
        self._clock = clock

    def __len__(self):
        with self._lock:
            return len(self._entries)

    # Inserts the forecast under a fresh uuid and returns the id.
    def create(self, forecast) -> str:
        with self._lock:
            forecast_id = uuid.uuid4().hex
            while forecast_id in self._entries:
                forecast_id = uuid.uuid4().hex
            self._entries[forecast_id] = StoreEntry(forecast_id, forecast, self._clock())
        logger.info("Created forecast %s", forecast_id)
        return forecast_id

    def get(self, forecast_id) -> StoreEntry:
        with self._lock:
            entry = self._entries.get(forecast_id)
        if entry is None:
            logger.warning("Forecast %s not found (get)", forecast_id)
            raise ForecastNotFound(forecast_id)
        return entry

    # Point-in-time snapshot; order is whatever the dict yields.
    def list(self) -> list[StoreEntry]:
        with self._lock:
            return list(self._entries.values())

    # Replaces the whole forecast and refreshes saved_at.
    def update(self, forecast_id, forecast) -> StoreEntry:
        with self._lock:
            if forecast_id not in self._entries:
                entry = None
            else:
                entry = StoreEntry(forecast_id, forecast, self._clock())
                self._entries[forecast_id] = entry
        if entry is None:
            logger.warning("Forecast %s not found (update)", forecast_id)
            raise ForecastNotFound(forecast_id)
        logger.info("Updated forecast %s", forecast_id)
        return entry

    def delete(self, forecast_id) -> None:
        with self._lock:
            entry = self._entries.pop(forecast_id, None)
        if entry is None:
            logger.warning("Forecast %s not found (delete)", forecast_id)
            raise ForecastNotFound(forecast_id)
        logger.info("Deleted forecast %s", forecast_id)

    def clear(self):
        with self._lock:
            self._entries.clear()
        logger.info("Cleared forecast store")
