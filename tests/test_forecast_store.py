import threading
from datetime import date, datetime, timedelta, timezone

import pytest

from forecast_store import ForecastStore
from models import Forecast, ForecastNotFound


def test_create_get_round_trip(store):
    f = Forecast(date(2025, 6, 1), 21, "Warm", "Lisbon")
    forecast_id = store.create(f)
    entry = store.get(forecast_id)
    assert entry.id == forecast_id
    assert entry.forecast == f
    assert entry.saved_at.tzinfo is not None

def test_update_replaces_whole_forecast():
    ticks = iter([datetime(2025, 1, 1, tzinfo=timezone.utc), datetime(2025, 1, 2, tzinfo=timezone.utc)])
    store = ForecastStore(clock=lambda: next(ticks))
    forecast_id = store.create(Forecast(date(2025, 6, 1), 21, "Warm", "Lisbon"))
    replacement = Forecast(date(2025, 6, 2), 3)

    updated = store.update(forecast_id, replacement)

    assert store.get(forecast_id).forecast == replacement
    assert store.get(forecast_id).forecast.summary is None
    assert store.get(forecast_id).forecast.location == "Unknown"
    assert updated.saved_at == datetime(2025, 1, 2, tzinfo=timezone.utc)

def test_delete_is_terminal(store):
    forecast_id = store.create(Forecast(date(2025, 6, 1), 1))
    store.delete(forecast_id)
    with pytest.raises(ForecastNotFound):
        store.get(forecast_id)
    with pytest.raises(ForecastNotFound):
        store.update(forecast_id, Forecast(date(2025, 6, 1), 2))
    with pytest.raises(ForecastNotFound):
        store.delete(forecast_id)
    assert len(store) == 0

def test_missing_id_reports_id(store):
    with pytest.raises(ForecastNotFound) as excinfo:
        store.get("nope")
    assert excinfo.value.forecast_id == "nope"

def test_list_is_a_snapshot(store):
    ids = {store.create(Forecast(date(2025, 6, 1) + timedelta(days=i), i)) for i in range(3)}
    snapshot = store.list()
    store.create(Forecast(date(2025, 7, 1), 40))
    assert {e.id for e in snapshot} == ids
    assert len(store) == 4

def test_mutations_are_logged(store, caplog):
    caplog.set_level("INFO", logger="forecast_store")
    forecast_id = store.create(Forecast(date(2025, 6, 1), 1))
    store.delete(forecast_id)
    messages = [r.getMessage() for r in caplog.records]
    assert f"Created forecast {forecast_id}" in messages
    assert f"Deleted forecast {forecast_id}" in messages

def test_concurrent_creates_do_not_lose_entries(store):
    workers, per_worker = 8, 50
    results = [[] for _ in range(workers)]
    start = threading.Barrier(workers)

    def work(slot):
        start.wait()
        for i in range(per_worker):
            results[slot].append(store.create(Forecast(date(2025, 1, 1), i)))

    threads = [threading.Thread(target=work, args=(n,)) for n in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    all_ids = [i for chunk in results for i in chunk]
    assert len(all_ids) == workers * per_worker
    assert len(set(all_ids)) == len(all_ids)
    assert {e.id for e in store.list()} == set(all_ids)
