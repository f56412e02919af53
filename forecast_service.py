import logging
import random
from datetime import date, timedelta

from models import Forecast, InvalidInput

logger = logging.getLogger(__name__)

SUMMARIES = (
    "Freezing", "Bracing", "Chilly", "Cool", "Mild",
    "Warm", "Balmy", "Hot", "Sweltering", "Scorching",
)

# (temperature_c, summary) for today .. today+4, shown only while the store is empty.
DEFAULT_READINGS = ((-5, "Freezing"), (2, "Bracing"), (8, "Chilly"), (12, "Cool"), (18, "Mild"))

SAMPLE_TEMP_MIN = -20
SAMPLE_TEMP_MAX = 55  # exclusive
UNKNOWN_SUMMARY = "Unknown"


def _forecast_of(item):
    return getattr(item, "forecast", item)


# Builds the fixed five-day fallback dataset. Nothing here touches the store.
def default_forecasts(today=None, location="Unknown"):
    today = today or date.today()
    return [
        Forecast(date=today + timedelta(days=offset), temperature_c=temp, summary=summary, location=location)
        for offset, (temp, summary) in enumerate(DEFAULT_READINGS)
    ]


# Real entries when there are any; the fallback dataset only when the snapshot is empty.
def display_forecasts(entries, today=None, location="Unknown"):
    entries = list(entries)
    if entries:
        return entries
    return default_forecasts(today, location)


def filter_forecasts(forecasts, from_date=None, to_date=None, min_temp=None, max_temp=None):
    """
    Return the items (StoreEntry or Forecast) that satisfy every supplied bound.
    Bounds are inclusive; a bound left as None imposes no constraint.
    """
    result = []
    for item in forecasts:
        forecast = _forecast_of(item)
        if from_date is not None and forecast.date < from_date:
            continue
        if to_date is not None and forecast.date > to_date:
            continue
        if min_temp is not None and forecast.temperature_c < min_temp:
            continue
        if max_temp is not None and forecast.temperature_c > max_temp:
            continue
        result.append(item)
    return result


def compute_statistics(entries):
    """
    Aggregate a store snapshot. An empty snapshot reports only the count;
    otherwise count, average, min, max and a per-summary tally are returned.
    """
    forecasts = [_forecast_of(e) for e in entries]
    if not forecasts:
        return {"count": 0}

    temps = [f.temperature_c for f in forecasts]
    by_summary = {}
    for forecast in forecasts:
        label = forecast.summary or UNKNOWN_SUMMARY
        by_summary[label] = by_summary.get(label, 0) + 1

    return {
        "count": len(temps),
        "average": sum(temps) / len(temps),
        "min": min(temps),
        "max": max(temps),
        "bySummary": by_summary,
    }


def generate_samples(store, n=5, rng=None, today=None, location="Unknown"):
    """
    Insert `n` random forecasts for today, today+1, ... and return their ids
    in generation order. Pass a seeded random.Random as `rng` for repeatable runs.
    """
    if isinstance(n, bool) or not isinstance(n, int) or n < 0:
        raise InvalidInput("count must be a non-negative integer.")
    rng = rng or random.Random()
    today = today or date.today()

    ids = []
    for offset in range(n):
        forecast = Forecast(
            date=today + timedelta(days=offset),
            temperature_c=rng.randrange(SAMPLE_TEMP_MIN, SAMPLE_TEMP_MAX),
            summary=rng.choice(SUMMARIES),
            location=location,
        )
        ids.append(store.create(forecast))

    logger.info("Generated %d sample forecasts", len(ids))
    return ids
