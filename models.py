import math
from dataclasses import dataclass
from datetime import date, datetime

DEFAULT_LOCATION = "Unknown"


class ForecastNotFound(LookupError):
    """Raised when a forecast id is not present in the store."""

    def __init__(self, forecast_id):
        super().__init__(f"Forecast {forecast_id} not found.")
        self.forecast_id = forecast_id


class InvalidInput(ValueError):
    """Raised for malformed request bodies, filter bounds or sample counts."""


@dataclass(frozen=True)
class Forecast:
    date: date
    temperature_c: int
    summary: str | None = None
    location: str = DEFAULT_LOCATION

    # Floors toward negative infinity, so -5 C reads as 23 F.
    @property
    def temperature_f(self) -> int:
        return 32 + math.floor(self.temperature_c / 0.5556)

    def to_dict(self):
        return {
            "date": self.date.isoformat(),
            "temperatureC": self.temperature_c,
            "temperatureF": self.temperature_f,
            "summary": self.summary,
            "location": self.location,
        }

    def __repr__(self):
        return f"<Forecast {self.date} {self.temperature_c}C {self.summary!r} @ {self.location}>"


@dataclass(frozen=True)
class StoreEntry:
    id: str
    forecast: Forecast
    saved_at: datetime

    def to_dict(self):
        payload = {"id": self.id}
        payload.update(self.forecast.to_dict())
        payload["savedAt"] = self.saved_at.isoformat()
        return payload


# Parses an ISO date (YYYY-MM-DD), raising InvalidInput with the field name on failure.
def parse_date(value, field):
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise InvalidInput(f"{field} must be a date in YYYY-MM-DD format.")
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError:
        raise InvalidInput(f"{field} must be a date in YYYY-MM-DD format.")


# Parses an integer; bools and floats are rejected even though Python treats them as numbers.
def parse_int(value, field):
    if isinstance(value, bool):
        raise InvalidInput(f"{field} must be an integer.")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise InvalidInput(f"{field} must be an integer.")


def forecast_from_dict(data) -> Forecast:
    """
    Build a Forecast from a JSON body using the camelCase wire names.
    `date` and `temperatureC` are required; `summary` may be null and
    `location` falls back to "Unknown". Any integer temperature is accepted.
    """
    if not isinstance(data, dict):
        raise InvalidInput("Request body must be a JSON object.")
    if "date" not in data:
        raise InvalidInput("date is required.")
    if "temperatureC" not in data:
        raise InvalidInput("temperatureC is required.")

    temperature = data["temperatureC"]
    if isinstance(temperature, str):
        raise InvalidInput("temperatureC must be an integer.")

    summary = data.get("summary")
    if summary is not None and not isinstance(summary, str):
        raise InvalidInput("summary must be a string or null.")

    location = data.get("location")
    if location is None:
        location = DEFAULT_LOCATION
    elif not isinstance(location, str):
        raise InvalidInput("location must be a string.")

    return Forecast(
        date=parse_date(data["date"], "date"),
        temperature_c=parse_int(temperature, "temperatureC"),
        summary=summary,
        location=location,
    )
