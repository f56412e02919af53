import pytest
from app import create_app
from forecast_store import ForecastStore

# Creates a Flask app with a fresh, empty in-memory store and a seeded sample generator.
@pytest.fixture()
def app(monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "test-secret")
    monkeypatch.setenv("FORECAST_LOCATION", "Testville")
    app = create_app({"SAMPLE_SEED": 1234, "MAX_SAMPLE_COUNT": 50})
    app.config.update(TESTING=True)
    yield app
    app.extensions["forecast_store"].clear()

@pytest.fixture()
def client(app):
    return app.test_client()

@pytest.fixture()
def store():
    return ForecastStore()
