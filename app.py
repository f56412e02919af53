import logging
import os
import random

from flask import Flask, jsonify, request, url_for
from werkzeug.exceptions import HTTPException

import forecast_service
from forecast_store import ForecastStore
from models import ForecastNotFound, InvalidInput, forecast_from_dict, parse_date, parse_int


# Reads an optional query-string bound; blank values count as absent.
def _query_bound(name, parser):
    raw = (request.args.get(name) or "").strip()
    if not raw:
        return None
    return parser(raw, name)


def _json_body():
    data = request.get_json(silent=True)
    if data is None:
        raise InvalidInput("Request body must be JSON.")
    return data


def _store(app):
    return app.extensions["forecast_store"]


# App factory: sets configuration, wires logging, creates the in-memory store and registers routes.
def create_app(config=None):
    app = Flask(__name__)
    app.config["SECRET_KEY"] = os.environ.get("SECRET_KEY", "dev-secret")
    app.config["FORECAST_LOCATION"] = os.environ.get("FORECAST_LOCATION", "Seattle")
    app.config["MAX_SAMPLE_COUNT"] = int(os.environ.get("MAX_SAMPLE_COUNT", "1000"))
    app.config["LOG_LEVEL"] = os.environ.get("LOG_LEVEL", "INFO").upper()
    seed = os.environ.get("SAMPLE_SEED")
    app.config["SAMPLE_SEED"] = int(seed) if seed else None
    if config:
        app.config.update(config)

    level = logging.getLevelName(app.config["LOG_LEVEL"])
    for name in ("forecast_store", "forecast_service"):
        logging.getLogger(name).setLevel(level)
    app.logger.setLevel(level)

    app.extensions["forecast_store"] = ForecastStore()
    app.extensions["forecast_rng"] = random.Random(app.config["SAMPLE_SEED"])

    @app.errorhandler(ForecastNotFound)
    def not_found(error):
        return jsonify(error=str(error)), 404

    @app.errorhandler(InvalidInput)
    def invalid_input(error):
        app.logger.info("Rejected request to %s: %s", request.path, error)
        return jsonify(error=str(error)), 400

    @app.errorhandler(HTTPException)
    def http_error(error):
        return jsonify(error=error.description), error.code

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify(status="ok")

    # Lists saved forecasts, or the fallback dataset when nothing has been saved yet.
    @app.route("/weatherforecast", methods=["GET"])
    def list_forecasts():
        from_date = _query_bound("fromDate", parse_date)
        to_date = _query_bound("toDate", parse_date)
        min_temp = _query_bound("minTemp", parse_int)
        max_temp = _query_bound("maxTemp", parse_int)

        snapshot = _store(app).list()
        shown = forecast_service.display_forecasts(snapshot, location=app.config["FORECAST_LOCATION"])
        filtered = forecast_service.filter_forecasts(
            shown, from_date=from_date, to_date=to_date, min_temp=min_temp, max_temp=max_temp
        )
        return jsonify([item.to_dict() for item in filtered])

    @app.route("/weatherforecast/<forecast_id>", methods=["GET"])
    def get_forecast(forecast_id):
        return jsonify(_store(app).get(forecast_id).to_dict())

    @app.route("/weatherforecast", methods=["POST"])
    def create_forecast():
        forecast = forecast_from_dict(_json_body())
        store = _store(app)
        forecast_id = store.create(forecast)
        response = jsonify(store.get(forecast_id).to_dict())
        response.status_code = 201
        response.headers["Location"] = url_for("get_forecast", forecast_id=forecast_id)
        return response

    # Replaces the stored forecast wholesale; there is no partial update.
    @app.route("/weatherforecast/<forecast_id>", methods=["PUT"])
    def update_forecast(forecast_id):
        forecast = forecast_from_dict(_json_body())
        return jsonify(_store(app).update(forecast_id, forecast).to_dict())

    @app.route("/weatherforecast/<forecast_id>", methods=["DELETE"])
    def delete_forecast(forecast_id):
        _store(app).delete(forecast_id)
        return "", 204

    @app.route("/weatherforecast/stats", methods=["GET"])
    def forecast_stats():
        return jsonify(forecast_service.compute_statistics(_store(app).list()))

    # Generates `count` random forecasts (default 5) and returns their ids.
    @app.route("/weatherforecast/generate", methods=["POST"])
    def generate_forecasts():
        count = _query_bound("count", parse_int)
        if count is None:
            count = 5
        if count < 0:
            raise InvalidInput("count must be a non-negative integer.")
        if count > app.config["MAX_SAMPLE_COUNT"]:
            raise InvalidInput(f"count must not exceed {app.config['MAX_SAMPLE_COUNT']}.")

        ids = forecast_service.generate_samples(
            _store(app),
            count,
            rng=app.extensions["forecast_rng"],
            location=app.config["FORECAST_LOCATION"],
        )
        return jsonify(ids=ids), 201

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(debug=True)
