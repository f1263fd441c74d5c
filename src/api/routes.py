"""HTTP routes."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify, request
from werkzeug.exceptions import HTTPException

from src.catalog import Dataset, compute_statistics, list_cars, parse_query, visualization

bp = Blueprint("main", __name__)

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


def get_dataset() -> Dataset:
    return current_app.extensions["car_dataset"]


@bp.route("/")
def index():
    return jsonify(
        {
            "message": "Fuel Economy API Server",
            "version": API_VERSION,
            "endpoints": {
                "cars": "/api/cars",
                "statistics": "/api/statistics",
                "mpgByYear": "/api/visualizations/mpg-by-year",
                "mpgByCylinders": "/api/visualizations/mpg-by-cylinders",
                "health": "/api/health",
            },
        }
    )


@bp.route("/api/cars", methods=["GET"])
def cars():
    spec = parse_query(request.args, default_limit=current_app.config["DEFAULT_PAGE_SIZE"])
    return jsonify(list_cars(get_dataset(), spec).to_dict())


@bp.route("/api/cars/<car_id>", methods=["GET"])
def car_detail(car_id: str):
    car = None
    if car_id.isascii() and car_id.isdigit():
        car = get_dataset().get(int(car_id))
    if car is None:
        return jsonify({"error": "Car not found"}), 404
    return jsonify(car.to_dict())


@bp.route("/api/statistics", methods=["GET"])
def statistics():
    return jsonify(compute_statistics(get_dataset()).to_dict())


@bp.route("/api/visualizations/mpg-by-year", methods=["GET"])
def mpg_by_year():
    return jsonify(visualization("by-year", get_dataset()))


@bp.route("/api/visualizations/mpg-by-cylinders", methods=["GET"])
def mpg_by_cylinders():
    return jsonify(visualization("by-cylinders", get_dataset()))


@bp.route("/api/health", methods=["GET"])
def health():
    return jsonify(
        {
            "status": "OK",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "carsLoaded": len(get_dataset()),
        }
    )


@bp.app_errorhandler(404)
def not_found(exc):
    return jsonify({"error": "Not found"}), 404


@bp.app_errorhandler(Exception)
def internal_error(exc):
    if isinstance(exc, HTTPException):
        return exc
    logger.exception("Unhandled error serving %s %s", request.method, request.path)
    return jsonify({"error": "Internal server error"}), 500
