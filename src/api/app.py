"""Flask application factory and server entry point.

Usage:
    python -m src.api.app [--data-path PATH] [--host HOST] [--port PORT]
"""

from __future__ import annotations

import argparse
import logging
import re
import sys
from pathlib import Path
from typing import Any

from flask import Flask
from flask_cors import CORS

from src.catalog import Dataset, load_dataset

from .config import settings
from .routes import bp as main_bp

logger = logging.getLogger(__name__)

# Front-end deployments on Render are allowed regardless of CORS_ORIGINS.
RENDER_FRONTEND_ORIGIN = re.compile(r"^https?://[^/]*fuel-economy-frontend[^/]*\.onrender\.com$")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(config: dict[str, Any] | None = None, dataset: Dataset | None = None) -> Flask:
    """Build the app with its dataset fully loaded.

    The returned app never serves a request against a partially loaded
    dataset.
    """
    app = Flask(__name__)
    app.config.update(settings.as_flask_config())
    if config:
        app.config.update(config)

    if dataset is None:
        dataset = load_dataset(Path(app.config["DATA_PATH"]))
    app.extensions["car_dataset"] = dataset

    CORS(
        app,
        origins=[*app.config["CORS_ORIGINS"], RENDER_FRONTEND_ORIGIN],
        methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        supports_credentials=True,
    )
    app.register_blueprint(main_bp)
    return app


def main() -> None:
    parser = argparse.ArgumentParser(description="Serve the fuel-economy dataset over HTTP.")
    parser.add_argument(
        "--data-path",
        type=Path,
        default=None,
        help="Path to the auto-mpg CSV (defaults to DATA_PATH or data/auto-mpg.csv).",
    )
    parser.add_argument("--host", type=str, default=settings.host)
    parser.add_argument("--port", type=int, default=settings.port)
    args = parser.parse_args()

    configure_logging(settings.log_level)

    config: dict[str, Any] = {}
    if args.data_path is not None:
        config["DATA_PATH"] = args.data_path

    try:
        app = create_app(config)
    except (OSError, ValueError):
        logger.exception("Failed to start server")
        sys.exit(1)

    logger.info("Server running on port %d", args.port)
    app.run(host=args.host, port=args.port)


if __name__ == "__main__":
    main()
