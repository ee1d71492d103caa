"""Application factory and app-wide configuration."""

import logging
from pathlib import Path
from typing import Optional, Union

from flask import Flask
from flask_cors import CORS

from sipcalc import config
from sipcalc.app.api.routes import api_bp


def configure_logging(level: str = config.LOG_LEVEL) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(db_path: Union[str, Path, None] = None) -> Flask:
    """Build the Flask app instance."""
    configure_logging()

    app = Flask(__name__)
    app.config["DB_PATH"] = str(db_path or config.DB_PATH)

    CORS(
        app,
        resources={r"/api/*": {"origins": config.CORS_ORIGINS}},
        supports_credentials=True,
    )

    app.register_blueprint(api_bp, url_prefix="/api")
    logging.getLogger(__name__).info("Using database %s", app.config["DB_PATH"])
    return app
