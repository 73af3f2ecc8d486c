"""Application factory for the catalog lookup service."""

from __future__ import annotations

import logging
import os

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from langunpack.config import ExtractionSettings, load_settings
from langunpack.version import get_project_version

from .http import problem_response
from .routes import register_routes
from .routes.tables import SETTINGS_KEY

OUTPUT_ROOT_ENV = "LANGUNPACK_OUTPUT_ROOT"

logger = logging.getLogger(__name__)


def _apply_environment(settings: ExtractionSettings) -> ExtractionSettings:
    output_root = os.getenv(OUTPUT_ROOT_ENV, "").strip()
    if not output_root:
        return settings
    logger.info("Serving artifacts from %s (set by %s)", output_root, OUTPUT_ROOT_ENV)
    return settings.model_copy(update={"output_root": output_root})


def create_app(settings: ExtractionSettings | None = None) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__)
    resolved = settings if settings is not None else _apply_environment(load_settings())
    app.config[SETTINGS_KEY] = resolved

    register_routes(app)

    @app.route("/health", methods=["GET"])
    def health_check():
        """Report the service version and what it can serve."""

        return jsonify(
            {
                "status": "ok",
                "version": get_project_version(),
                "languages": list(resolved.languages),
                "categories": list(resolved.category_names),
            }
        )

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException):
        """Return problem payloads for routing and protocol errors."""

        status = error.code or 500
        error_name = (error.name or "error").lower().replace(" ", "_")
        return problem_response(error_name, status=status, message=error.description).to_response()

    @app.errorhandler(ValueError)
    def handle_value_error(error: ValueError):
        """Surface domain validation errors to clients."""

        return problem_response("validation_error", status=400, message=str(error)).to_response()

    return app


__all__ = ["create_app"]
