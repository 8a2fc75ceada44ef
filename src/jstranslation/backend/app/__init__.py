"""Application factory for the JS translation service."""

from __future__ import annotations

import logging

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import BadRequest, NotFound

from jstranslation.backend.config.settings import Settings, load_settings
from jstranslation.backend.services import LoaderError, build_controller
from jstranslation.backend.version import get_project_version

from .http import problem_from_exception, problem_response
from .routes import register_routes

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__)

    if settings is None:
        settings = load_settings()

    controller = build_controller(settings)
    app.extensions["jstranslation"] = {"settings": settings, "controller": controller}

    if not settings.allowed_origins:
        logger.info("No allowed origins configured; cross-origin requests will be rejected.")

    CORS(
        app,
        resources={r"/translations*": {"origins": sorted(settings.allowed_origins)}},
        supports_credentials=False,
        methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type", "If-None-Match"],
        expose_headers=["ETag"],
    )

    register_routes(app)

    @app.route("/health", methods=["GET"])
    def health_check():
        """Simple health check endpoint for infrastructure monitoring."""

        finder = controller.finder
        payload = {
            "status": "ok",
            "version": get_project_version(),
            "locales": finder.locales(),
            "domains": finder.domains(),
        }
        return jsonify(payload)

    @app.errorhandler(NotFound)
    def handle_not_found(error: NotFound):
        return problem_from_exception(error, "not_found").to_response()

    @app.errorhandler(BadRequest)
    def handle_bad_request(error: BadRequest):
        """Return consistent JSON responses for malformed requests."""

        message = error.description or "Invalid request"
        return problem_response("bad_request", status=400, message=message).to_response()

    @app.errorhandler(LoaderError)
    def handle_loader_error(error: LoaderError):
        """Report unreadable translation resources as server errors."""

        logger.error("Failed to load translation resource: %s", error)
        return problem_response(
            "translation_error", status=500, message=str(error)
        ).to_response()

    @app.errorhandler(ValueError)
    def handle_value_error(error: ValueError):
        return problem_response(
            "validation_error", status=400, message=str(error)
        ).to_response()

    return app
