"""Flask application factory and shared setup for the Minam API."""

from __future__ import annotations

import logging
from typing import Any, Dict

from flask import Flask, current_app, request

from minam.config import MAX_UPLOAD_BYTES
from minam.services import (FileAnalyzer, MinamService,
                            build_file_analyzer_from_env)
from minam.utils.request_logging import log_request

logger = logging.getLogger(__name__)

_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "*",
}


def create_app(config: Dict[str, Any] | None = None) -> Flask:
    """Create and configure the Flask application.

    ``SERVICE`` and ``FILE_ANALYZER`` may be injected through ``config``;
    otherwise a fresh in-memory service and an env-selected analyzer are
    used.
    """
    app = Flask(__name__)
    app.json.sort_keys = False

    if config:
        app.config.update(config)
    if app.config.get("MAX_CONTENT_LENGTH") is None:
        app.config["MAX_CONTENT_LENGTH"] = MAX_UPLOAD_BYTES
    app.config.setdefault("SERVICE", MinamService())
    if app.config.get("FILE_ANALYZER") is None:
        app.config["FILE_ANALYZER"] = build_file_analyzer_from_env()

    from .api import api_bp

    app.register_blueprint(api_bp)

    @app.before_request
    def _log_and_preflight():
        """Log the request and short-circuit CORS preflights."""
        body = request.get_data(cache=True) if request.is_json else None
        log_request(logger, request.method, request.path, request.args, body)
        if request.method == "OPTIONS":
            return "", 204
        return None

    @app.after_request
    def _add_cors_headers(response):
        for header, value in _CORS_HEADERS.items():
            response.headers.setdefault(header, value)
        return response

    return app


def get_service(app: Flask | None = None) -> MinamService:
    """Retrieve the shared service. Accepts an optional app override."""
    ctx_app = app or current_app
    service = ctx_app.config.get("SERVICE")
    if not isinstance(service, MinamService):
        raise RuntimeError("SERVICE config must be a MinamService instance")
    return service


def get_analyzer(app: Flask | None = None) -> FileAnalyzer:
    ctx_app = app or current_app
    analyzer = ctx_app.config.get("FILE_ANALYZER")
    if analyzer is None:
        raise RuntimeError("FILE_ANALYZER config is not set")
    return analyzer
