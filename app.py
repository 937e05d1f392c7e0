#!/usr/bin/env python3
"""
AIDOI Portal Web Interface

Flask app serving the portal API. Every request passes the route guard
before any handler runs; the registry backend remains the authority.
"""

import logging
from typing import Callable, Optional

from flask import Flask, g, jsonify, make_response, redirect, request
from pydantic import ValidationError

from config import PortalConfig, configure_logging, load_config
from registry import resolve_navigation
from repositories import BackendError, NotAuthenticated, get_repository

__version__ = "0.1.0"

logger = logging.getLogger(__name__)


def create_app(
    portal_config: Optional[PortalConfig] = None,
    repository_factory: Optional[Callable] = None,
) -> Flask:
    """Build the portal app. Tests pass their own repository factory."""
    from routes import auth_bp, portal_bp, admin_bp
    from routes.helpers import credential_from_request

    cfg = portal_config or load_config()

    flask_app = Flask(__name__)
    flask_app.config["PORTAL"] = cfg
    flask_app.config["REPOSITORY_FACTORY"] = repository_factory or get_repository

    flask_app.register_blueprint(auth_bp)
    flask_app.register_blueprint(portal_bp)
    flask_app.register_blueprint(admin_bp)

    @flask_app.before_request
    def guard():
        """Route guard - recomputed per request, nothing cached."""
        token = credential_from_request()
        decision = resolve_navigation(request.path, token)
        g.token = token
        g.role = decision.role

        if decision.allow:
            return None
        if request.path.startswith("/api/"):
            message = "Not authenticated" if decision.status == 401 else "Forbidden"
            return jsonify({"error": message, "redirect_to": decision.redirect_to}), decision.status
        return redirect(decision.redirect_to)

    @flask_app.errorhandler(NotAuthenticated)
    def handle_not_authenticated(e):
        # Credential is dead - drop it so the next navigation lands on sign-in
        response = make_response(jsonify(e.to_dict()), 401)
        response.delete_cookie(cfg.token_cookie)
        return response

    @flask_app.errorhandler(BackendError)
    def handle_backend_error(e):
        return jsonify(e.to_dict()), e.status_code

    @flask_app.errorhandler(ValidationError)
    def handle_validation_error(e):
        return jsonify({"error": "Invalid request", "details": e.errors(include_url=False, include_context=False, include_input=False)}), 400

    @flask_app.route("/")
    def index():
        return jsonify({"service": "aidoi-portal", "version": __version__})

    @flask_app.route("/health")
    def health():
        return jsonify({"status": "ok"})

    return flask_app


app = create_app()


if __name__ == "__main__":
    cfg = app.config["PORTAL"]
    configure_logging(cfg.log_level)
    logger.info("Portal on http://localhost:%s -> backend %s", cfg.port, cfg.api_base_url)
    app.run(debug=True, port=cfg.port)
