"""
Shared helpers for route handlers.
"""

from typing import Optional

from flask import current_app, g, jsonify, request
from pydantic import BaseModel

from repositories import Repository

BEARER_PREFIX = "Bearer "


def credential_from_request() -> Optional[str]:
    """Bearer header first, then the session cookie. None when absent."""
    header = request.headers.get("Authorization", "")
    if header.startswith(BEARER_PREFIX):
        token = header[len(BEARER_PREFIX):].strip()
        if token:
            return token
    cookie = request.cookies.get(current_app.config["PORTAL"].token_cookie)
    return cookie or None


def current_token() -> Optional[str]:
    return g.get("token")


def repo() -> Repository:
    """Repository bound to the caller's credential."""
    return current_app.config["REPOSITORY_FACTORY"](current_token())


def json_body() -> dict:
    """Request JSON as a dict; anything else is treated as empty."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def page_args() -> tuple[int, int]:
    """page/limit query args - 0-based page, limit capped at 100."""
    default_limit = current_app.config["PORTAL"].page_size
    page = max(request.args.get("page", 0, type=int), 0)
    limit = request.args.get("limit", default_limit, type=int)
    limit = min(max(limit, 1), 100)
    return page, limit


def model_response(model: BaseModel, status: int = 200):
    return jsonify(model.model_dump(mode="json")), status


def not_found(what: str = "Not found"):
    return jsonify({"error": what}), 404
