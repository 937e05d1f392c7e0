"""
Account lifecycle routes - sign-in, sign-out, sign-up and password recovery.

These sit under /api/auth, which the route guard leaves open.
"""

import logging
from flask import current_app, jsonify, make_response

from models import (
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    VerifyAccountRequest,
)
from registry import decode_role, read_claims
from repositories import BackendError
from . import auth_bp
from .helpers import current_token, json_body, repo

logger = logging.getLogger(__name__)


def _set_credential(response, token: str):
    cfg = current_app.config["PORTAL"]
    response.set_cookie(
        cfg.token_cookie,
        token,
        max_age=cfg.cookie_max_age,
        httponly=True,
        samesite="Lax",
    )
    return response


def _clear_credential(response):
    response.delete_cookie(current_app.config["PORTAL"].token_cookie)
    return response


@auth_bp.route("/api/auth/login", methods=["POST"])
def login():
    """Sign in; stores the credential cookie."""
    result = repo().auth.login(LoginRequest.model_validate(json_body()))
    role = decode_role(result.token)

    response = make_response(jsonify({
        "user": result.user.model_dump(mode="json"),
        "role": role.value,
        "is_admin": role.is_admin,
        "token": result.token,
    }))
    return _set_credential(response, result.token)


@auth_bp.route("/api/auth/logout", methods=["POST"])
def logout():
    """Sign out. The cookie is cleared even if the backend call fails."""
    email = json_body().get("email", "")
    if not email:
        claims = read_claims(current_token()) or {}
        email = claims.get("email", "")

    error = None
    try:
        repo().auth.logout(email)
    except BackendError as e:
        logger.warning("Backend logout failed: %s", e.message)
        error = e

    if error is not None:
        response = make_response(jsonify(error.to_dict()), error.status_code)
    else:
        response = make_response(jsonify({"success": True}))
    return _clear_credential(response)


@auth_bp.route("/api/auth/register", methods=["POST"])
def register():
    data = json_body()
    if "full_name" in data and "first_name" not in data:
        registration = RegisterRequest.from_full_name(
            data.get("full_name", ""),
            email=data.get("email", ""),
            password=data.get("password", ""),
        )
    else:
        registration = RegisterRequest.model_validate(data)

    repo().auth.register(registration)
    return jsonify({"success": True}), 201


@auth_bp.route("/api/auth/verify", methods=["POST"])
def verify_account():
    repo().auth.verify_account(VerifyAccountRequest.model_validate(json_body()))
    return jsonify({"success": True})


@auth_bp.route("/api/auth/forgot-password", methods=["POST"])
def forgot_password():
    repo().auth.forgot_password(ForgotPasswordRequest.model_validate(json_body()))
    return jsonify({"success": True})


@auth_bp.route("/api/auth/reset-password", methods=["POST"])
def reset_password():
    repo().auth.reset_password(ResetPasswordRequest.model_validate(json_body()))
    return jsonify({"success": True})


@auth_bp.route("/api/auth/me")
def me():
    """What the guard sees for the current credential. Not a trust check."""
    token = current_token()
    if not token:
        return jsonify({"authenticated": False, "role": None, "is_admin": False})

    role = decode_role(token)
    claims = read_claims(token) or {}
    return jsonify({
        "authenticated": True,
        "role": role.value,
        "role_label": role.label,
        "is_admin": role.is_admin,
        "email": claims.get("email", ""),
        "first_name": claims.get("first_name", ""),
        "last_name": claims.get("last_name", ""),
    })
