"""
Admin routes - user moderation, approvals and registry-wide views.

Everything under /api/admin is AdminOnly at the route guard. The backend
re-checks on every call; the guard only saves the round trip.
"""

import logging
from typing import Optional
from flask import jsonify

from models import Role, UserUpdate
from registry import compute_admin_stats, org_admins, organization_for_admin, pending_users
from . import admin_bp
from .helpers import json_body, model_response, not_found, page_args, repo

logger = logging.getLogger(__name__)

# Listings pulled for client-side derivations (stats, pending, org admins)
SCAN_LIMIT = 100


def _parse_role(value) -> Optional[Role]:
    """Accept role keys as the admin UI sends them ("orgadmin" included)."""
    if not isinstance(value, str):
        return None
    key = value.strip()
    if key.lower() == "orgadmin":
        return Role.ORG_ADMIN
    try:
        return Role(key)
    except ValueError:
        return None


def _set_flag(user_id: str, field: str):
    """Set or toggle a boolean user flag (banned / verified)."""
    repository = repo()
    data = json_body()
    value = data.get(field)
    if not isinstance(value, bool):
        user = repository.users.get(user_id)
        if user is None:
            return not_found()
        value = not getattr(user, field)

    updated = repository.users.update(UserUpdate(id=user_id, **{field: value}))
    return model_response(updated)


# ──────────────────────────────────────────────────────────── Users

@admin_bp.route("/api/admin/users")
def list_users():
    page, limit = page_args()
    return jsonify(repo().users.list(page=page, limit=limit).to_dict())


@admin_bp.route("/api/admin/users/<user_id>")
def get_user(user_id):
    user = repo().users.get(user_id)
    if user is None:
        return not_found()
    return model_response(user)


@admin_bp.route("/api/admin/users/<user_id>", methods=["PATCH", "PUT"])
def update_user(user_id):
    data = json_body()
    data["id"] = user_id
    return model_response(repo().users.update(UserUpdate.model_validate(data)))


@admin_bp.route("/api/admin/users/<user_id>", methods=["DELETE"])
def delete_user(user_id):
    if not repo().users.delete(user_id):
        return not_found()
    return jsonify({"success": True})


@admin_bp.route("/api/admin/users/<user_id>/role", methods=["PUT", "POST"])
def change_role(user_id):
    role = _parse_role(json_body().get("role"))
    if role is None:
        return jsonify({"error": "role must be one of admin, orgAdmin, authenticated"}), 400

    updated = repo().users.update(UserUpdate(id=user_id, role=role.to_user_role()))
    logger.info("User %s role set to %s", user_id, role.value)
    return model_response(updated)


@admin_bp.route("/api/admin/users/<user_id>/ban", methods=["POST"])
def toggle_ban(user_id):
    return _set_flag(user_id, "banned")


@admin_bp.route("/api/admin/users/<user_id>/verify", methods=["POST"])
def toggle_verified(user_id):
    return _set_flag(user_id, "verified")


# ──────────────────────────────────────────────────────────── Approvals

@admin_bp.route("/api/admin/pending")
def list_pending():
    """Verified, unbanned users waiting for promotion to Org Admin."""
    users = repo().users.list(page=0, limit=SCAN_LIMIT).records
    pending = pending_users(users)
    return jsonify({
        "records": [u.model_dump(mode="json") for u in pending],
        "total": len(pending),
    })


@admin_bp.route("/api/admin/pending/<user_id>/approve", methods=["POST"])
def approve_user(user_id):
    updated = repo().users.update(UserUpdate(id=user_id, role=Role.ORG_ADMIN.to_user_role()))
    logger.info("User %s promoted to Org Admin", user_id)
    return model_response(updated)


@admin_bp.route("/api/admin/pending/<user_id>/reject", methods=["POST"])
def reject_user(user_id):
    updated = repo().users.update(UserUpdate(id=user_id, banned=True))
    logger.info("User %s rejected (banned)", user_id)
    return model_response(updated)


@admin_bp.route("/api/admin/org-admins")
def list_org_admins():
    """Org Admins with the organization each one administers."""
    repository = repo()
    admins = org_admins(repository.users.list(page=0, limit=SCAN_LIMIT).records)
    organizations = repository.organizations.list(page=0, limit=SCAN_LIMIT).records

    records = []
    for user in admins:
        org = organization_for_admin(organizations, user.id)
        entry = user.model_dump(mode="json")
        entry["organization"] = org.model_dump(mode="json") if org else None
        records.append(entry)
    return jsonify({"records": records, "total": len(records)})


@admin_bp.route("/api/admin/org-admins/<user_id>/demote", methods=["POST"])
def demote_org_admin(user_id):
    updated = repo().users.update(UserUpdate(id=user_id, role=Role.AUTHENTICATED.to_user_role()))
    logger.info("User %s demoted to Authenticated", user_id)
    return model_response(updated)


# ──────────────────────────────────────────────────────────── Registry-wide views

@admin_bp.route("/api/admin/organizations")
def list_all_organizations():
    page, limit = page_args()
    return jsonify(repo().organizations.list(page=page, limit=limit).to_dict())


@admin_bp.route("/api/admin/aidois")
def list_all_aidois():
    page, limit = page_args()
    return jsonify(repo().aidois.list(page=page, limit=limit).to_dict())


@admin_bp.route("/api/admin/stats")
def stats():
    repository = repo()
    users = repository.users.list(page=0, limit=SCAN_LIMIT)
    organizations = repository.organizations.list(page=0, limit=SCAN_LIMIT)
    aidois = repository.aidois.list(page=0, limit=SCAN_LIMIT)

    result = compute_admin_stats(
        users.records,
        organizations.records,
        aidois.records,
        total_users=users.total,
        total_organizations=organizations.total,
        total_aidois=aidois.total,
    )
    return model_response(result)
