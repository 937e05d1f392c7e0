"""
Institution routes - CRUD for the caller's organizations.
"""

from flask import jsonify

from models import OrganizationCreate, OrganizationUpdate
from . import portal_bp
from .helpers import json_body, model_response, not_found, page_args, repo


@portal_bp.route("/api/organizations")
def list_organizations():
    page, limit = page_args()
    return jsonify(repo().organizations.list(page=page, limit=limit).to_dict())


@portal_bp.route("/api/organizations", methods=["POST"])
def create_organization():
    data = OrganizationCreate.model_validate(json_body())
    return model_response(repo().organizations.create(data), 201)


@portal_bp.route("/api/organizations/<org_id>")
def get_organization(org_id):
    org = repo().organizations.get(org_id)
    if org is None:
        return not_found()
    return model_response(org)


@portal_bp.route("/api/organizations/<org_id>", methods=["PATCH", "PUT"])
def update_organization(org_id):
    data = json_body()
    data["id"] = org_id
    update = OrganizationUpdate.model_validate(data)
    return model_response(repo().organizations.update(update))


@portal_bp.route("/api/organizations/<org_id>", methods=["DELETE"])
def delete_organization(org_id):
    if not repo().organizations.delete(org_id):
        return not_found()
    return jsonify({"success": True})
