"""
The signed-in user's own account: profile, password and API keys.
"""

from flask import jsonify

from models import ApiKeyCreate, ChangePasswordRequest, ProfileUpdate
from . import portal_bp
from .helpers import json_body, model_response, not_found, page_args, repo


@portal_bp.route("/api/profile")
def get_profile():
    profile = repo().profiles.mine()
    if profile is None:
        return not_found("No profile")
    return model_response(profile)


@portal_bp.route("/api/profile", methods=["PATCH", "PUT"])
def update_profile():
    """Only the linked organization is editable."""
    repository = repo()
    profile = repository.profiles.mine()
    if profile is None:
        return not_found("No profile")

    data = json_body()
    update = ProfileUpdate(id=profile.id, organization_id=data.get("organization_id"))
    return model_response(repository.profiles.update(update))


@portal_bp.route("/api/profile/password", methods=["POST"])
def change_password():
    repo().auth.change_password(ChangePasswordRequest.model_validate(json_body()))
    return jsonify({"success": True})


@portal_bp.route("/api/api-keys")
def list_api_keys():
    page, limit = page_args()
    return jsonify(repo().api_keys.list(page=page, limit=limit).to_dict())


@portal_bp.route("/api/api-keys", methods=["POST"])
def create_api_key():
    """The plaintext token is returned exactly once."""
    token = repo().api_keys.create(ApiKeyCreate.model_validate(json_body()))
    return jsonify({"api_key_token": token}), 201


@portal_bp.route("/api/api-keys/<key_id>", methods=["DELETE"])
def delete_api_key(key_id):
    if not repo().api_keys.delete(key_id):
        return not_found()
    return jsonify({"success": True})
