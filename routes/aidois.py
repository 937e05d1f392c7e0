"""
AIDOI routes - mint, browse, edit and score identifiers.

Scores are always recomputed here before anything reaches the backend;
the backend persists the derived fields but never recalculates them.
"""

from flask import jsonify

from models import AidoiCreate, AidoiMetadata, AidoiUpdate
from registry import build_suffix, completion, default_target_url, score, slugify_title
from . import portal_bp
from .helpers import json_body, model_response, not_found, page_args, repo


@portal_bp.route("/api/aidois")
def list_aidois():
    page, limit = page_args()
    return jsonify(repo().aidois.list(page=page, limit=limit).to_dict())


@portal_bp.route("/api/aidois", methods=["POST"])
def create_aidoi():
    """Mint a new AIDOI. Suffix and target URL default from the title."""
    data = AidoiCreate.model_validate(json_body())
    title = data.metadata.title

    if not data.suffix:
        if not slugify_title(title):
            return jsonify({"error": "Title or suffix required"}), 400
        data.suffix = build_suffix(title, data.version)
    if not data.target_url:
        data.target_url = default_target_url(title or data.suffix)

    data.metadata.refresh_scores()
    created = repo().aidois.create(data)
    return model_response(created, 201)


@portal_bp.route("/api/aidois/score", methods=["POST"])
def score_aidoi():
    """
    Live scoring for the minting form.

    Accepts either {"metadata": {...}} or the rubric answers at top level.
    Stateless - safe to call on every edit.
    """
    data = json_body()
    answers = data.get("metadata") if isinstance(data.get("metadata"), dict) else data

    result = score(answers)
    body = result.model_dump()
    body["max_total"] = result.max_total
    body["completion"] = completion(answers)
    return jsonify(body)


@portal_bp.route("/api/aidois/<aidoi_id>")
def get_aidoi(aidoi_id):
    aidoi = repo().aidois.get(aidoi_id)
    if aidoi is None:
        return not_found()
    return model_response(aidoi)


@portal_bp.route("/api/aidois/<aidoi_id>", methods=["PATCH", "PUT"])
def update_aidoi(aidoi_id):
    """Edit suffix, target URL or any subset of metadata fields."""
    repository = repo()
    existing = repository.aidois.get(aidoi_id)
    if existing is None:
        return not_found()

    data = json_body()
    update = AidoiUpdate(
        id=aidoi_id,
        suffix=data.get("suffix") or None,
        target_url=data.get("target_url") or None,
    )
    changes = data.get("metadata")
    if isinstance(changes, dict):
        update.metadata = existing.metadata.merged(changes).refresh_scores()

    return model_response(repository.aidois.update(update))


@portal_bp.route("/api/aidois/<aidoi_id>", methods=["DELETE"])
def delete_aidoi(aidoi_id):
    if not repo().aidois.delete(aidoi_id):
        return not_found()
    return jsonify({"success": True})
