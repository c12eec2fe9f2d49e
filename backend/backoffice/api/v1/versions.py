# backoffice/api/v1/versions.py
import json
from datetime import datetime, timezone
from dateutil.parser import parse
from flask import request, jsonify, Response, abort
from flask_jwt_extended import jwt_required
from backoffice.utils.decorators import roles_required, current_actor
from backoffice.application.documents.facade import documents
from backoffice.application.documents.loading import get_document
from backoffice.models.base import utc_now
from backoffice.normalizers.version import normalize_comparison, normalize_version
from backoffice.utils.pagination import MAX_PAGE_SIZE
from . import v1_bp
from .documents import EDITOR_ROLES

# ------------------------
# Versions
# ------------------------

@v1_bp.route("/documents/<document_id>/versions", methods=["GET"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def list_versions(document_id):
    document = get_document(document_id)

    return jsonify([
        normalize_version(v) for v in documents.list_versions(document)
    ])


@v1_bp.route("/documents/<document_id>/versions/<version_id>", methods=["GET"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def get_version(document_id, version_id):
    version = documents.get_version(get_document(document_id), version_id)
    return jsonify(normalize_version(version, include_content=True))


@v1_bp.route("/documents/<document_id>/versions/<version_id>", methods=["DELETE"])
@jwt_required()
@roles_required("admin")
def delete_version(document_id, version_id):
    version = documents.get_version(get_document(document_id), version_id)
    number = version.version

    documents.delete_version(version, current_actor())

    return jsonify({"message": f"Version {number} deleted successfully"}), 200


@v1_bp.route("/documents/<document_id>/versions/<version_id>/rollback", methods=["POST"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def rollback_version(document_id, version_id):
    document = get_document(document_id)
    target = documents.get_version(document, version_id)
    target_number = target.version

    restored = documents.rollback(document, target, current_actor())

    return jsonify({
        "message": f"Document restored to version {target_number}",
        "version": normalize_version(restored),
    }), 201


@v1_bp.route("/documents/<document_id>/versions/<version_id>/verify", methods=["POST"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def verify_version(document_id, version_id):
    version = documents.get_version(get_document(document_id), version_id)
    data = request.get_json(silent=True) or {}

    return jsonify(documents.verify_version(version, data.get("checksum"))), 200


@v1_bp.route("/documents/<document_id>/versions/compare/<first_id>/<second_id>", methods=["GET"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def compare_versions(document_id, first_id, second_id):
    fields = request.args.getlist("field")

    try:
        comparison = documents.compare_ids(
            get_document(document_id),
            first_id,
            second_id,
            fields=fields,
        )
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400

    return jsonify(normalize_comparison(comparison))


@v1_bp.route("/documents/<document_id>/versions/export", methods=["GET"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def export_versions(document_id):
    document = get_document(document_id)
    data = documents.export(document, current_actor())

    filename = f"versions-{document.slug.replace('/', '-')}-{utc_now():%Y-%m-%d}.json"

    return Response(
        json.dumps(data, indent=4, ensure_ascii=False),
        mimetype="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@v1_bp.route("/documents/<document_id>/integrity", methods=["GET"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def verify_document(document_id):
    report = documents.verify_document(get_document(document_id))

    return jsonify({
        "valid": all(entry["valid"] for entry in report),
        "versions": report,
    })


def _parse_bound(name):
    """Optional ISO date/datetime query argument as naive UTC."""
    raw = request.args.get(name)
    if not raw:
        return None

    try:
        value = parse(raw)
    except (ValueError, OverflowError):
        abort(400, description=f"Invalid '{name}' date")

    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


@v1_bp.route("/versions", methods=["GET"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def search_versions():
    """
    Cross-document version lookup.

    One filter per request, checked in order: checksum, created_by,
    from/to range; with none, the most recent versions.
    """
    try:
        if "checksum" in request.args:
            versions = documents.find_by_checksum(request.args["checksum"])

        elif created_by := request.args.get("created_by"):
            versions = documents.versions_by_creator(created_by)

        elif "from" in request.args or "to" in request.args:
            start = _parse_bound("from") or datetime.min
            end = _parse_bound("to") or utc_now()
            versions = documents.versions_between(start, end)

        else:
            limit = min(max(request.args.get("limit", 20, type=int), 1), MAX_PAGE_SIZE)
            versions = documents.recent_versions(limit)

    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400

    return jsonify([normalize_version(v) for v in versions])
