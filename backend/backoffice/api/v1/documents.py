# backoffice/api/v1/documents.py
from flask import request, jsonify
from flask_jwt_extended import jwt_required
from backoffice.utils.decorators import roles_required, current_actor
from backoffice.utils.optimistic_lock import enforce_optimistic_lock
from backoffice.application.documents.facade import documents
from backoffice.application.documents.loading import get_document
from backoffice.domain.versioning import Bump
from backoffice.normalizers.document import normalize_document
from backoffice.normalizers.version import normalize_version
from . import v1_bp

EDITOR_ROLES = ("admin", "editor")

# ------------------------
# Documents
# ------------------------

@v1_bp.route("/documents", methods=["POST"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def create_document():
    data = request.get_json(silent=True) or {}

    if not data.get("title"):
        return jsonify({"error": "Title is required"}), 400

    document = documents.create(
        data["title"],
        data.get("content"),
        current_actor(),
        description=data.get("description"),
        slug=data.get("slug"),
    )

    return jsonify(normalize_document(document, admin=True)), 201


@v1_bp.route("/documents/<document_id>", methods=["GET"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def get_document_by_id(document_id):
    document = get_document(document_id)

    return jsonify(
        normalize_document(document, admin=True, stats=documents.stats(document))
    )


@v1_bp.route("/documents/<document_id>", methods=["PUT"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def update_document(document_id):
    document = get_document(document_id)

    # -----------------------
    # Optimistic Locking Check
    # -----------------------
    enforce_optimistic_lock(document)

    data = request.get_json(silent=True) or {}

    try:
        bump = Bump(data.get("bump", Bump.MINOR.value))
    except ValueError:
        return jsonify({"error": "bump must be one of: none, minor, major"}), 400

    result = documents.update(
        document,
        data.get("title"),
        data.get("content"),
        bump,
        data.get("change_log"),
        current_actor(),
        description=data.get("description"),
    )

    return jsonify({
        "document": normalize_document(result.document, admin=True),
        "version": normalize_version(result.version) if result.version else None,
        "versioned": result.version is not None,
        "created": result.created,
    }), 200


@v1_bp.route("/documents/<document_id>", methods=["DELETE"])
@jwt_required()
@roles_required("admin")
def delete_document(document_id):
    document = get_document(document_id)
    documents.delete(document, current_actor())

    return jsonify({"message": "Document deleted successfully"}), 200


@v1_bp.route("/documents/<document_id>/submit-for-review", methods=["POST"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def submit_document_for_review(document_id):
    document = documents.submit_for_review(get_document(document_id), current_actor())
    return jsonify(normalize_document(document, admin=True)), 200


@v1_bp.route("/documents/<document_id>/publish", methods=["POST"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def publish_document(document_id):
    document = documents.publish(get_document(document_id), current_actor())
    return jsonify(normalize_document(document, admin=True)), 200


@v1_bp.route("/documents/<document_id>/archive", methods=["POST"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def archive_document(document_id):
    document = documents.archive(get_document(document_id), current_actor())
    return jsonify(normalize_document(document, admin=True)), 200


@v1_bp.route("/documents/<document_id>/duplicate", methods=["POST"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def duplicate_document(document_id):
    duplicate = documents.duplicate(get_document(document_id), current_actor())
    return jsonify(normalize_document(duplicate, admin=True)), 201
