from flask import request, jsonify
from flask_jwt_extended import jwt_required
from sqlalchemy import select
from backoffice.utils.decorators import roles_required
from backoffice.utils.pagination import paginate_cursor
from backoffice.models.audit_log import AuditLog
from backoffice.normalizers.audit import normalize_audit_log
from backoffice.normalizers.pagination import normalize_pagination
from . import v1_bp


@v1_bp.route("/documents/<document_id>/audit", methods=["GET"])
@jwt_required()
@roles_required("admin")
def list_document_audit(document_id):
    limit = request.args.get("limit", 20, type=int)
    cursor = request.args.get("cursor")

    query = select(AuditLog).where(AuditLog.entity_id == document_id)

    # Optional filters
    if action := request.args.get("action"):
        query = query.where(AuditLog.action == action)

    logs, meta = paginate_cursor(query, model=AuditLog, cursor=cursor, limit=limit)

    return jsonify(normalize_pagination(logs, normalize_audit_log, cursor=meta)), 200
