from typing import Optional
from backoffice.extensions import db
from backoffice.models.audit_log import AuditLog

SYSTEM_ACTOR = "system"

def log_action(
    *,
    action: str,
    entity_type: str,
    entity_id: Optional[str],
    actor_id: Optional[str] = None,
    payload: dict | None = None
) -> AuditLog:
    """Stage an audit row in the current transaction; the caller commits."""
    log = AuditLog()

    log.actor_id = actor_id or SYSTEM_ACTOR
    log.action = action
    log.entity_type = entity_type
    log.entity_id = entity_id or "*"
    log.payload = payload or {}

    db.session.add(log)
    return log
