import json

from flask import current_app, request

from models import db
from models.audit_log import AuditLog


def client_ip() -> str | None:
    # first hop of X-Forwarded-For is the requesting client
    forwarded = request.headers.get("X-Forwarded-For", "")
    if forwarded:
        return forwarded.split(",")[0].strip()[:64]
    return request.remote_addr


def log_event(action: str, actor=None, entity=None, entity_id=None, metadata=None):
    """Append one audit row for a login, booking or admin change and commit it."""
    user_agent = request.headers.get("User-Agent", "")
    row = AuditLog(
        actor=actor,
        action=action,
        entity=entity,
        entity_id=str(entity_id) if entity_id is not None else None,
        ip=client_ip(),
        user_agent=user_agent[:255] or None,
        metadata_json=json.dumps(metadata, default=str) if metadata else None,
    )
    db.session.add(row)
    db.session.commit()
    current_app.logger.info("audit %s actor=%s %s=%s", action, actor or "-", entity or "-", row.entity_id or "-")
    return row
