import hashlib
import secrets
from datetime import datetime, timedelta
from flask import request, current_app

from models import db
from models.session import AdminSession
from utils.audit import client_ip

def _hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()

def _cookie_name() -> str:
    return current_app.config.get("ADMIN_COOKIE_NAME", "studio_admin_session")

def create_admin_session() -> str:
    """
    Creates a server-side admin session and returns the RAW token (to set as cookie).
    Only the hash is stored in DB.
    """
    raw_token = secrets.token_urlsafe(32)

    lifetime = current_app.config.get("ADMIN_SESSION_LIFETIME_SECONDS", 8 * 60 * 60)
    expires_at = datetime.utcnow() + timedelta(seconds=lifetime)

    row = AdminSession(
        token_hash=_hash_token(raw_token),
        expires_at=expires_at,
        ip=client_ip(),
        user_agent=(request.headers.get("User-Agent") or "")[:255],
    )
    db.session.add(row)
    db.session.commit()
    return raw_token

def get_admin_session_from_request():
    raw_token = request.cookies.get(_cookie_name())
    if not raw_token:
        return None

    sess = (
        AdminSession.query
        .filter_by(token_hash=_hash_token(raw_token), revoked=False)
        .first()
    )
    if not sess:
        return None

    now = datetime.utcnow()
    if not sess.is_live(now, current_app.config.get("ADMIN_IDLE_TIMEOUT_SECONDS", 30 * 60)):
        return None

    sess.last_seen_at = now
    db.session.commit()
    return sess

def revoke_admin_session(raw_token: str) -> bool:
    if not raw_token:
        return False
    sess = AdminSession.query.filter_by(token_hash=_hash_token(raw_token)).first()
    if not sess:
        return False
    sess.revoked = True
    db.session.commit()
    return True
