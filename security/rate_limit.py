from datetime import datetime, timedelta
from flask import current_app

from models import db
from models.ip_rate_limit import IpRateLimit
from utils.audit import client_ip

ADMIN_LOGIN_SCOPE = "admin_login"

def _client_ip() -> str:
    return client_ip() or "unknown"

def check_and_increment(scope: str = ADMIN_LOGIN_SCOPE) -> tuple[bool, int]:
    """
    Returns (allowed, retry_after_seconds).
    Simple fixed window per IP and scope.
    """
    ip = _client_ip()
    now = datetime.utcnow()

    window_seconds = current_app.config.get("ADMIN_LOGIN_RATE_WINDOW_SECONDS", 60)
    max_requests = current_app.config.get("ADMIN_LOGIN_RATE_MAX_REQUESTS", 10)

    row = IpRateLimit.query.filter_by(scope=scope, ip=ip).first()
    if not row:
        row = IpRateLimit(scope=scope, ip=ip, window_start=now, count=0)
        db.session.add(row)

    window_end = row.window_start + timedelta(seconds=window_seconds)

    if now >= window_end:
        row.window_start = now
        row.count = 0
        window_end = row.window_start + timedelta(seconds=window_seconds)

    row.count += 1
    db.session.commit()

    if row.count > max_requests:
        retry_after = int((window_end - now).total_seconds())
        return False, max(retry_after, 1)

    return True, 0
