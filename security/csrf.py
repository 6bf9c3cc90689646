import hmac
import secrets
from flask import request, jsonify, current_app

CSRF_COOKIE = "csrf_token"
CSRF_HEADER = "X-CSRF-Token"

STATE_CHANGING_METHODS = ("POST", "PUT", "PATCH", "DELETE")
# login has no session yet; health never changes state
CSRF_EXEMPT_PATHS = {"/admin/login", "/health"}


def issue_csrf_token(resp):
    resp.set_cookie(
        CSRF_COOKIE,
        secrets.token_urlsafe(32),
        httponly=False,  # admin UI reads it and echoes it in the header
        secure=current_app.config.get("SESSION_COOKIE_SECURE", False),
        samesite=current_app.config.get("SESSION_COOKIE_SAMESITE", "Lax"),
        path="/",
    )
    return resp


def csrf_applies(path: str, method: str, admin_authenticated: bool) -> bool:
    """Only cookie-authenticated admin writes need the double-submit token."""
    if method not in STATE_CHANGING_METHODS or path in CSRF_EXEMPT_PATHS:
        return False
    return admin_authenticated and path.startswith("/admin/")


def require_csrf():
    cookie_token = request.cookies.get(CSRF_COOKIE)
    header_token = request.headers.get(CSRF_HEADER)
    if not cookie_token or not header_token or not hmac.compare_digest(cookie_token, header_token):
        current_app.logger.warning("csrf check failed for %s %s", request.method, request.path)
        return jsonify(error="CSRF validation failed"), 403
    return None
