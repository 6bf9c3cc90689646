from flask import Blueprint, request, jsonify, current_app

from security.admin import admin_required, is_admin
from security.csrf import issue_csrf_token
from security.password import verify_admin_password
from security.rate_limit import check_and_increment
from security.session import create_admin_session, revoke_admin_session
from utils.audit import log_event

auth_bp = Blueprint("auth", __name__, url_prefix="/admin")


@auth_bp.post("/login")
def login():
    data = request.get_json(silent=True) or {}
    password = data.get("password") or ""

    allowed, retry_after = check_and_increment()
    if not allowed:
        log_event("ADMIN_LOGIN_RATE_LIMIT", metadata={"retry_after": retry_after})
        return jsonify(error="Too many login requests. Slow down.", retry_after_seconds=retry_after), 429

    if not verify_admin_password(password):
        log_event("ADMIN_LOGIN_FAIL")
        return jsonify(error="Invalid password"), 401

    raw_token = create_admin_session()
    resp = jsonify(message="Logged in")
    resp.set_cookie(
        current_app.config.get("ADMIN_COOKIE_NAME", "studio_admin_session"),
        raw_token,
        httponly=True,
        secure=current_app.config.get("SESSION_COOKIE_SECURE", False),
        samesite=current_app.config.get("SESSION_COOKIE_SAMESITE", "Lax"),
        max_age=current_app.config.get("ADMIN_SESSION_LIFETIME_SECONDS", 8 * 60 * 60),
        path="/",
    )
    resp = issue_csrf_token(resp)

    log_event("ADMIN_LOGIN_SUCCESS", actor="admin")
    return resp, 200


@auth_bp.post("/logout")
@admin_required
def logout():
    cookie_name = current_app.config.get("ADMIN_COOKIE_NAME", "studio_admin_session")
    revoke_admin_session(request.cookies.get(cookie_name))
    log_event("ADMIN_LOGOUT", actor="admin")

    resp = jsonify(message="Logged out")
    resp.delete_cookie(cookie_name, path="/")
    return resp, 200


@auth_bp.get("/session")
def session_status():
    return jsonify(authenticated=is_admin()), 200
