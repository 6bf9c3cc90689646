from functools import wraps
from flask import g, jsonify

from security.session import get_admin_session_from_request

def load_admin_session():
    g.admin_session = get_admin_session_from_request()

def is_admin() -> bool:
    return getattr(g, "admin_session", None) is not None

def admin_required(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        if not is_admin():
            return jsonify(error="Admin authentication required"), 401
        return fn(*args, **kwargs)
    return wrapper
