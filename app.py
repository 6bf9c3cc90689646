from flask import Flask, request, jsonify
from config import Config
from routes import health_bp, auth_bp, admin_bp, audit_bp, booking_bp

from models import db
from flask_migrate import Migrate
from security.admin import load_admin_session, is_admin
from security.csrf import csrf_applies, require_csrf
from utils.errors import (
    InvalidBookingRequest,
    MalformedTimeError,
    RecordInUse,
    RecordNotFound,
    SlotUnavailable,
    StoreWriteFailure,
)


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    # Register routes
    app.register_blueprint(health_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(audit_bp)
    app.register_blueprint(booking_bp)

    # Database init
    db.init_app(app)

    # Migrations
    Migrate(app, db)

    @app.before_request
    def _load_admin():
        load_admin_session()

    @app.before_request
    def _csrf_protect():
        if csrf_applies(request.path, request.method, is_admin()):
            return require_csrf()

    @app.after_request
    def add_security_headers(resp):
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["X-Frame-Options"] = "DENY"
        resp.headers["Referrer-Policy"] = "no-referrer"
        resp.headers["Permissions-Policy"] = "geolocation=(), microphone=(), camera=()"
        resp.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none';"
        return resp

    register_error_handlers(app)
    register_cli(app)

    return app

#-------------------------

def register_error_handlers(app):
    @app.errorhandler(InvalidBookingRequest)
    @app.errorhandler(MalformedTimeError)
    def _bad_request(exc):
        return jsonify(error=str(exc)), 400

    @app.errorhandler(RecordNotFound)
    def _not_found(exc):
        return jsonify(error=f"{exc.kind.capitalize()} not found"), 404

    @app.errorhandler(SlotUnavailable)
    @app.errorhandler(RecordInUse)
    def _conflict(exc):
        return jsonify(error=str(exc)), 409

    @app.errorhandler(StoreWriteFailure)
    def _store_failure(exc):
        # details are already in the log
        return jsonify(error="Operation failed. Please try again."), 500

#-------------------------
import click
from security.password import hash_password
from utils.seed import seed_defaults

def register_cli(app):
    @app.cli.command("init-db")
    def init_db():
        """Create tables and seed default pricing, settings and a studio."""
        db.create_all()
        seed_defaults()
        click.echo("Database initialised")

    @app.cli.command("hash-admin-password")
    @click.argument("password")
    def hash_admin_password(password):
        """Print a bcrypt hash to use as ADMIN_PASSWORD_HASH."""
        click.echo(hash_password(password))

#-------------------------


if __name__ == "__main__":
    app = create_app()
    # Run locally
    app.run(host="127.0.0.1", port=5002)
