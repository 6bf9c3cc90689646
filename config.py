import os

BASE_DIR = os.path.abspath(os.path.dirname(__file__))

class Config:
    # Secrets
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-only-change-me")

    # SQLite database file stored next to the app as studio_booking.db
    SQLALCHEMY_DATABASE_URI = os.getenv(
        "DATABASE_URL",
        "sqlite:///" + os.path.join(BASE_DIR, "studio_booking.db")
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Shared admin secret; a bcrypt hash (flask hash-admin-password) wins when set
    ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")
    ADMIN_PASSWORD_HASH = os.getenv("ADMIN_PASSWORD_HASH")

    # Admin session cookie holding the raw session token
    ADMIN_COOKIE_NAME = "studio_admin_session"
    ADMIN_SESSION_LIFETIME_SECONDS = 8 * 60 * 60
    ADMIN_IDLE_TIMEOUT_SECONDS = 30 * 60

    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"
    SESSION_COOKIE_SECURE = os.getenv("SESSION_COOKIE_SECURE", "false").lower() == "true"

    # Admin login rate limit per IP
    ADMIN_LOGIN_RATE_WINDOW_SECONDS = 60
    ADMIN_LOGIN_RATE_MAX_REQUESTS = 10

    # Customer confirmation via WhatsApp deep link
    WHATSAPP_BASE_URL = os.getenv("WHATSAPP_BASE_URL", "https://wa.me")
    CURRENCY_PREFIX = os.getenv("CURRENCY_PREFIX", "Rp")

    # Used when the additional_hour_price setting is missing
    DEFAULT_ADDITIONAL_HOUR_PRICE = int(os.getenv("DEFAULT_ADDITIONAL_HOUR_PRICE", "150000"))

    BOOKING_ID_MAX_ATTEMPTS = 5
    ADMIN_BOOKINGS_PER_PAGE = 10

    DEBUG = False


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    ADMIN_PASSWORD = "test-admin-secret"
    ADMIN_PASSWORD_HASH = None
    ADMIN_LOGIN_RATE_MAX_REQUESTS = 3
