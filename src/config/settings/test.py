"""Test settings - uses SQLite for fast local testing."""
import os

os.environ.setdefault("DEBUG", "True")
os.environ.setdefault("SECRET_KEY", "test-only-secret-key-3f9c1d7a5b2e8f4c6a0d9b7e1c3f5a8d2b4e6c8a")

from .base import *  # noqa: E402,F401,F403

DEBUG = True

# Use SQLite for tests (no PostgreSQL dependency)
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

# Faster password hashing in tests
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

# Email
EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"
DEFAULT_FROM_EMAIL = "onboarding@test.local"

SESSION_TOKEN_COOKIE_SECURE = False

# Disable logging noise during tests
LOGGING["root"]["level"] = "WARNING"  # noqa: F405
LOGGING["loggers"]["pililokal"]["handlers"] = ["console"]  # noqa: F405
LOGGING["loggers"]["pililokal"]["level"] = "WARNING"  # noqa: F405

REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"]["auth_burst"] = "1000/min"  # noqa: F405
