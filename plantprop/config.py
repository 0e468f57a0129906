"""
Centralized configuration for all environments.

Select a config by setting:
  APP_CONFIG=plantprop.config.DevConfig      # local dev
  APP_CONFIG=plantprop.config.ProdConfig     # production (default if unset)
  APP_CONFIG=plantprop.config.TestConfig     # pytest

Notes:
- SECRET_KEY is read from FLASK_SECRET_KEY
- Rate limiting uses Flask-Limiter v3 keys (RATELIMIT_*).
- PLANT_SOURCE selects the plant catalogue: "seed" (bundled JSON) or "supabase".
"""

from __future__ import annotations
import os
import secrets
from datetime import timedelta

class BaseConfig:
    # Random fallback key when FLASK_SECRET_KEY is unset; sessions reset on restart
    SECRET_KEY = os.getenv("FLASK_SECRET_KEY") or secrets.token_hex(32)
    DEBUG = False
    TESTING = False

    # Session configuration (the session only holds the detected zone)
    PERMANENT_SESSION_LIFETIME = timedelta(days=7)
    SESSION_COOKIE_SECURE = True  # Only send cookies over HTTPS (overridden in dev)
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"

    # Plant catalogue
    PLANT_SOURCE = os.getenv("PLANT_SOURCE", "seed")
    SUPABASE_URL = os.getenv("SUPABASE_URL", "")
    SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY", "")

    # Zone auto-detection (ipapi.co -> phzmapi.org)
    ZONE_AUTO_DETECT = os.getenv("ZONE_AUTO_DETECT", "true").lower() == "true"
    GEOLOCATION_URL = os.getenv("GEOLOCATION_URL", "https://ipapi.co/json/")
    GEOLOCATION_IP_URL = os.getenv("GEOLOCATION_IP_URL", "https://ipapi.co/{ip}/json/")
    ZONE_LOOKUP_URL = os.getenv("ZONE_LOOKUP_URL", "https://phzmapi.org/{postal_code}.json")
    ZONE_LOOKUP_TIMEOUT = float(os.getenv("ZONE_LOOKUP_TIMEOUT", "5"))  # seconds per attempt
    ZONE_RETRY_DELAY = float(os.getenv("ZONE_RETRY_DELAY", "0.5"))     # seconds before the single retry

    # Flask-Limiter v3
    RATELIMIT_ENABLED = os.getenv("RATELIMIT_ENABLED", "true").lower() == "true"
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
    RATELIMIT_DEFAULT = os.getenv("RATELIMIT_DEFAULT", "60 per minute; 2000 per day")
    RATELIMIT_PROPAGATE = os.getenv("RATELIMIT_PROPAGATE", "10 per minute; 200 per day")
    RATELIMIT_ZONE_DETECT = os.getenv("RATELIMIT_ZONE_DETECT", "5 per minute")

    # Misc
    PREFERRED_URL_SCHEME = os.getenv("PREFERRED_URL_SCHEME", "https")
    SEND_FILE_MAX_AGE_DEFAULT = int(os.getenv("SEND_FILE_MAX_AGE_DEFAULT", "3600"))

class ProdConfig(BaseConfig):
    """Production settings (selected by default if APP_CONFIG is unset)."""
    pass

class DevConfig(BaseConfig):
    """Developer-friendly settings."""
    ENV = "development"
    DEBUG = True
    TEMPLATES_AUTO_RELOAD = True
    SEND_FILE_MAX_AGE_DEFAULT = 0
    PREFERRED_URL_SCHEME = "http"
    # Allow cookies over HTTP in dev
    SESSION_COOKIE_SECURE = False

class TestConfig(BaseConfig):
    """CI/pytest settings."""
    TESTING = True
    DEBUG = True
    RATELIMIT_ENABLED = False
    # Forms are posted without tokens in tests
    WTF_CSRF_ENABLED = False
    PLANT_SOURCE = "seed"
    # Never call out to ipapi.co from tests unless a test swaps the resolver in
    ZONE_AUTO_DETECT = False
    ZONE_RETRY_DELAY = 0
    TEMPLATES_AUTO_RELOAD = True
    SEND_FILE_MAX_AGE_DEFAULT = 0
