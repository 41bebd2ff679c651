"""Django settings for the Tentling server.

Values that differ between deployments are read from the environment.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get("SECRET_KEY", "insecure-key-for-development-only")

DEBUG = os.environ.get("DEBUG", "") in ("1", "true", "yes")

ALLOWED_HOSTS = [
    host for host in os.environ.get("ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",") if host
]

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "tentling.followers",
    "tentling.oauth",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
]

ROOT_URLCONF = "tentling.urls"

# Peer servers address `/followers` without a trailing slash.
APPEND_SLASH = False

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "tentling.wsgi.application"

DATABASES = {
    "default": {
        "ENGINE": os.environ.get("DATABASE_ENGINE", "django.db.backends.sqlite3"),
        "NAME": os.environ.get("DATABASE_NAME", str(BASE_DIR / "tentling.sqlite3")),
        "USER": os.environ.get("DATABASE_USER", ""),
        "PASSWORD": os.environ.get("DATABASE_PASSWORD", ""),
        "HOST": os.environ.get("DATABASE_HOST", ""),
        "PORT": os.environ.get("DATABASE_PORT", ""),
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LANGUAGE_CODE = "en-gb"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {
            "format": "{levelname} {asctime} {name} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    },
    "loggers": {
        "tentling": {
            "handlers": ["console"],
            "level": os.environ.get("TENT_LOG_LEVEL", "INFO"),
        },
    },
}

# Discovery of peer servers’ profiles.
TENT_DISCOVERY_TIMEOUT = float(os.environ.get("TENT_DISCOVERY_TIMEOUT", "10"))
TENT_DISCOVERY_METHODS = os.environ.get("TENT_DISCOVERY_METHODS", "head,get").split(",")
TENT_USER_AGENT = os.environ.get("TENT_USER_AGENT", "Tentling/0.1 (+https://tent.io/)")
# Only this many bytes of an entity’s home page are searched for LINK elements.
TENT_DISCOVERY_MAX_PAGE_SIZE = int(os.environ.get("TENT_DISCOVERY_MAX_PAGE_SIZE", str(256 * 1024)))

# Algorithm named in MAC credentials issued to followers and apps.
TENT_MAC_ALGORITHM = os.environ.get("TENT_MAC_ALGORITHM", "hmac-sha-256")
