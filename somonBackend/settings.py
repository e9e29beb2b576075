"""
Django settings for somonBackend project.

Configuration comes from the environment; a ``.env`` file next to
manage.py is loaded first when present.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(BASE_DIR / ".env")


def env_bool(name: str, default: bool = False) -> bool:
    return os.getenv(name, str(default)).strip().lower() in ("1", "true", "yes", "on")


def env_list(name: str, default: str = "") -> list:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


# ==================================================
# BASE
# ==================================================

SECRET_KEY = os.getenv("SECRET_KEY", "")
DEBUG = env_bool("DEBUG", False)

if not SECRET_KEY:
    if DEBUG:
        SECRET_KEY = "django-insecure-local-development-key"
    else:
        raise RuntimeError("SECRET_KEY environment variable is required when DEBUG is off")

ALLOWED_HOSTS = env_list("ALLOWED_HOSTS", "localhost,127.0.0.1")

# ==================================================
# INSTALLED APPS
# ==================================================

INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.staticfiles",
    # REST
    "rest_framework",
    "drf_spectacular",
    # CORS
    "corsheaders",
    # Local
    "marketplace",
]

# ==================================================
# MIDDLEWARE
# ==================================================

MIDDLEWARE = [
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    "somonBackend.middleware.LanguageMiddleware",
]

# ==================================================
# URL / WSGI / ASGI
# ==================================================

ROOT_URLCONF = "somonBackend.urls"

WSGI_APPLICATION = "somonBackend.wsgi.application"
ASGI_APPLICATION = "somonBackend.asgi.application"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
            ],
        },
    },
]

# ==================================================
# DATABASE
# ==================================================
# Categories and products live in MongoDB (see MONGODB below); no
# relational database is configured.

DATABASES = {}

MONGODB = {
    "URI": os.getenv("MONGODB_URI", "mongodb://localhost:27017"),
    "DATABASE": os.getenv("MONGODB_DATABASE", "somon"),
    "CATEGORIES_COLLECTION": "categories",
    "PRODUCTS_COLLECTION": "products",
    "SERVER_SELECTION_TIMEOUT_MS": int(os.getenv("MONGODB_TIMEOUT_MS", "5000")),
}

# ==================================================
# FILE STORAGE
# ==================================================

FILE_STORAGE = {
    "WEB_ROOT": Path(os.getenv("WEB_ROOT", BASE_DIR / "wwwroot")),
    "UPLOAD_PATH": os.getenv("UPLOAD_PATH", "uploads"),
    "MAX_IMAGE_SIZE_MB": int(os.getenv("MAX_IMAGE_SIZE_MB", "10")),
    "MAX_VIDEO_SIZE_MB": int(os.getenv("MAX_VIDEO_SIZE_MB", "100")),
    "ALLOWED_IMAGE_EXTENSIONS": [".jpg", ".jpeg", ".png", ".webp", ".heic", ".heif", ".gif", ".bmp"],
    "ALLOWED_VIDEO_EXTENSIONS": [".mp4", ".mov", ".avi", ".webm", ".mkv", ".flv", ".wmv"],
}

# Uploads are streamed to disk above this size instead of kept in memory
FILE_UPLOAD_MAX_MEMORY_SIZE = 5 * 1024 * 1024
DATA_UPLOAD_MAX_MEMORY_SIZE = None

# ==================================================
# GEMINI
# ==================================================

GEMINI = {
    "API_KEY": os.getenv("GEMINI_API_KEY", ""),
    "MODEL": os.getenv("GEMINI_MODEL", "gemini-2.0-flash"),
    "ENDPOINT": os.getenv("GEMINI_ENDPOINT", "https://generativelanguage.googleapis.com"),
    "TIMEOUT_SECONDS": int(os.getenv("GEMINI_TIMEOUT_SECONDS", "60")),
}

# ==================================================
# GLOBAL
# ==================================================

# Framework messages stay in English; content language is chosen per request
# by somonBackend.middleware.LanguageMiddleware.
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"

USE_I18N = True
USE_TZ = True

STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

# ==================================================
# DRF
# ==================================================

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.AllowAny",
    ],
    "UNAUTHENTICATED_USER": None,
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
    "EXCEPTION_HANDLER": "marketplace.api.exception_handler.envelope_exception_handler",
    "COERCE_DECIMAL_TO_STRING": False,
}

SPECTACULAR_SETTINGS = {
    "TITLE": "Somon Classifieds API",
    "DESCRIPTION": "Localized classifieds backend: categories, products with media, AI listing assistant",
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
    "COMPONENT_SPLIT_REQUEST": True,
}

# ==================================================
# CORS
# ==================================================

CORS_ALLOW_ALL_ORIGINS = True
CORS_EXPOSE_HEADERS = ["X-Language"]
CORS_ALLOW_HEADERS = [
    "accept",
    "accept-language",
    "content-type",
    "origin",
    "x-language",
    "x-requested-with",
]

# ==================================================
# LOGGING
# ==================================================

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {
            "format": "[{levelname}] {asctime} {name}: {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": LOG_LEVEL,
    },
    "loggers": {
        "pymongo": {"level": "WARNING"},
        "urllib3": {"level": "WARNING"},
    },
}
