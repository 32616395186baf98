"""
Django settings for the opsportal project.

Environment variables are read from the process and from a .env file.
PostgreSQL is the supported database.
"""

import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.getenv("SECRET_KEY", "django-insecure-opsportal-key-change-in-production")

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = os.getenv("DEBUG", "False").lower() in ("true", "1", "yes")

ALLOWED_HOSTS = [h for h in os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1").split(",") if h]

INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    # Shared infrastructure
    "opsportal.numbering",
    "opsportal.activity",
    # Domain
    "opsportal.estimating",
    "opsportal.invoicing",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
]

ROOT_URLCONF = "opsportal.urls"

WSGI_APPLICATION = "opsportal.wsgi.application"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": os.getenv("POSTGRES_DB", "opsportal"),
        "USER": os.getenv("POSTGRES_USER", "postgres"),
        "PASSWORD": os.getenv("POSTGRES_PASSWORD", "postgres"),
        "HOST": os.getenv("POSTGRES_HOST", "localhost"),
        "PORT": os.getenv("POSTGRES_PORT", "5432"),
        "OPTIONS": {
            "connect_timeout": 10,
        },
    }
}

LANGUAGE_CODE = "en-us"
TIME_ZONE = os.getenv("TIME_ZONE", "UTC")
USE_I18N = True
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{levelname} {asctime} {module} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
    "loggers": {
        "django": {
            "handlers": ["console"],
            "level": os.getenv("DJANGO_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
        "opsportal": {
            "handlers": ["console"],
            "level": os.getenv("OPSPORTAL_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
    },
}

# Document numbering and conversion
OPSPORTAL_ESTIMATE_NUMBER_PREFIX = os.getenv("OPSPORTAL_ESTIMATE_NUMBER_PREFIX", "EST-")
OPSPORTAL_INVOICE_NUMBER_PREFIX = os.getenv("OPSPORTAL_INVOICE_NUMBER_PREFIX", "INV-")
OPSPORTAL_DOCUMENT_NUMBER_START = int(os.getenv("OPSPORTAL_DOCUMENT_NUMBER_START", "1000"))
OPSPORTAL_INVOICE_DUE_DAYS = int(os.getenv("OPSPORTAL_INVOICE_DUE_DAYS", "30"))
OPSPORTAL_DEFAULT_CURRENCY = os.getenv("OPSPORTAL_DEFAULT_CURRENCY", "USD")
OPSPORTAL_ALLOW_REPEAT_CONVERSION = os.getenv(
    "OPSPORTAL_ALLOW_REPEAT_CONVERSION", "False"
).lower() in ("true", "1", "yes")
