"""Django settings for opsportal tests.

SQLite by default; set POSTGRES_HOST to run against PostgreSQL.

The SQLite test database is a file opened with BEGIN IMMEDIATE, so threads
use separate connections and concurrent write transactions are serialized.
"""

import os
import tempfile

SECRET_KEY = 'test-secret-key-not-for-production'

if os.getenv('POSTGRES_HOST'):
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.postgresql',
            'NAME': os.getenv('POSTGRES_DB', 'opsportal'),
            'USER': os.getenv('POSTGRES_USER', 'postgres'),
            'PASSWORD': os.getenv('POSTGRES_PASSWORD', 'postgres'),
            'HOST': os.getenv('POSTGRES_HOST'),
            'PORT': os.getenv('POSTGRES_PORT', '5432'),
        }
    }
else:
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': os.path.join(tempfile.gettempdir(), 'opsportal.sqlite3'),
            'OPTIONS': {
                'transaction_mode': 'IMMEDIATE',
                'timeout': 30,
            },
            'TEST': {
                'NAME': os.path.join(tempfile.gettempdir(), 'test_opsportal.sqlite3'),
            },
        }
    }

INSTALLED_APPS = [
    'django.contrib.contenttypes',
    'django.contrib.auth',
    'django.contrib.sessions',
    'opsportal.numbering',
    'opsportal.activity',
    'opsportal.estimating',
    'opsportal.invoicing',
]

MIDDLEWARE = [
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
]

ROOT_URLCONF = 'opsportal.urls'

USE_TZ = True
TIME_ZONE = 'UTC'

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'
