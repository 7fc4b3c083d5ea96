"""Test settings: in-memory SQLite, fast hashing, throwaway media storage."""

import tempfile

from .base import *  # noqa: F401,F403

DEBUG = False

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

MEDIA_ROOT = tempfile.mkdtemp(prefix='accommodation-media-')

STORAGES = {
    'default': {
        'BACKEND': 'django.core.files.storage.FileSystemStorage',
    },
    'staticfiles': {
        'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
    },
}

LOG_LEVEL = 'WARNING'
LOGGING['handlers']['console']['level'] = LOG_LEVEL
LOGGING['loggers']['apps']['level'] = LOG_LEVEL
LOGGING['loggers']['shared']['level'] = LOG_LEVEL
