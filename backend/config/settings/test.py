"""
Test settings.

Runs the suite against SQLite with local file storage and no
outbound identity-provider configuration.
"""

import tempfile

from .base import *  # noqa: F403

DEBUG = False
ALLOWED_HOSTS = ["testserver", "localhost"]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

STYTCH_PROJECT_ID = "project-test-00000000"
STYTCH_SECRET = "secret-test-00000000"
STYTCH_ORGANIZATION_ID = "organization-test-00000000"

USE_S3_STORAGE = False
MEDIA_ROOT = tempfile.mkdtemp(prefix="inspection-media-")
BACKEND_URL = "http://testserver"

LOG_JSON = False
LOG_LEVEL = "WARNING"
