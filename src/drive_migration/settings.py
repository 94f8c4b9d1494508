from __future__ import annotations

import os

OAUTH_CLIENT_ID = os.getenv("OAUTH_CLIENT_ID", "")
OAUTH_CLIENT_SECRET = os.getenv("OAUTH_CLIENT_SECRET", "")
_DEFAULT_REDIRECT_URI = "http://localhost:8080/"
OAUTH_REDIRECT_URI = os.getenv("OAUTH_REDIRECT_URI", _DEFAULT_REDIRECT_URI).strip()
if not OAUTH_REDIRECT_URI:
    OAUTH_REDIRECT_URI = _DEFAULT_REDIRECT_URI
DRIVE_APPLICATION_NAME = os.getenv("DRIVE_APPLICATION_NAME", "Drive API Migration")
DRIVE_REQUEST_TIMEOUT = float(os.getenv("DRIVE_REQUEST_TIMEOUT", "20"))
DRIVE_SERVICE_WORKERS = int(os.getenv("DRIVE_SERVICE_WORKERS", "4"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
