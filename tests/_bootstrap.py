"""Test helper that normalizes sys.path and environment defaults."""

from __future__ import annotations

import os
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]

if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


_DEFAULT_ENV_VARS: dict[str, str] = {
    "PLANT_RANGER_API_BASE_URL": "https://plants.example.com",
    "AWS_REGION": "us-east-1",
    "AWS_ACCESS_KEY_ID": "testing",
    "AWS_SECRET_ACCESS_KEY": "testing",
    "OAUTH_TOKENS_TABLE": "tokens-table",
    "OAUTH_SECRETS_NAME": "oauth-secret",
    "OAUTH_STATE_SECRET": "test-state-secret",
    "TOKEN_ENCRYPTION_SECRET": "test-secret",
    "ADMIN_API_KEY": "test-admin-key",
}

for key, value in _DEFAULT_ENV_VARS.items():
    os.environ.setdefault(key, value)
