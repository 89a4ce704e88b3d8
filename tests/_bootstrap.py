"""Test helper that normalizes sys.path and environment defaults."""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]

if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


_DEFAULT_ENV_VARS: dict[str, str] = {
    "WEB_HOST": "https://linker.example.com",
    "SESSION_SECRET": "test-session-secret",
    "REDDIT_CLIENT_ID": "reddit-client-id",
    "REDDIT_CLIENT_SECRET": "reddit-client-secret",
    "DISCORD_CLIENT_ID": "discord-client-id",
    "DISCORD_CLIENT_SECRET": "discord-client-secret",
    "TOKEN_ENCRYPTION_SECRET": "test-secret",
    "LINK_DB_PATH": str(Path(tempfile.gettempdir()) / "linker-tests" / "links.db"),
}

for key, value in _DEFAULT_ENV_VARS.items():
    os.environ.setdefault(key, value)
