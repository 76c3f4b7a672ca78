"""Configuration helpers and defaults."""
from __future__ import annotations

import json
from os import getenv
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DRIVE_API_URL = "https://www.googleapis.com/drive/v3"
DOCS_API_URL = "https://docs.googleapis.com/v1"

DEFAULT_HTTP_TIMEOUT_MS = 30000
DEFAULT_LOG_JSON_PATH = ".docseed-log.jsonl"

# Track if we've loaded .env
_dotenv_loaded = False


def ensure_dotenv_loaded() -> None:
    """Load .env file from current directory if not already loaded."""
    global _dotenv_loaded
    if _dotenv_loaded:
        return

    env_file = Path.cwd() / ".env"
    if env_file.exists():
        load_dotenv(env_file)
    else:
        # Also try parent directories up to home
        for parent in Path.cwd().parents:
            env_file = parent / ".env"
            if env_file.exists():
                load_dotenv(env_file)
                break
            if parent == Path.home():
                break

    _dotenv_loaded = True


def env_int(name: str, fallback: int) -> int:
    raw = getenv(name)
    if raw is None:
        return fallback
    try:
        value = int(raw)
    except ValueError:
        return fallback
    return value if value > 0 else fallback


def http_timeout_seconds() -> float:
    return env_int("DOCSEED_HTTP_TIMEOUT_MS", DEFAULT_HTTP_TIMEOUT_MS) / 1000


def resolve_access_token() -> Optional[str]:
    """Find an OAuth access token in the environment or a token file.

    Checks DOCSEED_ACCESS_TOKEN, then GOOGLE_ACCESS_TOKEN, then the JSON file
    named by DOCSEED_TOKEN_FILE (``access_token`` or ``token`` key).

    The token file must hold a live access token. Expiry fields are ignored and
    no refresh is attempted, so an expired token fails at the first API call.
    """
    ensure_dotenv_loaded()

    token = getenv("DOCSEED_ACCESS_TOKEN") or getenv("GOOGLE_ACCESS_TOKEN")
    if token:
        return token.strip()

    token_file = getenv("DOCSEED_TOKEN_FILE")
    if not token_file:
        return None
    path = Path(token_file).expanduser()
    try:
        data = json.loads(path.read_text(encoding="utf8"))
    except (OSError, json.JSONDecodeError):
        return None
    if not isinstance(data, dict):
        return None
    value = data.get("access_token") or data.get("token")
    return value if isinstance(value, str) and value else None


def env_flag(name: str) -> bool:
    return getenv(name, "").strip().lower() in {"1", "true", "yes", "on"}
