"""Utilities for loading the GitHub token from the environment or local secrets."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

DEFAULT_SECRETS_FILENAME = "local_secrets.json"


def _default_secrets_path() -> Path:
    root = Path(__file__).resolve().parents[1]
    return root / DEFAULT_SECRETS_FILENAME


def load_local_secrets(path: Optional[str | Path] = None) -> Dict[str, Any]:
    """Load secrets from a JSON file; return {} when unavailable."""

    candidate = path or os.getenv("LOCAL_SECRETS_FILE") or _default_secrets_path()
    secrets_path = Path(candidate).expanduser()
    if not secrets_path.exists():
        return {}
    try:
        with secrets_path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
            return data if isinstance(data, dict) else {}
    except (OSError, ValueError):
        return {}


def resolve_token(env_var: str, secrets_path: Optional[str | Path] = None) -> Optional[str]:
    """Return the token from `env_var`, else `github_token` from local secrets."""
    token = (os.getenv(env_var) or "").strip() if env_var else ""
    if token:
        return token
    token = str(load_local_secrets(secrets_path).get("github_token") or "").strip()
    return token or None


__all__ = ["load_local_secrets", "resolve_token", "DEFAULT_SECRETS_FILENAME"]
