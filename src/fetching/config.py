"""Central configuration constants for the repository fetch layer."""

from __future__ import annotations

import os
from typing import Optional

USER_AGENT = "github-repo-report/1.0"
BASE_URL = os.getenv("GH_REPORT_API_URL", "https://api.github.com").rstrip("/")
PER_PAGE = 100
REQUEST_TIMEOUT = int(os.getenv("GH_REPORT_REQUEST_TIMEOUT", "30"))
BACKOFF_BASE_SEC = 1
MAX_BACKOFF_SEC = 300
RATE_LIMIT_SAFETY_MARGIN_SEC = 2
BODY_PREVIEW_CHARS = 800

DEFAULT_MAX_ATTEMPTS = 6
MIN_ATTEMPTS = 1
MAX_ATTEMPTS = 20
MAX_ATTEMPTS_ENV = "GH_REPORT_MAX_ATTEMPTS"
DEFAULT_TOKEN_ENV = "GITHUB_TOKEN"


def clamp_attempts(value: int) -> int:
    """Bound an attempt budget to [MIN_ATTEMPTS, MAX_ATTEMPTS]."""
    return max(MIN_ATTEMPTS, min(MAX_ATTEMPTS, int(value)))


def resolve_max_attempts(requested: Optional[int] = None) -> int:
    """Return the attempt budget, letting the environment override the caller."""
    value = requested if requested is not None else DEFAULT_MAX_ATTEMPTS
    override = (os.getenv(MAX_ATTEMPTS_ENV) or "").strip()
    if override:
        try:
            value = int(override)
        except ValueError:
            print(f"[warn] ignoring non-integer {MAX_ATTEMPTS_ENV}={override!r}")
    return clamp_attempts(value)


__all__ = [
    "USER_AGENT",
    "BASE_URL",
    "PER_PAGE",
    "REQUEST_TIMEOUT",
    "BACKOFF_BASE_SEC",
    "MAX_BACKOFF_SEC",
    "RATE_LIMIT_SAFETY_MARGIN_SEC",
    "BODY_PREVIEW_CHARS",
    "DEFAULT_MAX_ATTEMPTS",
    "MIN_ATTEMPTS",
    "MAX_ATTEMPTS",
    "MAX_ATTEMPTS_ENV",
    "DEFAULT_TOKEN_ENV",
    "clamp_attempts",
    "resolve_max_attempts",
]
