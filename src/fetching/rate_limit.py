"""Parse GitHub rate-limit headers into a normalized snapshot."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

REMAINING_HEADER = "x-ratelimit-remaining"
LIMIT_HEADER = "x-ratelimit-limit"
RESET_HEADER = "x-ratelimit-reset"
RETRY_AFTER_HEADER = "retry-after"


@dataclass(frozen=True)
class RateLimitSnapshot:
    """Rate-limit fields reported by a single response."""

    remaining: Optional[int] = None
    limit: Optional[int] = None
    reset_epoch_seconds: Optional[int] = None
    retry_after_seconds: Optional[int] = None

    @property
    def exhausted(self) -> bool:
        return self.remaining == 0 and self.reset_epoch_seconds is not None


def _parse_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def inspect_headers(headers: Optional[Mapping[str, Any]]) -> RateLimitSnapshot:
    """Build a snapshot from response headers; absent or malformed fields become None."""
    lowered = {str(key).lower(): value for key, value in (headers or {}).items()}
    return RateLimitSnapshot(
        remaining=_parse_int(lowered.get(REMAINING_HEADER)),
        limit=_parse_int(lowered.get(LIMIT_HEADER)),
        reset_epoch_seconds=_parse_int(lowered.get(RESET_HEADER)),
        retry_after_seconds=_parse_int(lowered.get(RETRY_AFTER_HEADER)),
    )


def reset_wait_seconds(snapshot: RateLimitSnapshot, now: float) -> Optional[int]:
    """Seconds until the quota resets, clamped at zero; None without a reset time."""
    if snapshot.reset_epoch_seconds is None:
        return None
    return max(0, snapshot.reset_epoch_seconds - int(now))


def signals_rate_limit(snapshot: RateLimitSnapshot) -> bool:
    """True when the server asked us to wait, either explicitly or via an empty quota."""
    retry_after = snapshot.retry_after_seconds
    return (retry_after is not None and retry_after > 0) or snapshot.exhausted


__all__ = [
    "RateLimitSnapshot",
    "inspect_headers",
    "reset_wait_seconds",
    "signals_rate_limit",
]
