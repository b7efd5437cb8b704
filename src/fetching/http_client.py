"""HTTP helpers with retry/backoff logic for the GitHub REST API."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Union

import requests

from .config import (
    BACKOFF_BASE_SEC,
    MAX_BACKOFF_SEC,
    PER_PAGE,
    RATE_LIMIT_SAFETY_MARGIN_SEC,
    REQUEST_TIMEOUT,
    USER_AGENT,
)
from .debug import body_preview
from .rate_limit import (
    RateLimitSnapshot,
    inspect_headers,
    reset_wait_seconds,
    signals_rate_limit,
)

SESSION = requests.Session()
SESSION.headers.update(
    {
        "Accept": "application/vnd.github+json",
        "User-Agent": USER_AGENT,
    }
)

DebugCallback = Callable[[str, Optional[int], Mapping[str, Any], Optional[str]], None]


class FetchExhausted(RuntimeError):
    """Raised when no attempt within the budget produced a 2xx response."""

    def __init__(self, url: str, last_status: Optional[int], attempts: int) -> None:
        self.url = url
        self.last_status = last_status
        self.attempts = attempts
        status = f"HTTP {last_status}" if last_status is not None else "no response"
        super().__init__(f"{url} failed after {attempts} attempt(s) ({status})")


@dataclass(frozen=True)
class Success:
    payload: Any
    snapshot: RateLimitSnapshot
    status: int = 200


@dataclass(frozen=True)
class RateLimited:
    status: int
    snapshot: RateLimitSnapshot


@dataclass(frozen=True)
class TransientError:
    status: Optional[int]
    reason: str
    snapshot: RateLimitSnapshot = field(default_factory=RateLimitSnapshot)


@dataclass(frozen=True)
class PermanentError:
    status: int
    body_preview: str
    snapshot: RateLimitSnapshot = field(default_factory=RateLimitSnapshot)


FetchOutcome = Union[Success, RateLimited, TransientError, PermanentError]


@dataclass
class RetryState:
    """Attempt bookkeeping for one logical fetch of one URL."""

    url: str
    max_attempts: int
    attempt_count: int = 0
    base_delay_seconds: int = BACKOFF_BASE_SEC
    last_status: Optional[int] = None

    def begin_attempt(self) -> int:
        self.attempt_count += 1
        return self.attempt_count

    @property
    def exhausted(self) -> bool:
        return self.attempt_count >= self.max_attempts

    def backoff_delay(self) -> int:
        """Exponential delay for the current attempt, capped at MAX_BACKOFF_SEC."""
        exponent = max(0, self.attempt_count - 1)
        return min(MAX_BACKOFF_SEC, self.base_delay_seconds * (2 ** exponent))


def set_auth_token(token: Optional[str]) -> None:
    """Set or clear the SESSION Authorization header."""
    if token:
        SESSION.headers["Authorization"] = f"token {token}"
    else:
        SESSION.headers.pop("Authorization", None)


def sleep_before_retry(seconds: float) -> None:
    time.sleep(max(0.0, seconds))


def decode_json(resp: requests.Response) -> Any:
    """Parse a response body leniently: empty -> None, non-JSON -> raw text."""
    text = resp.text or ""
    if not text.strip():
        return None
    try:
        return resp.json()
    except ValueError:
        return text


def log_http_error(resp: requests.Response, url: str) -> None:
    """Print a short, human-readable message when GitHub returns an error."""
    try:
        body = resp.json()
    except ValueError:
        body = {"text": (resp.text or "")[:300]}
    if not isinstance(body, dict):
        body = {"text": str(body)[:300]}
    msg = body.get("message") or body.get("error") or body.get("text")
    print(f"[error] HTTP {resp.status_code} for {url}\n  -> {msg}")


def log_quota(snapshot: RateLimitSnapshot, url: str) -> None:
    if snapshot.remaining is None:
        return
    limit = snapshot.limit if snapshot.limit is not None else "?"
    print(f"[quota] {snapshot.remaining}/{limit} requests left ({url})")


def classify_response(resp: requests.Response) -> FetchOutcome:
    """Map one HTTP response onto a fetch outcome."""
    status = resp.status_code
    snapshot = inspect_headers(resp.headers)
    if 200 <= status < 300:
        return Success(payload=decode_json(resp), snapshot=snapshot, status=status)
    if signals_rate_limit(snapshot):
        return RateLimited(status=status, snapshot=snapshot)
    if status >= 500 or status in (403, 429):
        return TransientError(status=status, reason=f"HTTP {status}", snapshot=snapshot)
    return PermanentError(status=status, body_preview=body_preview(resp.text), snapshot=snapshot)


def plan_delay(outcome: FetchOutcome, state: RetryState, now: float) -> float:
    """Seconds to wait before the next attempt.

    An explicit Retry-After wins; an empty quota waits for the reset (clamped at
    zero) plus a safety margin; everything else backs off exponentially.
    """
    snapshot = getattr(outcome, "snapshot", None) or RateLimitSnapshot()
    retry_after = snapshot.retry_after_seconds
    if retry_after is not None and retry_after > 0:
        return retry_after
    if snapshot.exhausted:
        return reset_wait_seconds(snapshot, now) + RATE_LIMIT_SAFETY_MARGIN_SEC
    return state.backoff_delay()


def _notify_sink(debug_sink: Optional[DebugCallback],
                 label: str,
                 status: Optional[int],
                 headers: Optional[Mapping[str, Any]],
                 body: Optional[str]) -> None:
    if debug_sink is None:
        return
    try:
        debug_sink(label, status, dict(headers or {}), body)
    except Exception as exc:
        print(f"[warn] debug sink failed for {label}: {exc}")


def fetch_json(url: str,
               max_attempts: int,
               debug_sink: Optional[DebugCallback] = None,
               label: Optional[str] = None) -> Any:
    """GET `url` with retry, rate-limit waits and exponential backoff.

    Every non-2xx status and every network failure is retried until the attempt
    budget is spent, at which point FetchExhausted is raised.
    """
    state = RetryState(url=url, max_attempts=max_attempts)
    label = label or url

    while not state.exhausted:
        attempt = state.begin_attempt()
        try:
            resp = SESSION.get(url, timeout=REQUEST_TIMEOUT)
        except requests.RequestException as exc:
            outcome: FetchOutcome = TransientError(status=None, reason=str(exc))
            _notify_sink(debug_sink, f"{label}_attempt{attempt}", None, {}, str(exc))
        else:
            outcome = classify_response(resp)
            state.last_status = resp.status_code
            log_quota(outcome.snapshot, url)
            if isinstance(outcome, Success):
                _notify_sink(debug_sink, label, resp.status_code, resp.headers, resp.text)
                return outcome.payload
            if isinstance(outcome, PermanentError):
                log_http_error(resp, url)
            _notify_sink(debug_sink, f"{label}_attempt{attempt}", resp.status_code, resp.headers, resp.text)

        if state.exhausted:
            break

        delay = plan_delay(outcome, state, time.time())
        if isinstance(outcome, RateLimited):
            print(f"[rate-limit] HTTP {outcome.status} for {url}; waiting {delay}s "
                  f"(attempt {attempt}/{state.max_attempts})")
        elif isinstance(outcome, TransientError):
            print(f"[retry {attempt}/{state.max_attempts}] {outcome.reason} -> sleep {delay}s")
        else:
            print(f"[backoff {outcome.status}] waiting {delay}s for {url} "
                  f"(attempt {attempt}/{state.max_attempts})")
        sleep_before_retry(delay)

    print(f"[error] giving up on {url} after {state.attempt_count} attempt(s)")
    raise FetchExhausted(url, state.last_status, state.attempt_count)


def iter_pages(url: str,
               max_attempts: int,
               debug_sink: Optional[DebugCallback] = None,
               label: Optional[str] = None) -> Iterator[List[Dict[str, Any]]]:
    """Yield successive pages until one comes back shorter than PER_PAGE."""
    page = 1
    label = label or url
    while True:
        sep = "&" if "?" in url else "?"
        page_url = f"{url}{sep}per_page={PER_PAGE}&page={page}"
        batch = fetch_json(page_url, max_attempts, debug_sink, label=f"{label}_page{page}")
        if not isinstance(batch, list):
            if batch is not None:
                print(f"[warn] {page_url} returned {type(batch).__name__}, expected a list")
            return

        yield batch

        if len(batch) < PER_PAGE:
            return
        page += 1


__all__ = [
    "SESSION",
    "FetchExhausted",
    "Success",
    "RateLimited",
    "TransientError",
    "PermanentError",
    "FetchOutcome",
    "RetryState",
    "set_auth_token",
    "sleep_before_retry",
    "decode_json",
    "log_http_error",
    "log_quota",
    "classify_response",
    "plan_delay",
    "fetch_json",
    "iter_pages",
]
