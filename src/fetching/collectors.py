"""Collection helpers: list an account's repositories and resolve their details."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union
from urllib.parse import quote

from .config import BASE_URL
from .http_client import DebugCallback, FetchExhausted, fetch_json, iter_pages
from .models import RepoFilters, RepositoryRecord, record_from_payload


@dataclass(frozen=True)
class DetailFetched:
    payload: Dict[str, Any]


@dataclass(frozen=True)
class DetailFailed:
    reason: str
    status: Optional[int] = None


DetailResult = Union[DetailFetched, DetailFailed]


def ensure_dir(path: str) -> None:
    """Create output directories as-needed without raising for existing folders."""
    if path:
        os.makedirs(path, exist_ok=True)


def save_json(path: str, data: Any) -> None:
    """Write JSON to disk using UTF-8 and deterministic formatting."""
    ensure_dir(os.path.dirname(path))
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def apply_filters(repos: List[Dict[str, Any]], filters: RepoFilters) -> List[Dict[str, Any]]:
    """Drop excluded names, then dot-prefixed names, then forks."""
    kept = [r for r in repos if str(r.get("name") or "").lower() not in filters.exclude_names]
    if filters.skip_dot_prefix:
        kept = [r for r in kept if not str(r.get("name") or "").startswith(".")]
    if filters.hide_forks:
        kept = [r for r in kept if not r.get("fork")]
    return kept


def list_account_repos(account: str,
                       filters: RepoFilters,
                       max_attempts: int,
                       debug_sink: Optional[DebugCallback] = None) -> List[Dict[str, Any]]:
    """Return the filtered repo summaries owned by `account`.

    An account whose first page cannot be fetched is reported and contributes
    nothing; a failure on a later page keeps what was already listed.
    """
    url = f"{BASE_URL}/users/{quote(account, safe='')}/repos?type=owner&sort=full_name"
    repos: List[Dict[str, Any]] = []
    pages = 0
    try:
        for batch in iter_pages(url, max_attempts, debug_sink, label=f"{account}_repos"):
            pages += 1
            repos.extend(item for item in batch if isinstance(item, dict))
    except FetchExhausted as exc:
        if pages == 0:
            print(f"[warn] account {account} is inaccessible, skipping: {exc}")
            return []
        print(f"[warn] listing for {account} stopped after {pages} page(s): {exc}")

    kept = apply_filters(repos, filters)
    if len(kept) != len(repos):
        print(f"  {account}: {len(repos)} listed, {len(repos) - len(kept)} filtered out")
    return kept


def resolve_repo_detail(owner: str,
                        repo: str,
                        max_attempts: int,
                        debug_sink: Optional[DebugCallback] = None) -> DetailResult:
    """Fetch the single-repository payload; failures come back as DetailFailed."""
    url = f"{BASE_URL}/repos/{quote(owner, safe='')}/{quote(repo, safe='')}"
    try:
        payload = fetch_json(url, max_attempts, debug_sink, label=f"{owner}_{repo}_detail")
    except FetchExhausted as exc:
        return DetailFailed(reason=str(exc), status=exc.last_status)
    if not isinstance(payload, dict):
        return DetailFailed(reason=f"unexpected detail payload for {owner}/{repo}")
    return DetailFetched(payload=payload)


def build_record(account: str,
                 summary: Dict[str, Any],
                 result: DetailResult) -> RepositoryRecord:
    """Prefer detail data; fall back to the list summary when the lookup failed."""
    if isinstance(result, DetailFetched):
        return record_from_payload(account, result.payload)
    print(f"[warn] using list data for {summary.get('full_name') or summary.get('name')}: {result.reason}")
    return record_from_payload(account, summary, from_fallback=True)


def collect_account(account: str,
                    filters: RepoFilters,
                    max_attempts: int,
                    debug_sink: Optional[DebugCallback] = None) -> List[RepositoryRecord]:
    """List an account's repositories and resolve each one, in listing order."""
    records: List[RepositoryRecord] = []
    for summary in list_account_repos(account, filters, max_attempts, debug_sink):
        owner = ((summary.get("owner") or {}).get("login")) or account
        name = summary.get("name") or ""
        result = resolve_repo_detail(owner, name, max_attempts, debug_sink)
        records.append(build_record(account, summary, result))
    return records


__all__ = [
    "DetailFetched",
    "DetailFailed",
    "DetailResult",
    "ensure_dir",
    "save_json",
    "apply_filters",
    "list_account_repos",
    "resolve_repo_detail",
    "build_record",
    "collect_account",
]
