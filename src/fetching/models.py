"""Resolved repository records and helpers that read GitHub payloads defensively."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, Optional, Tuple

SPDX_LICENSE_URL = "https://spdx.org/licenses/{spdx_id}.html"
_UNRESOLVED_SPDX = {"", "NOASSERTION", "OTHER"}


@dataclass(frozen=True)
class LicenseInfo:
    name: Optional[str] = None
    url: Optional[str] = None


@dataclass(frozen=True)
class ParentInfo:
    full_name: str
    url: Optional[str] = None
    license: Optional[LicenseInfo] = None


@dataclass(frozen=True)
class RepositoryRecord:
    """One repository as it appears in the report."""

    account: str
    owner: str
    name: str
    full_name: str
    url: str
    description: Optional[str]
    fork: bool
    license: Optional[LicenseInfo]
    parent: Optional[ParentInfo]
    created_at: Optional[str]
    updated_at: Optional[str]
    stars: int
    forks: int
    topics: Tuple[str, ...] = ()
    from_fallback: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["topics"] = list(self.topics)
        return data


@dataclass(frozen=True)
class RepoFilters:
    """Listing filters, applied as: excluded names, dot-prefixed names, forks."""

    exclude_names: FrozenSet[str] = field(default_factory=frozenset)
    skip_dot_prefix: bool = False
    hide_forks: bool = False

    @classmethod
    def build(cls, exclude_names: Iterable[str] = (), skip_dot_prefix: bool = False,
              hide_forks: bool = False) -> "RepoFilters":
        names = frozenset(n.strip().lower() for n in exclude_names if n and n.strip())
        return cls(exclude_names=names, skip_dot_prefix=skip_dot_prefix, hide_forks=hide_forks)


def license_from_payload(payload: Optional[Dict[str, Any]]) -> Optional[LicenseInfo]:
    """Read GitHub's `license` object; None when absent or empty."""
    if not isinstance(payload, dict):
        return None
    name = payload.get("name") or payload.get("spdx_id") or None
    spdx_id = str(payload.get("spdx_id") or "")
    url = None
    if spdx_id.upper() not in _UNRESOLVED_SPDX:
        url = SPDX_LICENSE_URL.format(spdx_id=spdx_id)
    if not name and not url:
        return None
    return LicenseInfo(name=name, url=url)


def parent_from_payload(payload: Optional[Dict[str, Any]]) -> Optional[ParentInfo]:
    """Read the `parent` object of a fork; None when absent."""
    if not isinstance(payload, dict) or not payload.get("full_name"):
        return None
    return ParentInfo(
        full_name=payload["full_name"],
        url=payload.get("html_url"),
        license=license_from_payload(payload.get("license")),
    )


def _as_int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def record_from_payload(account: str,
                        payload: Dict[str, Any],
                        from_fallback: bool = False) -> RepositoryRecord:
    """Build a RepositoryRecord from a list item or a detail payload."""
    owner = ((payload.get("owner") or {}).get("login")) or account
    name = payload.get("name") or ""
    full_name = payload.get("full_name") or f"{owner}/{name}"
    topics = payload.get("topics") or []
    return RepositoryRecord(
        account=account,
        owner=owner,
        name=name,
        full_name=full_name,
        url=payload.get("html_url") or f"https://github.com/{full_name}",
        description=payload.get("description") or None,
        fork=bool(payload.get("fork")),
        license=license_from_payload(payload.get("license")),
        parent=parent_from_payload(payload.get("parent")),
        created_at=payload.get("created_at"),
        updated_at=payload.get("updated_at"),
        stars=_as_int(payload.get("stargazers_count")),
        forks=_as_int(payload.get("forks_count")),
        topics=tuple(str(t) for t in topics if t),
        from_fallback=from_fallback,
    )


__all__ = [
    "LicenseInfo",
    "ParentInfo",
    "RepositoryRecord",
    "RepoFilters",
    "license_from_payload",
    "parent_from_payload",
    "record_from_payload",
]
