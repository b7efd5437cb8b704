"""Entry point wiring configuration, repository collection and report rendering."""

from __future__ import annotations

import sys
from typing import List, Optional

from src.fetching.collectors import collect_account, save_json
from src.fetching.debug import DebugSink
from src.fetching.http_client import set_auth_token
from src.fetching.models import RepoFilters
from src.secrets import resolve_token

from .config import ReportSettings, parse_args, resolve_settings
from .renderer import AccountGroup, render_report, write_report

EXIT_NO_ACCOUNTS = 2
EXIT_WRITE_FAILED = 3


def build_report(settings: ReportSettings) -> List[AccountGroup]:
    """Collect records for every account, sequentially and in input order."""
    filters = RepoFilters.build(
        settings.exclude_names,
        skip_dot_prefix=settings.skip_dot_repos,
        hide_forks=settings.hide_forks,
    )
    debug_sink = DebugSink(str(settings.debug_dir)).record if settings.save_debug else None

    groups: List[AccountGroup] = []
    for account in settings.accounts:
        print(f"\n=== {account} ===")
        records = collect_account(account, filters, settings.max_attempts, debug_sink)
        fallbacks = sum(1 for r in records if r.from_fallback)
        suffix = f" ({fallbacks} from summary data)" if fallbacks else ""
        print(f"  {len(records)} repositories{suffix}")
        groups.append((account, records))
    return groups


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point; exits 2 without accounts and 3 when the report cannot be written."""

    args = parse_args(argv)
    settings = resolve_settings(args)
    if not settings.accounts:
        print("[error] no accounts specified. Pass account names as arguments or via --accounts.")
        sys.exit(EXIT_NO_ACCOUNTS)

    token = resolve_token(settings.token_env)
    if not token:
        print(f"[warn] ${settings.token_env} is not set; using the unauthenticated rate limit")
    set_auth_token(token)

    print(f"Processing {len(settings.accounts)} account(s), up to {settings.max_attempts} attempts per call...")
    groups = build_report(settings)
    html = render_report(groups, settings.title, settings.italic_names)

    try:
        write_report(settings.output, html)
        if settings.json_output is not None:
            save_json(str(settings.json_output),
                      [record.to_dict() for _, records in groups for record in records])
    except OSError as exc:
        print(f"[error] could not write report: {exc}")
        sys.exit(EXIT_WRITE_FAILED)

    total = sum(len(records) for _, records in groups)
    print(f"\nDone. {total} repositories -> {settings.output}")


__all__ = ["main", "build_report", "EXIT_NO_ACCOUNTS", "EXIT_WRITE_FAILED"]
