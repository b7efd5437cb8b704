"""Command-line configuration for the repository report."""

from __future__ import annotations

import argparse
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from src.fetching.config import DEFAULT_MAX_ATTEMPTS, DEFAULT_TOKEN_ENV, resolve_max_attempts

DEFAULT_OUTPUT = "./output/repos.html"
DEFAULT_DEBUG_DIR = "./debug"
DEFAULT_TITLE = "Public repositories"

_SEPARATORS = re.compile(r"[,\s]+")


@dataclass(frozen=True)
class ReportSettings:
    """Resolved runtime settings for one report run."""

    accounts: Tuple[str, ...]
    hide_forks: bool
    skip_dot_repos: bool
    save_debug: bool
    debug_dir: Path
    max_attempts: int
    exclude_names: Tuple[str, ...]
    italic_names: Tuple[str, ...]
    token_env: str
    output: Path
    json_output: Optional[Path]
    title: str


def parse_name_list(values: Union[None, str, Iterable[str]]) -> List[str]:
    """Split comma/space separated names, keeping first-seen order without duplicates."""
    if values is None:
        return []
    if isinstance(values, str):
        values = [values]
    names: List[str] = []
    for value in values:
        for name in _SEPARATORS.split(value or ""):
            if name and name not in names:
                names.append(name)
    return names


def build_arg_parser() -> argparse.ArgumentParser:
    """Return the CLI parser used by the report entry point."""

    parser = argparse.ArgumentParser(
        description="Render an HTML report of the public repositories owned by GitHub accounts.",
    )
    parser.add_argument("accounts", nargs="*", help="account names (comma or space separated)")
    parser.add_argument("--accounts", dest="account_lists", action="append", default=[],
                        help="additional comma/space separated account list")
    parser.add_argument("--hide-forks", action="store_true")
    parser.add_argument("--skip-dot-repos", action="store_true",
                        help="skip repositories whose name starts with a dot")
    parser.add_argument("--save-debug", action="store_true",
                        help="write response headers and bodies under --debug-dir")
    parser.add_argument("--debug-dir", default=DEFAULT_DEBUG_DIR)
    parser.add_argument("--max-attempts", type=int, default=None,
                        help=f"attempts per API call, 1-20 (default {DEFAULT_MAX_ATTEMPTS})")
    parser.add_argument("--exclude", action="append", default=[],
                        help="repository names to leave out")
    parser.add_argument("--italic", action="append", default=[],
                        help="repository names to render in italics")
    parser.add_argument("--token-env", default=DEFAULT_TOKEN_ENV,
                        help="environment variable holding the API token")
    parser.add_argument("--output", default=DEFAULT_OUTPUT)
    parser.add_argument("--json-output", default=None,
                        help="also dump the resolved records as JSON")
    parser.add_argument("--title", default=DEFAULT_TITLE)
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments; accepts argv overrides for testing."""

    parser = build_arg_parser()
    return parser.parse_args(argv)


def resolve_settings(args: Optional[argparse.Namespace] = None) -> ReportSettings:
    """Return immutable settings from parsed arguments and the environment."""

    args = args or parse_args()
    return ReportSettings(
        accounts=tuple(parse_name_list(list(args.accounts) + list(args.account_lists))),
        hide_forks=bool(args.hide_forks),
        skip_dot_repos=bool(args.skip_dot_repos),
        save_debug=bool(args.save_debug),
        debug_dir=Path(args.debug_dir),
        max_attempts=resolve_max_attempts(args.max_attempts),
        exclude_names=tuple(parse_name_list(args.exclude)),
        italic_names=tuple(parse_name_list(args.italic)),
        token_env=args.token_env,
        output=Path(args.output),
        json_output=Path(args.json_output) if args.json_output else None,
        title=args.title,
    )


__all__ = [
    "DEFAULT_OUTPUT",
    "DEFAULT_DEBUG_DIR",
    "DEFAULT_TITLE",
    "ReportSettings",
    "parse_name_list",
    "build_arg_parser",
    "parse_args",
    "resolve_settings",
]
