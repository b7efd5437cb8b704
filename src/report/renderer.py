"""Static HTML rendering of resolved repository records."""

from __future__ import annotations

import datetime as dt
from html import escape
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from src.fetching.models import LicenseInfo, RepositoryRecord

AccountGroup = Tuple[str, Sequence[RepositoryRecord]]

STYLE = """
body { font-family: sans-serif; margin: 2em auto; max-width: 60em; color: #222; }
h2 { border-bottom: 1px solid #ccc; padding-bottom: .2em; }
li { margin-bottom: .8em; }
.meta { color: #555; font-size: .9em; }
.topic { background: #eef; border-radius: 3px; padding: 0 .4em; margin-right: .3em; font-size: .85em; }
.fallback { color: #a60; font-size: .85em; }
"""


def _date(value: Optional[str]) -> str:
    return (value or "")[:10] or "unknown"


def _license_html(license_info: Optional[LicenseInfo]) -> str:
    if license_info is None or not (license_info.name or license_info.url):
        return "no license"
    name = escape(license_info.name or "license")
    if license_info.url:
        return f'<a href="{escape(license_info.url)}">{name}</a>'
    return name


def _name_html(record: RepositoryRecord, italic: Iterable[str]) -> str:
    link = f'<a href="{escape(record.url)}">{escape(record.full_name)}</a>'
    if record.name.lower() in italic:
        return f"<em>{link}</em>"
    return link


def render_repo(record: RepositoryRecord, italic: Iterable[str] = ()) -> str:
    """Render one repository as a list item."""
    parts = [f"<li>{_name_html(record, italic)}"]
    if record.description:
        parts.append(f" &mdash; {escape(record.description)}")
    meta = [
        _license_html(record.license),
        f"&#9733; {record.stars}",
        f"forks {record.forks}",
        f"created {escape(_date(record.created_at))}",
        f"updated {escape(_date(record.updated_at))}",
    ]
    parts.append(f'<div class="meta">{" | ".join(meta)}</div>')
    if record.parent is not None:
        parent = escape(record.parent.full_name)
        if record.parent.url:
            parent = f'<a href="{escape(record.parent.url)}">{parent}</a>'
        parts.append(f'<div class="meta">fork of {parent} ({_license_html(record.parent.license)})</div>')
    elif record.fork:
        parts.append('<div class="meta">fork (parent unknown)</div>')
    if record.topics:
        tags = "".join(f'<span class="topic">{escape(t)}</span>' for t in record.topics)
        parts.append(f"<div>{tags}</div>")
    if record.from_fallback:
        parts.append('<div class="fallback">summary data only; details could not be fetched</div>')
    parts.append("</li>")
    return "".join(parts)


def render_report(groups: Sequence[AccountGroup],
                  title: str,
                  italic_names: Iterable[str] = (),
                  generated_at: Optional[dt.datetime] = None) -> str:
    """Render the full report; accounts keep input order, repos sort by full name."""
    italic = {n.lower() for n in italic_names}
    generated_at = generated_at or dt.datetime.now(dt.timezone.utc)
    total = sum(len(records) for _, records in groups)

    lines: List[str] = [
        "<!DOCTYPE html>",
        '<html lang="en">',
        "<head>",
        '<meta charset="utf-8">',
        f"<title>{escape(title)}</title>",
        f"<style>{STYLE}</style>",
        "</head>",
        "<body>",
        f"<h1>{escape(title)}</h1>",
        f"<p>{total} repositories across {len(groups)} account(s).</p>",
    ]
    for account, records in groups:
        lines.append(f'<h2 id="{escape(account)}">{escape(account)} ({len(records)})</h2>')
        if not records:
            lines.append("<p>No public repositories found.</p>")
            continue
        lines.append("<ul>")
        for record in sorted(records, key=lambda r: r.full_name.lower()):
            lines.append(render_repo(record, italic))
        lines.append("</ul>")
    stamp = generated_at.replace(microsecond=0).isoformat()
    lines.extend([f'<p class="meta">Generated {escape(stamp)}</p>', "</body>", "</html>"])
    return "\n".join(lines) + "\n"


def write_report(path: Path, html: str) -> None:
    """Write the report as UTF-8, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding="utf-8")


__all__ = ["render_repo", "render_report", "write_report"]
