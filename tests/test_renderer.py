"""Tests for src.report.renderer HTML output.

Run with coverage:
    pytest tests/test_renderer.py --maxfail=1 -v --cov=src.report.renderer --cov-report=term-missing
"""

import datetime as dt

from src.fetching.models import LicenseInfo, ParentInfo, RepositoryRecord
from src.report import renderer

GENERATED = dt.datetime(2024, 5, 1, 12, 0, tzinfo=dt.timezone.utc)


def _record(name, **overrides):
    data = dict(
        account="alice",
        owner="alice",
        name=name,
        full_name=f"alice/{name}",
        url=f"https://github.com/alice/{name}",
        description=None,
        fork=False,
        license=None,
        parent=None,
        created_at="2021-02-03T04:05:06Z",
        updated_at=None,
        stars=5,
        forks=2,
    )
    data.update(overrides)
    return RepositoryRecord(**data)


def test_repos_are_sorted_and_escaped():
    records = [
        _record("zeta", description="<script>alert(1)</script>"),
        _record("Alpha"),
    ]
    html = renderer.render_report([("alice", records)], "Repos & more", generated_at=GENERATED)
    assert html.index("alice/Alpha") < html.index("alice/zeta")
    assert "&lt;script&gt;" in html and "<script>" not in html
    assert "<title>Repos &amp; more</title>" in html
    assert "created 2021-02-03" in html
    assert "updated unknown" in html
    assert "2024-05-01T12:00:00+00:00" in html


def test_license_parent_topics_and_italics():
    record = _record(
        "tool",
        fork=True,
        license=LicenseInfo(name="MIT License", url="https://spdx.org/licenses/MIT.html"),
        parent=ParentInfo(full_name="up/tool", url="https://github.com/up/tool", license=None),
        topics=("cli",),
    )
    html = renderer.render_repo(record, {"tool"})
    assert html.startswith('<li><em><a href="https://github.com/alice/tool">')
    assert '<a href="https://spdx.org/licenses/MIT.html">MIT License</a>' in html
    assert 'fork of <a href="https://github.com/up/tool">up/tool</a> (no license)' in html
    assert '<span class="topic">cli</span>' in html


def test_fallback_records_are_marked():
    html = renderer.render_repo(_record("old", fork=True, from_fallback=True))
    assert "summary data only" in html
    assert "fork (parent unknown)" in html


def test_empty_account_and_totals():
    html = renderer.render_report([("alice", [_record("a")]), ("bob", [])], "T", generated_at=GENERATED)
    assert "1 repositories across 2 account(s)" in html
    assert "bob (0)" in html
    assert "No public repositories found." in html


def test_write_report_creates_directories(tmp_path):
    target = tmp_path / "a" / "b" / "r.html"
    renderer.write_report(target, "<p>hi</p>")
    assert target.read_text(encoding="utf-8") == "<p>hi</p>"
