"""Tests for src.fetching.debug snapshot files.

Run with coverage:
    pytest tests/test_debug.py --maxfail=1 -v --cov=src.fetching.debug --cov-report=term-missing
"""

from src.fetching import debug


def test_sanitize_name_replaces_unsafe_characters():
    assert debug.sanitize_name("octo/cat:repos?page=1") == "octo_cat_repos_page_1"
    assert debug.sanitize_name("") == "response"


def test_record_writes_header_and_body_files(tmp_path):
    sink = debug.DebugSink(str(tmp_path / "dbg"))
    sink.record("alice/repos", 403, {"X-RateLimit-Remaining": "0"}, "line one\nline two")
    files = sorted(p.name for p in (tmp_path / "dbg").iterdir())
    assert len(files) == 2
    assert files[0].startswith("alice_repos_") and files[0].endswith("_body.txt")
    headers_file = next((tmp_path / "dbg").glob("*_headers.txt"))
    text = headers_file.read_text(encoding="utf-8")
    assert "status: 403" in text
    assert "X-RateLimit-Remaining: 0" in text
    body_file = next((tmp_path / "dbg").glob("*_body.txt"))
    assert body_file.read_text(encoding="utf-8") == "line one\nline two\n"


def test_body_preview_is_truncated(tmp_path):
    sink = debug.DebugSink(str(tmp_path))
    sink.record("big", 200, {}, "x" * 5000)
    body_file = next(tmp_path.glob("*_body.txt"))
    assert len(body_file.read_text(encoding="utf-8").strip()) == debug.BODY_PREVIEW_CHARS


def test_write_failures_are_reported_not_raised(tmp_path, capsys):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x", encoding="utf-8")
    sink = debug.DebugSink(str(blocker))
    sink.record("label", None, None, None)
    assert "could not write debug snapshot" in capsys.readouterr().out
