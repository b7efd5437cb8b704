"""Tests for src.secrets token resolution.

Run with coverage:
    pytest tests/test_secrets.py --maxfail=1 -v --cov=src.secrets --cov-report=term-missing
"""

import json

from src import secrets


def test_env_token_wins(monkeypatch, tmp_path):
    path = tmp_path / "s.json"
    path.write_text(json.dumps({"github_token": "from-file"}), encoding="utf-8")
    monkeypatch.setenv("MY_TOKEN", " from-env ")
    assert secrets.resolve_token("MY_TOKEN", path) == "from-env"


def test_falls_back_to_local_secrets(monkeypatch, tmp_path):
    path = tmp_path / "s.json"
    path.write_text(json.dumps({"github_token": "from-file"}), encoding="utf-8")
    monkeypatch.delenv("MY_TOKEN", raising=False)
    assert secrets.resolve_token("MY_TOKEN", path) == "from-file"


def test_missing_or_broken_secrets(monkeypatch, tmp_path):
    monkeypatch.delenv("MY_TOKEN", raising=False)
    assert secrets.resolve_token("MY_TOKEN", tmp_path / "absent.json") is None
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    assert secrets.load_local_secrets(broken) == {}
    listed = tmp_path / "list.json"
    listed.write_text("[1, 2]", encoding="utf-8")
    assert secrets.load_local_secrets(listed) == {}
