"""Tests for src.fetching.config ensuring env overrides and defaults work.

Run with coverage to validate configuration handling:
    pytest tests/test_config.py --maxfail=1 -v --cov=src.fetching.config --cov-report=term-missing
"""

from importlib import reload

import src.fetching.config as config


def test_config_defaults_are_present():
    assert config.PER_PAGE == 100
    assert config.BACKOFF_BASE_SEC == 1
    assert config.MAX_BACKOFF_SEC == 300
    assert config.USER_AGENT.startswith("github-repo-report")


def test_clamp_attempts_bounds():
    assert config.clamp_attempts(0) == 1
    assert config.clamp_attempts(-4) == 1
    assert config.clamp_attempts(7) == 7
    assert config.clamp_attempts(99) == 20


def test_resolve_max_attempts_uses_caller_value(monkeypatch):
    monkeypatch.delenv(config.MAX_ATTEMPTS_ENV, raising=False)
    assert config.resolve_max_attempts(None) == config.DEFAULT_MAX_ATTEMPTS
    assert config.resolve_max_attempts(3) == 3
    assert config.resolve_max_attempts(50) == 20


def test_env_override_beats_caller_and_is_clamped(monkeypatch):
    monkeypatch.setenv(config.MAX_ATTEMPTS_ENV, "9")
    assert config.resolve_max_attempts(3) == 9
    monkeypatch.setenv(config.MAX_ATTEMPTS_ENV, "100")
    assert config.resolve_max_attempts(3) == 20


def test_invalid_env_override_is_ignored(monkeypatch, capsys):
    monkeypatch.setenv(config.MAX_ATTEMPTS_ENV, "many")
    assert config.resolve_max_attempts(4) == 4
    assert "ignoring" in capsys.readouterr().out


def test_env_override_for_request_timeout(monkeypatch):
    monkeypatch.setenv("GH_REPORT_REQUEST_TIMEOUT", "9")
    reloaded = reload(config)
    try:
        assert reloaded.REQUEST_TIMEOUT == 9
    finally:
        monkeypatch.delenv("GH_REPORT_REQUEST_TIMEOUT", raising=False)
        reload(config)
