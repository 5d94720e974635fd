"""
Tests for configuration loading
"""

from pathlib import Path

import pytest

from studioflow.config import Config


def test_reads_api_key_from_environment():
    assert Config().gemini_api_key == "mock-key"


def test_missing_api_key_fails_validation(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY")
    with pytest.raises(ValueError, match="GEMINI_API_KEY"):
        Config().validate_required()


def test_defaults():
    cfg = Config()
    assert cfg.api_base_url == "https://generativelanguage.googleapis.com/v1beta"
    assert cfg.max_attempts == 5
    assert cfg.backoff_base == 1.0
    assert cfg.retry_budget == 30.0


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("STUDIOFLOW_API_BASE_URL", "http://localhost:8080/v1beta")
    monkeypatch.setenv("STUDIOFLOW_RETRY_BUDGET", "12.5")
    monkeypatch.setenv("STUDIOFLOW_PROJECTS", str(tmp_path / "p.yaml"))

    cfg = Config()

    assert cfg.api_base_url == "http://localhost:8080/v1beta"
    assert cfg.retry_budget == 12.5
    assert cfg.projects_path == Path(tmp_path / "p.yaml")


def test_max_attempts_must_be_positive():
    with pytest.raises(ValueError):
        Config(max_attempts=0)
