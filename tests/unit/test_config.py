"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError

from learnhub.config import Config


@pytest.fixture
def base_env(monkeypatch):
    monkeypatch.setenv("LEARNHUB_DATABASE_URL", "mongodb://localhost:27017/learnhub")
    monkeypatch.setenv("LEARNHUB_HOST", "127.0.0.1")
    monkeypatch.setenv("LEARNHUB_PORT", "3100")
    monkeypatch.setenv("LEARNHUB_DEBUG", "false")
    monkeypatch.delenv("LEARNHUB_SECRET_KEY", raising=False)


def test_missing_secret_key_is_fatal(base_env):
    with pytest.raises(ValidationError, match="secret_key"):
        Config(_env_file=None)


def test_empty_secret_key_is_fatal(base_env, monkeypatch):
    monkeypatch.setenv("LEARNHUB_SECRET_KEY", "")
    with pytest.raises(ValidationError, match="secret_key"):
        Config(_env_file=None)


def test_defaults(base_env, monkeypatch):
    monkeypatch.setenv("LEARNHUB_SECRET_KEY", "s3cret")
    config = Config(_env_file=None)
    assert config.secret_key == "s3cret"
    assert config.session_idle_minutes == 60
    assert config.token_lifetime_hours == 24
    assert config.port == 3100


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("LEARNHUB_SESSION_IDLE_MINUTES", "0"),
        ("LEARNHUB_SESSION_IDLE_MINUTES", "-5"),
        ("LEARNHUB_TOKEN_LIFETIME_HOURS", "-1"),
        ("LEARNHUB_SESSION_SWEEP_INTERVAL_SECONDS", "-1"),
    ],
)
def test_invalid_session_settings_are_fatal(base_env, monkeypatch, name, value):
    monkeypatch.setenv("LEARNHUB_SECRET_KEY", "s3cret")
    monkeypatch.setenv(name, value)
    with pytest.raises(ValidationError, match=name.removeprefix("LEARNHUB_").lower()):
        Config(_env_file=None)


def test_zero_token_lifetime_allowed(base_env, monkeypatch):
    monkeypatch.setenv("LEARNHUB_SECRET_KEY", "s3cret")
    monkeypatch.setenv("LEARNHUB_TOKEN_LIFETIME_HOURS", "0")
    assert Config(_env_file=None).token_lifetime_hours == 0
