"""Tests for Settings loading from the environment."""

import os

import pytest
from pydantic import ValidationError
from unittest.mock import patch

from monarch_proxy.config import Settings


ENV_VARS = ("PROXY_API_KEY", "HOST", "PORT", "LOG_LEVEL", "CORS_ORIGINS", "UPSTREAM_TIMEOUT")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def _from_env(tmp_path):
    """Settings.from_env pointed at a .env that does not exist."""
    return Settings.from_env(env_file=tmp_path / "missing.env")


class TestDefaults:
    def test_defaults(self, tmp_path):
        s = _from_env(tmp_path)
        assert s.PROXY_API_KEY is None
        assert s.HOST == "0.0.0.0"
        assert s.PORT == 3000
        assert s.UPSTREAM_TIMEOUT == 30.0
        assert s.LOG_LEVEL == "INFO"
        assert s.CORS_ORIGINS == ["*"]

    def test_log_level_validated_on_construction(self):
        assert Settings(LOG_LEVEL=" error ").LOG_LEVEL == "ERROR"
        with pytest.raises(ValidationError):
            Settings(LOG_LEVEL="loud")

    def test_frozen(self):
        s = Settings(PROXY_API_KEY="secret")
        with pytest.raises(ValidationError):
            s.PROXY_API_KEY = "other"


class TestFromEnv:
    def test_proxy_api_key(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PROXY_API_KEY", "secret")
        assert _from_env(tmp_path).PROXY_API_KEY == "secret"

    def test_empty_proxy_api_key_is_unset(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PROXY_API_KEY", "")
        assert _from_env(tmp_path).PROXY_API_KEY is None

    def test_port(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        assert _from_env(tmp_path).PORT == 8080

    def test_invalid_port_raises(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PORT", "eighty")
        with pytest.raises(ValueError):
            _from_env(tmp_path)

    def test_log_level_uppercased(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert _from_env(tmp_path).LOG_LEVEL == "DEBUG"

    @pytest.mark.parametrize("raw", ["verbose", "WARN", "trace"])
    def test_unknown_log_level_raises(self, tmp_path, monkeypatch, raw):
        monkeypatch.setenv("LOG_LEVEL", raw)
        with pytest.raises(ValidationError, match="LOG_LEVEL must be one of"):
            _from_env(tmp_path)

    def test_cors_origins_split(self, tmp_path, monkeypatch):
        monkeypatch.setenv("CORS_ORIGINS", "http://a.com, http://b.com,")
        assert _from_env(tmp_path).CORS_ORIGINS == ["http://a.com", "http://b.com"]

    @pytest.mark.parametrize("raw,expected", [("12.5", 12.5), ("0", None), ("", None)])
    def test_upstream_timeout(self, tmp_path, monkeypatch, raw, expected):
        monkeypatch.setenv("UPSTREAM_TIMEOUT", raw)
        assert _from_env(tmp_path).UPSTREAM_TIMEOUT == expected

    def test_reads_dotenv_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("PROXY_API_KEY=from-dotenv\nPORT=4000\n")
        with patch.dict(os.environ):
            s = Settings.from_env(env_file=env_file)
        assert s.PROXY_API_KEY == "from-dotenv"
        assert s.PORT == 4000

    def test_process_env_wins_over_dotenv(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("PROXY_API_KEY=from-dotenv\n")
        monkeypatch.setenv("PROXY_API_KEY", "from-process")
        with patch.dict(os.environ):
            s = Settings.from_env(env_file=env_file)
        assert s.PROXY_API_KEY == "from-process"
