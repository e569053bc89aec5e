"""Tests for config.py: env loading, credential selection, startup checks."""

import base64
import logging

import pytest

from wpengine_mcp import config
from wpengine_mcp.exceptions import SetupError


class TestLoadEnv:
    @pytest.fixture(autouse=True)
    def _clean_environ(self, monkeypatch):
        """Remove known keys from os.environ so file-parsing tests are isolated."""
        for key in config.KNOWN_ENV_KEYS:
            monkeypatch.delenv(key, raising=False)

    def test_basic_key_value(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("WPENGINE_USERNAME=alice\nWPENGINE_PASSWORD=s3cret\n")
        monkeypatch.setattr(config, "ENV_PATH", str(env_file))
        result = config.load_env()
        assert result == {"WPENGINE_USERNAME": "alice", "WPENGINE_PASSWORD": "s3cret"}

    def test_skips_comments_and_blank_lines(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("# comment\n\nWPENGINE_API_TOKEN=tok\nnot a pair\n")
        monkeypatch.setattr(config, "ENV_PATH", str(env_file))
        assert config.load_env() == {"WPENGINE_API_TOKEN": "tok"}

    def test_value_may_contain_equals(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("WPENGINE_PASSWORD=a=b=c\n")
        monkeypatch.setattr(config, "ENV_PATH", str(env_file))
        assert config.load_env()["WPENGINE_PASSWORD"] == "a=b=c"

    def test_missing_file_returns_empty(self, tmp_path, monkeypatch):
        monkeypatch.setattr(config, "ENV_PATH", str(tmp_path / "missing.env"))
        assert config.load_env() == {}

    def test_environ_fallback(self, tmp_path, monkeypatch):
        monkeypatch.setattr(config, "ENV_PATH", str(tmp_path / "missing.env"))
        monkeypatch.setenv("WPENGINE_API_TOKEN", "from-env")
        assert config.load_env()["WPENGINE_API_TOKEN"] == "from-env"

    def test_file_wins_over_environ(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("WPENGINE_API_TOKEN=from-file\n")
        monkeypatch.setattr(config, "ENV_PATH", str(env_file))
        monkeypatch.setenv("WPENGINE_API_TOKEN", "from-env")
        assert config.load_env()["WPENGINE_API_TOKEN"] == "from-file"

    def test_unknown_environ_keys_ignored(self, tmp_path, monkeypatch):
        monkeypatch.setattr(config, "ENV_PATH", str(tmp_path / "missing.env"))
        monkeypatch.setenv("SOMETHING_ELSE", "x")
        assert "SOMETHING_ELSE" not in config.load_env()


class TestEnvParsing:
    def test_env_bool(self, monkeypatch):
        monkeypatch.setattr(config, "env", {"WPENGINE_HTTP_LOG": "Yes"})
        assert config._env_bool("WPENGINE_HTTP_LOG") is True

    def test_env_bool_default(self):
        assert config._env_bool("WPENGINE_HTTP_LOG", default=True) is True

    def test_env_int_invalid_falls_back(self, monkeypatch):
        monkeypatch.setattr(config, "env", {"WPENGINE_HTTP_TIMEOUT_SECONDS": "soon"})
        assert config._env_int("WPENGINE_HTTP_TIMEOUT_SECONDS", 30) == 30

    def test_env_int(self, monkeypatch):
        monkeypatch.setattr(config, "env", {"WPENGINE_HTTP_TIMEOUT_SECONDS": "12"})
        assert config._env_int("WPENGINE_HTTP_TIMEOUT_SECONDS", 30) == 12


class TestAuthScheme:
    def test_pair_selects_basic(self):
        assert config.auth_scheme() == config.AUTH_BASIC

    def test_token_selects_bearer(self, monkeypatch):
        monkeypatch.setattr(config, "USERNAME", "")
        monkeypatch.setattr(config, "PASSWORD", "")
        monkeypatch.setattr(config, "API_TOKEN", "tok")
        assert config.auth_scheme() == config.AUTH_BEARER

    def test_pair_wins_over_token(self, monkeypatch):
        monkeypatch.setattr(config, "API_TOKEN", "tok")
        assert config.auth_scheme() == config.AUTH_BASIC

    def test_half_pair_with_token_uses_token(self, monkeypatch):
        monkeypatch.setattr(config, "PASSWORD", "")
        monkeypatch.setattr(config, "API_TOKEN", "tok")
        assert config.auth_scheme() == config.AUTH_BEARER

    def test_nothing_configured(self, monkeypatch):
        monkeypatch.setattr(config, "USERNAME", "")
        monkeypatch.setattr(config, "PASSWORD", "")
        assert config.auth_scheme() is None


class TestAuthHeader:
    def test_basic_header(self):
        expected = base64.b64encode(b"fake-user:fake-pass").decode("ascii")
        assert config.auth_header() == f"Basic {expected}"

    def test_bearer_header(self, monkeypatch):
        monkeypatch.setattr(config, "USERNAME", "")
        monkeypatch.setattr(config, "API_TOKEN", "tok")
        assert config.auth_header() == "Bearer tok"

    def test_no_credentials_raises(self, monkeypatch):
        monkeypatch.setattr(config, "USERNAME", "")
        monkeypatch.setattr(config, "PASSWORD", "")
        with pytest.raises(SetupError):
            config.auth_header()


class TestCheckConfig:
    def test_valid_config_returns_scheme(self):
        assert config.check_config() == config.AUTH_BASIC

    def test_http_base_url_rejected(self, monkeypatch):
        monkeypatch.setattr(config, "BASE_URL", "http://api.wpengineapi.com/v1")
        with pytest.raises(SetupError) as exc_info:
            config.check_config()
        assert "HTTPS" in str(exc_info.value)
        assert exc_info.value.exit_code == 2

    def test_missing_credentials(self, monkeypatch):
        monkeypatch.setattr(config, "USERNAME", "")
        monkeypatch.setattr(config, "PASSWORD", "")
        with pytest.raises(SetupError) as exc_info:
            config.check_config()
        assert str(exc_info.value).startswith("[SETUP_NEEDED]")

    def test_partial_pair_names_missing_variable(self, monkeypatch):
        monkeypatch.setattr(config, "PASSWORD", "")
        with pytest.raises(SetupError) as exc_info:
            config.check_config()
        assert "WPENGINE_PASSWORD" in str(exc_info.value)

    def test_partial_pair_does_not_echo_secret(self, monkeypatch):
        monkeypatch.setattr(config, "USERNAME", "")
        monkeypatch.setattr(config, "PASSWORD", "hunter2")
        with pytest.raises(SetupError) as exc_info:
            config.check_config()
        assert "hunter2" not in str(exc_info.value)

    def test_non_positive_timeout(self, monkeypatch):
        monkeypatch.setattr(config, "HTTP_TIMEOUT_SECONDS", 0)
        with pytest.raises(SetupError):
            config.check_config()


class TestConfigureLogging:
    def test_sets_level_and_single_handler(self):
        logger = config.configure_logging("DEBUG")
        config.configure_logging("INFO")
        assert logger.name == "wpengine_mcp"
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1
