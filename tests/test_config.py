"""Tests for settings resolution."""

import tempfile
from pathlib import Path

import pytest

from kudos_wall.config import DEFAULT_API_BASE_URL, ConfigError, load_settings


def _write_config(tmpdir: str, text: str) -> Path:
    path = Path(tmpdir) / "config.yaml"
    path.write_text(text)
    return path


def test_defaults_without_env_or_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        settings = load_settings(env={"KUDOS_HOME": tmpdir})
        assert settings.api_base_url == DEFAULT_API_BASE_URL
        assert settings.token_ttl_days == 30
        assert settings.demo_mode is False
        assert settings.log_level == "WARNING"
        assert settings.home_dir == Path(tmpdir)
        assert settings.storage_path == Path(tmpdir) / "session.json"
        assert settings.api_paths.kudo_cards == "/kudocards"


def test_config_file_values_are_used():
    with tempfile.TemporaryDirectory() as tmpdir:
        _write_config(
            tmpdir,
            "api_base_url: https://kudos.example.com/api/\ntoken_ttl_days: 7\ndemo_mode: true\nlog_level: info\n",
        )
        settings = load_settings(env={"KUDOS_HOME": tmpdir})
        assert settings.api_base_url == "https://kudos.example.com/api"
        assert settings.token_ttl_days == 7
        assert settings.demo_mode is True
        assert settings.log_level == "INFO"


def test_env_wins_over_config_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        _write_config(tmpdir, "api_base_url: https://from-file.example.com\n")
        settings = load_settings(
            env={
                "KUDOS_HOME": tmpdir,
                "KUDOS_API_BASE_URL": "https://from-env.example.com",
                "KUDOS_DEMO_MODE": "yes",
            }
        )
        assert settings.api_base_url == "https://from-env.example.com"
        assert settings.demo_mode is True


def test_zero_ttl_means_no_expiry():
    with tempfile.TemporaryDirectory() as tmpdir:
        settings = load_settings(env={"KUDOS_HOME": tmpdir, "KUDOS_TOKEN_TTL_DAYS": "0"})
        assert settings.token_ttl_days is None


def test_non_integer_ttl_is_rejected():
    with tempfile.TemporaryDirectory() as tmpdir:
        with pytest.raises(ConfigError):
            load_settings(env={"KUDOS_HOME": tmpdir, "KUDOS_TOKEN_TTL_DAYS": "soon"})


def test_negative_ttl_is_rejected():
    with tempfile.TemporaryDirectory() as tmpdir:
        with pytest.raises(ConfigError, match="0 or more"):
            load_settings(env={"KUDOS_HOME": tmpdir, "KUDOS_TOKEN_TTL_DAYS": "-3"})


def test_config_file_must_be_a_mapping():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = _write_config(tmpdir, "- just\n- a list\n")
        with pytest.raises(ConfigError):
            load_settings(config_path=path, env={"KUDOS_HOME": tmpdir})


def test_invalid_yaml_is_a_config_error():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = _write_config(tmpdir, "api_base_url: [unclosed\n")
        with pytest.raises(ConfigError):
            load_settings(config_path=path, env={"KUDOS_HOME": tmpdir})
