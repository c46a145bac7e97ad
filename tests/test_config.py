"""Tests for configuration management."""

from __future__ import annotations

from pathlib import Path

import pytest

from headmeta.config import Config, FetchConfig, load_config


def test_default_config() -> None:
    """Default config should have sensible defaults."""
    config = Config()
    assert config.fetch.max_redirects == 5
    assert config.fetch.timeout == 30.0
    assert config.fetch.verify_tls is True
    assert config.fetch.user_agent.startswith("headmeta/")
    assert config.log.level == "warning"


def test_load_config_no_file(tmp_config_dir: Path) -> None:
    """Loading config without a file should return defaults."""
    config = load_config(tmp_config_dir / "nonexistent.toml")
    assert config == Config()


def test_load_config_from_toml(tmp_config_dir: Path) -> None:
    """Loading config from a TOML file should override defaults."""
    config_file = tmp_config_dir / "config.toml"
    config_file.write_text("""
[fetch]
user_agent = "MyBot/2.0"
max_redirects = 3
timeout = 5.5

[log]
level = "debug"
""")
    config = load_config(config_file)
    assert config.fetch.user_agent == "MyBot/2.0"
    assert config.fetch.max_redirects == 3
    assert config.fetch.timeout == 5.5
    assert config.log.level == "debug"
    # Unset values remain default
    assert config.fetch.verify_tls is True
    assert config.fetch.max_head_chars == FetchConfig().max_head_chars


def test_env_override(tmp_config_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Environment variables should override TOML values."""
    config_file = tmp_config_dir / "config.toml"
    config_file.write_text("[fetch]\nmax_redirects = 2\n")

    monkeypatch.setenv("HEADMETA_FETCH_MAX_REDIRECTS", "4")
    monkeypatch.setenv("HEADMETA_FETCH_VERIFY_TLS", "false")
    monkeypatch.setenv("HEADMETA_FETCH_TIMEOUT", "12")
    config = load_config(config_file)
    assert config.fetch.max_redirects == 4
    assert config.fetch.verify_tls is False
    assert config.fetch.timeout == 12.0


def test_invalid_env_value_ignored(
    tmp_config_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("HEADMETA_FETCH_MAX_REDIRECTS", "lots")
    config = load_config(tmp_config_dir / "none.toml")
    assert config.fetch.max_redirects == 5


def test_out_of_range_clamped(tmp_config_dir: Path) -> None:
    config_file = tmp_config_dir / "config.toml"
    config_file.write_text("[fetch]\nmax_redirects = 100\ntimeout = 0.0\n")
    config = load_config(config_file)
    assert config.fetch.max_redirects == 20
    assert config.fetch.timeout == 0.1


def test_invalid_log_level_uses_default(tmp_config_dir: Path) -> None:
    config_file = tmp_config_dir / "config.toml"
    config_file.write_text('[log]\nlevel = "verbose"\n')
    config = load_config(config_file)
    assert config.log.level == "warning"
