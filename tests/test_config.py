from __future__ import annotations

from pathlib import Path

import pytest

from fitbuddy_relay.common.config import Settings, load_cfg, load_settings
from fitbuddy_relay.common.errors import ConfigurationError


def test_defaults_without_environment() -> None:
    settings = load_settings(environ={})
    assert settings == Settings()
    assert settings.port == 3000
    assert settings.max_output_tokens == 512
    assert settings.timeout is None
    assert not settings.has_credential


def test_environment_overrides() -> None:
    settings = load_settings(environ={
        "GEMINI_API_KEY": "secret",
        "PORT": "8080",
        "GEMINI_MAX_OUTPUT_TOKENS": "1024",
        "UPSTREAM_TIMEOUT": "30",
    })
    assert settings.has_credential
    assert settings.port == 8080
    assert settings.max_output_tokens == 1024
    assert settings.timeout == 30.0


def test_empty_key_counts_as_absent() -> None:
    assert not load_settings(environ={"GEMINI_API_KEY": ""}).has_credential


def test_malformed_number_is_configuration_error() -> None:
    with pytest.raises(ConfigurationError):
        load_settings(environ={"PORT": "not-a-port"})


def test_settings_are_immutable() -> None:
    settings = Settings()
    with pytest.raises(AttributeError):
        settings.port = 1  # type: ignore[misc]


def test_repo_config_file_loads() -> None:
    cfg = load_cfg("configs/relay.yaml")
    assert cfg["model"] == "gemini-2.5-flash"
    assert "api_key" not in cfg


def test_yaml_then_environment(tmp_path: Path) -> None:
    cfg = tmp_path / "relay.yaml"
    cfg.write_text("port: 4000\ntemperature: 0.7\n", encoding="utf-8")
    settings = load_settings(str(cfg), environ={"PORT": "5000"})
    assert settings.port == 5000
    assert settings.temperature == 0.7


def test_config_path_from_environment(tmp_path: Path) -> None:
    cfg = tmp_path / "relay.yaml"
    cfg.write_text("model: gemini-2.5-pro\n", encoding="utf-8")
    settings = load_settings(environ={"FITBUDDY_CONFIG": str(cfg)})
    assert settings.model == "gemini-2.5-pro"


def test_unknown_yaml_key_is_rejected(tmp_path: Path) -> None:
    cfg = tmp_path / "relay.yaml"
    cfg.write_text("colour: blue\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_settings(str(cfg), environ={})


def test_missing_or_empty_file_is_empty_mapping(tmp_path: Path) -> None:
    assert load_cfg(str(tmp_path / "absent.yaml")) == {}
    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")
    assert load_cfg(str(empty)) == {}


@pytest.mark.parametrize(
    "raw, expected",
    [("WARN", "WARNING"), ("warning", "WARNING"), ("FATAL", "CRITICAL"), ("debug", "DEBUG"), (" info ", "INFO")],
)
def test_log_level_aliases_are_normalized(raw: str, expected: str) -> None:
    assert load_settings(environ={"LOG_LEVEL": raw}).log_level == expected


def test_unknown_log_level_is_configuration_error() -> None:
    with pytest.raises(ConfigurationError):
        load_settings(environ={"LOG_LEVEL": "chatty"})
