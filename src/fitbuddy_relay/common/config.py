"""Relay configuration.

Settings are resolved once at startup (defaults, then an optional YAML file,
then environment variables) and handed to the app factory as an immutable
``Settings`` instance.
"""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Callable, Mapping

import yaml

from fitbuddy_relay.common.errors import ConfigurationError

CONFIG_PATH_ENV = "FITBUDDY_CONFIG"

@dataclass(frozen=True)
class Settings:
    """Immutable relay settings."""
    api_key: str | None = None
    host: str = "0.0.0.0"
    port: int = 3000
    model: str = "gemini-2.5-flash"
    api_base: str = "https://generativelanguage.googleapis.com"
    max_output_tokens: int = 512
    temperature: float = 0.2
    timeout: float | None = None
    log_level: str = "INFO"

    @property
    def has_credential(self) -> bool:
        return bool(self.api_key)


def normalize_log_level(name: str) -> str:
    """
    Map a stdlib level name (WARN, FATAL, lowercase, ...) to the canonical
    name that both ``logging`` and uvicorn accept.
    """
    level = logging.getLevelName(str(name).strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"unknown log level {name!r}")
    for canonical in ("CRITICAL", "ERROR", "WARNING", "INFO"):
        if level >= getattr(logging, canonical):
            return canonical
    return "DEBUG"

# env var -> (field, parser)
_ENV_FIELDS: dict[str, tuple[str, Callable[[str], Any]]] = {
    "GEMINI_API_KEY": ("api_key", str),
    "HOST": ("host", str),
    "PORT": ("port", int),
    "GEMINI_MODEL": ("model", str),
    "GEMINI_API_BASE": ("api_base", str),
    "GEMINI_MAX_OUTPUT_TOKENS": ("max_output_tokens", int),
    "GEMINI_TEMPERATURE": ("temperature", float),
    "UPSTREAM_TIMEOUT": ("timeout", float),
    "LOG_LEVEL": ("log_level", normalize_log_level),
}

_FIELD_TYPES: dict[str, Callable[[Any], Any]] = {
    "api_key": str,
    "host": str,
    "port": int,
    "model": str,
    "api_base": str,
    "max_output_tokens": int,
    "temperature": float,
    "timeout": float,
    "log_level": normalize_log_level,
}

def load_cfg(path: str) -> dict[str, Any]:
    """
    Load a YAML config mapping.

    Args:
        path: YAML file path. A missing or empty file yields an empty mapping.
    """
    cfg_file = Path(path)
    if not cfg_file.exists():
        return {}
    with open(cfg_file, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")
    return data

def _coerce(name: str, raw: Any, parser: Callable[[Any], Any]) -> Any:
    if raw is None or raw == "":
        return None
    try:
        return parser(raw)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid value for {name}: {raw!r}")

def load_settings(cfg_path: str | None = None, environ: Mapping[str, str] | None = None) -> Settings:
    """
    Build settings from defaults, an optional YAML file and the environment.

    Args:
        cfg_path: YAML config path; falls back to $FITBUDDY_CONFIG when omitted.
        environ: Environment mapping, ``os.environ`` by default.

    Returns:
        Resolved, immutable settings.
    """
    env = os.environ if environ is None else environ
    overrides: dict[str, Any] = {}

    path = cfg_path or env.get(CONFIG_PATH_ENV)
    if path:
        known = {f.name for f in fields(Settings)}
        for key, raw in load_cfg(path).items():
            if key not in known:
                raise ConfigurationError(f"Unknown setting in {path}: {key}")
            overrides[key] = _coerce(key, raw, _FIELD_TYPES[key])

    for var, (name, parser) in _ENV_FIELDS.items():
        if var in env:
            overrides[name] = _coerce(var, env[var], parser)

    # Required-with-default fields never fall back to None.
    overrides = {k: v for k, v in overrides.items() if v is not None or k in ("api_key", "timeout")}
    return replace(Settings(), **overrides)
