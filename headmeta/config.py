"""Configuration management for headmeta.

Loads settings from ~/.headmeta/config.toml with environment variable overrides.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from dataclasses import fields as dataclass_fields
from pathlib import Path
from typing import TypeVar

import structlog

from headmeta import __version__

logger = structlog.get_logger()

T = TypeVar("T")

# Default paths
DEFAULT_CONFIG_DIR = Path.home() / ".headmeta"
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.toml"


@dataclass(frozen=True)
class FetchConfig:
    """HTTP fetch behavior."""

    user_agent: str = f"headmeta/{__version__}"
    max_redirects: int = 5
    timeout: float = 30.0  # seconds, per network operation
    max_head_chars: int = 1024 * 1024  # stop buffering without </head>
    verify_tls: bool = True


@dataclass(frozen=True)
class LogConfig:
    """Logging settings."""

    level: str = "warning"


@dataclass(frozen=True)
class Config:
    """Root configuration container."""

    fetch: FetchConfig = field(default_factory=FetchConfig)
    log: LogConfig = field(default_factory=LogConfig)


def _env_override(section: str, key: str) -> str | None:
    """Check for HEADMETA_{SECTION}_{KEY} environment variable."""
    env_key = f"HEADMETA_{section.upper()}_{key.upper()}"
    return os.environ.get(env_key)


def _coerce(value: str, target_type: type) -> object:
    """Coerce a string value to the target type."""
    if target_type is bool:
        return value.lower() in ("true", "1", "yes")
    if target_type is int:
        return int(value)
    if target_type is float:
        return float(value)
    return value


# Configuration value constraints
_VALUE_CONSTRAINTS: dict[str, tuple[float, float]] = {
    "max_redirects": (0, 20),
    "timeout": (0.1, 600.0),
    "max_head_chars": (1024, 64 * 1024 * 1024),
}

# Allowed values for string enums
_ALLOWED_VALUES: dict[str, frozenset[str]] = {
    "level": frozenset({"debug", "info", "warning", "error", "critical"}),
}

_FIELD_TYPES: dict[str, type] = {
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
}


def _validate_value(key: str, value: object) -> object:
    """Validate a config value against known constraints."""
    if (
        key in _VALUE_CONSTRAINTS
        and isinstance(value, (int, float))
        and not isinstance(value, bool)
    ):
        lo, hi = _VALUE_CONSTRAINTS[key]
        if not (lo <= value <= hi):
            logger.warning(
                "config_value_out_of_range",
                key=key,
                value=value,
                min=lo,
                max=hi,
            )
            # Clamp to valid range
            return type(value)(max(lo, min(hi, value)))
    if (
        key in _ALLOWED_VALUES
        and isinstance(value, str)
        and value.lower() not in _ALLOWED_VALUES[key]
    ):
        logger.warning(
            "config_invalid_value",
            key=key,
            value=value,
            allowed=sorted(_ALLOWED_VALUES[key]),
        )
        return None  # Will use default
    return value


def _build_section(
    cls: type[T], toml_section: dict[str, object], section_name: str
) -> T:
    """Build a dataclass instance from TOML data + env overrides."""
    kwargs: dict[str, object] = {}
    for f in dataclass_fields(cls):  # type: ignore[arg-type]
        raw = toml_section.get(f.name)
        env_val = _env_override(section_name, f.name)
        if env_val is not None:
            # Annotations are strings under postponed evaluation
            target = _FIELD_TYPES.get(str(f.type), type(f.default))
            try:
                raw = _coerce(env_val, target)
            except ValueError:
                logger.warning(
                    "config_env_invalid",
                    section=section_name,
                    key=f.name,
                    value=env_val,
                )
                raw = None
        if raw is not None:
            validated = _validate_value(f.name, raw)
            if validated is not None:
                kwargs[f.name] = validated
    return cls(**kwargs)


def load_config(config_path: Path | None = None) -> Config:
    """Load configuration from TOML file with environment variable overrides.

    Priority: env vars > config.toml > defaults.

    Args:
        config_path: Path to config file. Defaults to ~/.headmeta/config.toml.

    Returns:
        Populated Config instance.
    """
    path = config_path or DEFAULT_CONFIG_PATH
    raw: dict[str, object] = {}

    if path.exists():
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        logger.debug("config_loaded", path=str(path))
    else:
        logger.debug("config_default", path=str(path), reason="file not found")

    fetch = _build_section(FetchConfig, raw.get("fetch", {}), "fetch")  # type: ignore[arg-type]
    log = _build_section(LogConfig, raw.get("log", {}), "log")  # type: ignore[arg-type]

    return Config(fetch=fetch, log=log)
