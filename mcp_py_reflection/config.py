"""Application configuration with YAML + env vars + CLI override support."""

from __future__ import annotations

import logging
import os
import typing
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)


@dataclass
class ServerConfig:
    mode: str = "stdio"  # stdio | sse | streamable-http
    port: int = 8080
    verbose: bool = False


@dataclass
class ReflectionConfig:
    ignore_access: bool = False
    # os.pathsep-separated directories prepended to sys.path
    search_path: str | None = None


@dataclass
class OutputConfig:
    max_members: int = 50


@dataclass
class AppConfig:
    server: ServerConfig = field(default_factory=ServerConfig)
    reflection: ReflectionConfig = field(default_factory=ReflectionConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


# Mapping: env var name -> (section, field)
_ENV_MAPPING: dict[str, tuple[str, str]] = {
    "MCP_PYREFLECT_MODE": ("server", "mode"),
    "MCP_PYREFLECT_PORT": ("server", "port"),
    "MCP_PYREFLECT_VERBOSE": ("server", "verbose"),
    "MCP_PYREFLECT_IGNORE_ACCESS": ("reflection", "ignore_access"),
    "MCP_PYREFLECT_SEARCH_PATH": ("reflection", "search_path"),
    "MCP_PYREFLECT_MAX_MEMBERS": ("output", "max_members"),
}


def load_config(
    config_path: str | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> AppConfig:
    """Load configuration with priority: YAML < env vars < CLI overrides.

    Args:
        config_path: Path to YAML config file. None to skip.
        cli_overrides: Dict of CLI overrides in format {"section.field": value}.
            None values are skipped (means CLI option was not provided).
    """
    config = AppConfig()

    # 1. Load from YAML
    if config_path:
        _apply_yaml(config, config_path)

    # 2. Apply env vars
    _apply_env_vars(config)

    # 3. Apply CLI overrides
    if cli_overrides:
        _apply_overrides(config, cli_overrides)

    return config


def _apply_yaml(config: AppConfig, config_path: str) -> None:
    """Load YAML file and apply values to config."""
    path = Path(config_path)
    if not path.is_file():
        logger.warning("Config file not found: %s, using defaults", config_path)
        return

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        logger.warning("Config file is not a valid YAML mapping: %s", config_path)
        return

    for section_name, section_data in data.items():
        if not isinstance(section_data, dict):
            continue
        section = getattr(config, section_name, None)
        if section is None:
            logger.debug("Unknown config section: %s", section_name)
            continue
        _set_section_fields(section, section_data)

    logger.info("Loaded config from %s", config_path)


def _apply_env_vars(config: AppConfig) -> None:
    """Apply environment variables to config."""
    for env_name, (section_name, field_name) in _ENV_MAPPING.items():
        value = os.environ.get(env_name)
        if value is None:
            continue
        section = getattr(config, section_name, None)
        if section is None:
            continue
        _set_field_value(section, field_name, value)


def _apply_overrides(config: AppConfig, overrides: dict[str, Any]) -> None:
    """Apply CLI overrides in format {'section.field': value}."""
    for key, value in overrides.items():
        if value is None:
            continue
        parts = key.split(".", 1)
        if len(parts) != 2:
            continue
        section_name, field_name = parts
        section = getattr(config, section_name, None)
        if section is None:
            continue
        _set_field_value(section, field_name, value)


def _set_section_fields(section: Any, data: dict[str, Any]) -> None:
    """Set known, non-null fields on a section dataclass from a YAML mapping."""
    known = {f.name for f in fields(section)}
    for key, value in data.items():
        if key not in known:
            logger.debug("Unknown config key: %s.%s", type(section).__name__, key)
            continue
        if value is not None:
            _set_field_value(section, key, value)


def _set_field_value(section: Any, field_name: str, value: Any) -> None:
    """Set a field on a section dataclass, coercing the value to its declared type."""
    hints = typing.get_type_hints(type(section))
    if field_name not in hints:
        return
    setattr(section, field_name, _coerce_value(value, hints[field_name]))


def _coerce_value(value: Any, type_hint: Any) -> Any:
    """Coerce env/CLI/YAML input to ``bool``, ``int`` or ``str`` (optionals allowed)."""
    if value is None:
        return None

    args = [a for a in typing.get_args(type_hint) if a is not type(None)]
    optional = len(args) == 1
    target = args[0] if optional else type_hint

    if target is bool:
        if isinstance(value, str):
            return value.strip().lower() in ("true", "1", "yes", "on")
        return bool(value)

    if target is int:
        try:
            return int(value)
        except (ValueError, TypeError):
            if optional:
                return None
            raise

    if target is str and isinstance(value, (list, tuple)):
        # YAML list of directories for search_path
        return os.pathsep.join(str(v) for v in value)

    return value


def search_directories(config: ReflectionConfig) -> list[str]:
    """Directories from ``search_path``, in order, blanks dropped."""
    if not config.search_path:
        return []
    return [p for p in config.search_path.split(os.pathsep) if p.strip()]
