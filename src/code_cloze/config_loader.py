"""Locate, read and cache the code-cloze configuration."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

from .config_settings import Config
from .exceptions import ConfigurationError
from .utils.logging import get_logger

CONFIG_ENV_VAR = "CODE_CLOZE_CONFIG"
DEFAULT_CONFIG_NAME = "config.yaml"

_config: Config | None = None


def _search_path(config_path: Path | None) -> list[Path]:
    """Where to look, in order; an explicit path is the only candidate."""
    if config_path is not None:
        return [config_path.expanduser()]
    paths = []
    if env_path := os.getenv(CONFIG_ENV_VAR):
        paths.append(Path(env_path).expanduser())
    paths.append(Path.cwd() / DEFAULT_CONFIG_NAME)
    return paths


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        get_logger(__name__).error(
            "config_yaml_load_error", config_path=str(path), error=str(e)
        )
        raise ConfigurationError(
            f"Failed to parse config file: {path}",
            suggestion=f"Fix the YAML syntax and save the file as UTF-8 ({e})",
            context={"path": str(path)},
        ) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Config file must contain a mapping of settings: {path}",
            context={"path": str(path), "type": type(data).__name__},
        )
    return data


def load_config(config_path: Path | None = None) -> Config:
    """Build a Config from YAML, environment and ``.env``.

    Settings in the YAML file override the environment. Without an
    explicit path, ``$CODE_CLOZE_CONFIG`` and then ``./config.yaml`` are
    tried; finding neither is fine.

    Raises:
        ConfigurationError: explicit path missing, unreadable YAML, or
            invalid settings
    """
    logger = get_logger(__name__)
    search = _search_path(config_path)
    found = next((p for p in search if p.is_file()), None)

    if found is None and config_path is not None:
        raise ConfigurationError(
            f"Config file not found: {config_path}",
            suggestion="Check the --config path",
        )

    settings = _read_yaml(found) if found is not None else {}
    logger.debug(
        "config_source",
        config_path=str(found) if found else None,
        searched=[str(p) for p in search],
        keys=sorted(settings),
    )
    return Config(**settings)


def get_config() -> Config:
    """Process-wide config, loaded on first access."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: Config) -> None:
    global _config
    _config = config


def reset_config() -> None:
    """Forget the cached config (tests)."""
    global _config
    _config = None


__all__ = ["CONFIG_ENV_VAR", "get_config", "load_config", "reset_config", "set_config"]
