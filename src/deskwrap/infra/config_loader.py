"""Infrastructure: YAML configuration loading.

Lookup order for the configuration file:

1. An explicit path (``deskwrap --config PATH``).
2. ``$DESKWRAP_CONFIG``.
3. ``$XDG_CONFIG_HOME/deskwrap/config.yaml``.
4. ``~/.config/deskwrap/config.yaml``.

A missing file (other than an explicit one) means "use the defaults".
File contents are deep-merged over the defaults and validated by
:meth:`~deskwrap.core.config.DeskWrapConfig.from_mapping`.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from deskwrap.core.config import DeskWrapConfig
from deskwrap.exceptions import ConfigError, EnvironmentError

CONFIG_ENV_VAR: str = "DESKWRAP_CONFIG"
CONFIG_FILENAME: str = "config.yaml"


def default_config_path() -> Path:
    """Return the configuration path implied by the environment."""
    explicit = os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        return Path(explicit).expanduser()
    xdg_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg_home).expanduser() if xdg_home else Path.home() / ".config"
    return base / "deskwrap" / CONFIG_FILENAME


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return *base* updated recursively with *override*."""
    result = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _import_yaml() -> Any:
    try:
        import yaml
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "PyYAML is not installed. Install with: pip install pyyaml",
        ) from exc
    return yaml


def read_config_file(path: Path) -> dict[str, Any]:
    """Parse *path* and return its top-level mapping."""
    yaml = _import_yaml()
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(
            f"Cannot read configuration file {path}: {exc.strerror or exc}",
        ) from exc
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(
            f"Invalid YAML in {path}: {exc}",
            hint="Fix the syntax or remove the file to use the defaults.",
        ) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file {path} must contain a mapping.")
    return data


def load_config(path: str | os.PathLike[str] | None = None) -> tuple[DeskWrapConfig, Path | None]:
    """Load the configuration and report which file it came from.

    Returns
    -------
    tuple[DeskWrapConfig, Path | None]
        The validated configuration and the file it was read from, or
        ``None`` when the defaults were used.

    Raises
    ------
    ConfigError
        When an explicit *path* does not exist or any file is invalid.
    """
    if path is not None:
        cfg_path = Path(path).expanduser()
        if not cfg_path.is_file():
            raise ConfigError(f"Configuration file {cfg_path} does not exist.")
    else:
        cfg_path = default_config_path()
        if not cfg_path.is_file():
            return DeskWrapConfig(), None

    merged = deep_merge(DeskWrapConfig().to_mapping(), read_config_file(cfg_path))
    return DeskWrapConfig.from_mapping(merged), cfg_path
