"""Configuration hierarchy — server settings merged from every source.

Each layer overrides the one before it: built-in defaults, the user's
``~/.mdserver/config.yaml``, the nearest ``mdserver.yaml`` at or above the
working directory, ``MDSERVER_*`` variables, and finally explicit arguments.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import yaml

from mdserver.config.defaults import get_defaults

logger = logging.getLogger(__name__)

_GLOBAL_CONFIG_PATH = Path.home() / ".mdserver" / "config.yaml"
_PROJECT_CONFIG_NAME = "mdserver.yaml"

_ENV_MAP: dict[str, str] = {
    "MDSERVER_LISTEN": "listen",
    "MDSERVER_STATIC_DIR": "static_dir",
    "MDSERVER_UPLOAD_DIR": "upload_dir",
    "MDSERVER_POSTS_DIR": "posts_dir",
    "MDSERVER_TEMPLATES_DIR": "templates_dir",
    "MDSERVER_COALESCE_RENDERS": "coalesce_renders",
    "MDSERVER_LOG_LEVEL": "log_level",
}

_BOOL_KEYS = frozenset({"coalesce_renders"})
_TRUTHY = frozenset({"1", "true", "yes", "on"})


def load_config_hierarchy(**runtime_overrides: Any) -> dict[str, Any]:
    """Resolve the server settings; ``None`` overrides are treated as unset."""
    config = get_defaults()
    for path in _config_files():
        config.update(_load_yaml_config(path) or {})
    config.update(_load_env_vars())
    config.update({k: v for k, v in runtime_overrides.items() if v is not None})
    return config


def _config_files() -> Iterator[Path]:
    yield _GLOBAL_CONFIG_PATH
    project = _find_project_config()
    if project is not None:
        yield project


def _find_project_config() -> Path | None:
    here = Path.cwd()
    return next(
        (d / _PROJECT_CONFIG_NAME for d in (here, *here.parents)
         if (d / _PROJECT_CONFIG_NAME).is_file()),
        None,
    )


def _load_yaml_config(path: Path) -> dict[str, Any] | None:
    """Parse ``path`` as a YAML mapping; unusable files are logged and skipped."""
    if not path.is_file():
        return None
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        logger.warning("Skipping config %s: %s", path, e)
        return None
    if not isinstance(data, dict):
        logger.warning("Skipping config %s: top level is not a mapping", path)
        return None
    logger.debug("Loaded config %s", path)
    return data


def _load_env_vars() -> dict[str, Any]:
    return {
        key: _coerce_env_value(key, os.environ[name])
        for name, key in _ENV_MAP.items()
        if name in os.environ
    }


def _coerce_env_value(key: str, value: str) -> Any:
    if key in _BOOL_KEYS:
        return value.strip().lower() in _TRUTHY
    return value
