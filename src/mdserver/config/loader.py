"""YAML config loading and validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from mdserver.config.hierarchy import load_config_hierarchy
from mdserver.config.schema import ServerConfig
from mdserver.errors.exceptions import ConfigError


def load_yaml(path: str | Path) -> dict[str, Any]:
    """Load any YAML file safely."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"YAML file not found: {path}")

    with open(path) as f:
        raw = yaml.safe_load(f)

    if not isinstance(raw, dict):
        raise ValueError(f"Expected YAML mapping, got {type(raw).__name__} in {path}")

    return raw


def load_server_config(
    config_file: str | Path | None = None,
    **runtime_overrides: Any,
) -> ServerConfig:
    """Merge every configuration source and validate the result.

    An explicit ``config_file`` sits between the environment and the runtime
    overrides: it beats everything found on disk or in MDSERVER_* variables,
    but an explicitly passed argument still wins.
    """
    overrides: dict[str, Any] = {}
    if config_file is not None:
        try:
            overrides.update(load_yaml(config_file))
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot load config file {config_file}: {e}") from e
    overrides.update({k: v for k, v in runtime_overrides.items() if v is not None})

    merged = load_config_hierarchy(**overrides)
    known = {k: v for k, v in merged.items() if k in ServerConfig.model_fields}
    try:
        return ServerConfig(**known)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
