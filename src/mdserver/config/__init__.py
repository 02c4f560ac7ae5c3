"""Configuration — defaults, YAML files, environment and runtime overrides."""

from mdserver.config.hierarchy import load_config_hierarchy
from mdserver.config.loader import load_server_config, load_yaml
from mdserver.config.schema import ServerConfig

__all__ = ["ServerConfig", "load_config_hierarchy", "load_server_config", "load_yaml"]
