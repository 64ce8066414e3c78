"""Configuration management for altfeed."""

from .loader import Config, default_config_path, load_config, save_config
from .models import CacheConfig, ConfigModel, ServerConfig, UpstreamConfig

__all__ = [
    "Config",
    "ConfigModel",
    "UpstreamConfig",
    "CacheConfig",
    "ServerConfig",
    "default_config_path",
    "load_config",
    "save_config",
]
