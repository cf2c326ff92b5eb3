"""Core infrastructure layer - no business logic dependencies.

This module provides foundation-level services:
- Configuration management (TOML)
- Logging setup (Loguru)
- Path confinement for stored files

Clean architecture principle: The core layer has no dependencies on
domain or application layers.
"""

# Configuration
from .config import (
    Config,
    ConfigError,
    LoggingConfig,
    ServerConfig,
    StorageConfig,
    UploadConfig,
    create_default_config,
    get_config_dir,
    get_config_path,
    get_data_dir,
    load_config,
)

# Logging
from .output import setup_logging_from_config, setup_loguru

# Path security
from .path_security import is_path_within_dir, safe_child_path

__all__ = [
    "Config",
    "ConfigError",
    "LoggingConfig",
    "ServerConfig",
    "StorageConfig",
    "UploadConfig",
    "create_default_config",
    "get_config_dir",
    "get_config_path",
    "get_data_dir",
    "load_config",
    "setup_logging_from_config",
    "setup_loguru",
    "is_path_within_dir",
    "safe_child_path",
]
