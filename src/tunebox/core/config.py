"""
Configuration management for Tunebox
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


class ConfigError(ValueError):
    """Raised when configuration values are invalid."""

    pass


@dataclass
class ServerConfig:
    """Configuration for the HTTP server."""

    host: str = "0.0.0.0"
    port: int = 3000
    allowed_origins: List[str] = field(
        default_factory=lambda: ["http://localhost:3000"]
    )

    def validate(self) -> None:
        """Validate server configuration values.

        Raises:
            ConfigError: If the port is out of range
        """
        if not 0 < self.port < 65536:
            raise ConfigError(f"Invalid port: {self.port}")


@dataclass
class StorageConfig:
    """Configuration for track storage locations."""

    data_dir: Optional[str] = None  # Default: ~/.local/share/tunebox
    media_dir: Optional[str] = None  # Default: <data_dir>/data
    library_file: Optional[str] = None  # Default: <data_dir>/music.json
    public_dir: Optional[str] = None  # Static front-end, default: <project>/public

    @property
    def data_path(self) -> Path:
        return Path(self.data_dir).expanduser() if self.data_dir else get_data_dir()

    @property
    def media_path(self) -> Path:
        if self.media_dir:
            return Path(self.media_dir).expanduser()
        return self.data_path / "data"

    @property
    def library_path(self) -> Path:
        if self.library_file:
            return Path(self.library_file).expanduser()
        return self.data_path / "music.json"

    @property
    def public_path(self) -> Path:
        if self.public_dir:
            return Path(self.public_dir).expanduser()
        return PROJECT_ROOT / "public"


@dataclass
class UploadConfig:
    """Configuration for the upload pipeline."""

    max_files: int = 10
    max_file_size_mb: int = 50

    @property
    def max_file_size(self) -> int:
        """Per-file ceiling in bytes."""
        return self.max_file_size_mb * 1024 * 1024

    def validate(self) -> None:
        """Validate upload configuration values.

        Raises:
            ConfigError: If limits are not positive
        """
        if self.max_files < 1:
            raise ConfigError(f"max_files must be positive, got {self.max_files}")
        if self.max_file_size_mb < 1:
            raise ConfigError(
                f"max_file_size_mb must be positive, got {self.max_file_size_mb}"
            )


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = None  # Default: <data_dir>/tunebox.log
    max_file_size_mb: int = 10  # Maximum log file size before rotation
    backup_count: int = 5  # Number of backup files to keep
    console_output: bool = True  # Also output to stderr


@dataclass
class Config:
    """Main configuration object."""

    server: ServerConfig = field(default_factory=ServerConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    upload: UploadConfig = field(default_factory=UploadConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# Project root (where pyproject.toml and public/ live in a source checkout)
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent.parent


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "tunebox"
    return Path.home() / ".config" / "tunebox"


def get_config_path() -> Path:
    """Get the main configuration file path.

    Checks for config.toml in the following order:
    1. Current working directory
    2. XDG_CONFIG_HOME/tunebox (or ~/.config/tunebox)
    """
    local_config = Path.cwd() / "config.toml"
    if local_config.exists():
        return local_config

    return get_config_dir() / "config.toml"


def get_data_dir() -> Path:
    """Get the data directory path."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "tunebox"
    return Path.home() / ".local" / "share" / "tunebox"


def _apply_env_overrides(config: Config) -> None:
    """Environment variables win over TOML values."""
    if os.environ.get("PORT"):
        try:
            config.server.port = int(os.environ["PORT"])
        except ValueError:
            raise ConfigError(f"PORT must be an integer, got {os.environ['PORT']!r}")
    if os.environ.get("HOST"):
        config.server.host = os.environ["HOST"]
    if os.environ.get("ALLOWED_ORIGINS"):
        config.server.allowed_origins = os.environ["ALLOWED_ORIGINS"].split(",")
    if os.environ.get("TUNEBOX_DATA_DIR"):
        config.storage.data_dir = os.environ["TUNEBOX_DATA_DIR"]
    if os.environ.get("TUNEBOX_PUBLIC_DIR"):
        config.storage.public_dir = os.environ["TUNEBOX_PUBLIC_DIR"]
    if os.environ.get("TUNEBOX_LOG_LEVEL"):
        config.logging.level = os.environ["TUNEBOX_LOG_LEVEL"]


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file, falling back to defaults.

    Environment variables override TOML values:
    - PORT, HOST, ALLOWED_ORIGINS
    - TUNEBOX_DATA_DIR, TUNEBOX_PUBLIC_DIR, TUNEBOX_LOG_LEVEL

    Raises:
        ConfigError: If the TOML file is malformed or holds invalid values
    """
    # Load .env file from config directory if it exists
    from dotenv import load_dotenv

    env_path = get_config_dir() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    config_path = config_path or get_config_path()
    config = Config()

    if config_path.exists():
        try:
            with open(config_path, "rb") as f:
                toml_data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e

        if "server" in toml_data:
            server_data = toml_data["server"]
            config.server = ServerConfig(
                host=server_data.get("host", config.server.host),
                port=server_data.get("port", config.server.port),
                allowed_origins=server_data.get(
                    "allowed_origins", config.server.allowed_origins
                ),
            )

        if "storage" in toml_data:
            storage_data = toml_data["storage"]
            config.storage = StorageConfig(
                data_dir=storage_data.get("data_dir"),
                media_dir=storage_data.get("media_dir"),
                library_file=storage_data.get("library_file"),
                public_dir=storage_data.get("public_dir"),
            )

        if "upload" in toml_data:
            upload_data = toml_data["upload"]
            config.upload = UploadConfig(
                max_files=upload_data.get("max_files", config.upload.max_files),
                max_file_size_mb=upload_data.get(
                    "max_file_size_mb", config.upload.max_file_size_mb
                ),
            )

        if "logging" in toml_data:
            logging_data = toml_data["logging"]
            config.logging = LoggingConfig(
                level=logging_data.get("level", config.logging.level),
                log_file=logging_data.get("log_file"),
                max_file_size_mb=logging_data.get(
                    "max_file_size_mb", config.logging.max_file_size_mb
                ),
                backup_count=logging_data.get(
                    "backup_count", config.logging.backup_count
                ),
                console_output=logging_data.get(
                    "console_output", config.logging.console_output
                ),
            )

    _apply_env_overrides(config)

    config.server.validate()
    config.upload.validate()
    return config


def create_default_config() -> str:
    """Create a default configuration TOML content."""
    return """
# Tunebox Configuration

[server]
host = "0.0.0.0"
# Overridden by the PORT environment variable
port = 3000
allowed_origins = ["http://localhost:3000"]

[storage]
# Defaults to ~/.local/share/tunebox
# data_dir = "~/.local/share/tunebox"
# media_dir = "~/.local/share/tunebox/data"
# library_file = "~/.local/share/tunebox/music.json"
# public_dir = "./public"

[upload]
# Maximum number of files per upload request
max_files = 10

# Maximum size of each uploaded file in MB
max_file_size_mb = 50

[logging]
# Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
level = "INFO"

# Custom log file path (default: ~/.local/share/tunebox/tunebox.log)
# log_file = "/path/to/tunebox.log"

# Maximum log file size in MB before rotation
max_file_size_mb = 10

# Number of backup log files to keep
backup_count = 5

# Also output logs to stderr
console_output = true
""".strip()
