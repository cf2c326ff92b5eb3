"""
Unified output system using Loguru.
Configures file and console sinks for the server process.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from .config import LoggingConfig, get_data_dir


def get_log_file_path() -> Path:
    """Get the path to the default log file."""
    return get_data_dir() / "tunebox.log"


def setup_loguru(
    log_file: Optional[Path] = None,
    level: str = "INFO",
    console_output: bool = True,
    max_file_size_mb: int = 10,
    backup_count: int = 5,
) -> None:
    """
    Configure loguru with a rotating file sink and optional stderr output.

    Args:
        log_file: Path to log file (default: ~/.local/share/tunebox/tunebox.log)
        level: Minimum level for logging (DEBUG, INFO, WARNING, ERROR)
        console_output: Whether to also log to stderr
        max_file_size_mb: Maximum size of log file before rotation
        backup_count: Number of rotated files to keep
    """
    log_file = log_file or get_log_file_path()
    log_file.parent.mkdir(parents=True, exist_ok=True)

    # Remove default handler
    logger.remove()

    logger.add(
        log_file,
        rotation=f"{max_file_size_mb} MB",
        retention=backup_count,
        level=level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | {message}",
        enqueue=False,  # Synchronous writes (thread-safe but blocking)
    )

    if console_output:
        logger.add(
            sys.stderr,
            level=level,
            format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
        )

    logger.info(f"Loguru initialized: {log_file} (level={level})")


def setup_logging_from_config(config: LoggingConfig) -> None:
    """Apply the [logging] section of the configuration."""
    setup_loguru(
        log_file=Path(config.log_file).expanduser() if config.log_file else None,
        level=config.level.upper(),
        console_output=config.console_output,
        max_file_size_mb=config.max_file_size_mb,
        backup_count=config.backup_count,
    )
