"""
Path security validation utilities for Tunebox.

Provides pure functions to validate file paths stay within the media directory,
preventing directory traversal attacks and symlink escapes.
"""

from pathlib import Path
from typing import Optional


def is_path_within_dir(file_path: Path, root: Path) -> bool:
    """Pure function - validates path is within the given directory.

    Uses Path.resolve() to handle symlinks and relative paths, then checks if the
    resolved path is a child of the resolved root directory.

    Args:
        file_path: The file path to validate
        root: Allowed root directory

    Returns:
        True if path is within the root, False otherwise
    """
    try:
        resolved_path = file_path.resolve()
        resolved_root = root.resolve()
        resolved_path.relative_to(resolved_root)
        return resolved_path != resolved_root
    except ValueError:
        # relative_to raises ValueError if path is not a subpath
        return False
    except (OSError, RuntimeError):
        # Path.resolve() can raise OSError for invalid paths or RuntimeError for recursion
        return False


def safe_child_path(root: Path, filename: str) -> Optional[Path]:
    """Pure function - join a bare filename onto root, or None if unsafe.

    Rejects empty names, names with directory components, and anything that
    resolves outside of root.
    """
    if not filename or filename in (".", "..") or Path(filename).name != filename:
        return None
    if "\\" in filename or "\x00" in filename:
        return None

    candidate = root / filename
    if not is_path_within_dir(candidate, root):
        return None
    return candidate
