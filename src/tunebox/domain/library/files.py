"""
File store for uploaded audio.

Files live flat in one directory, named <uuid4><original extension>.
"""

import shutil
import uuid
from enum import Enum
from pathlib import Path, PurePath
from typing import BinaryIO, Optional

from loguru import logger

from tunebox.core.path_security import safe_child_path

from .exceptions import StoreIOError
from .models import StoredFile

COPY_CHUNK_SIZE = 1024 * 1024


class FileDeleteResult(Enum):
    """Outcome of removing a stored file."""

    DELETED = "deleted"
    NOT_FOUND = "not_found"
    ERROR = "error"


def original_suffix(original_name: str) -> str:
    """Extension of the uploaded file's basename, including the dot ('' if none)."""
    # Browsers on Windows may send full client paths
    basename = PurePath(original_name.replace("\\", "/")).name
    return PurePath(basename).suffix


class FileStore:
    """Directory of uploaded audio files."""

    def __init__(self, media_dir: Path):
        self.media_dir = Path(media_dir)

    def initialize(self) -> None:
        """Create the media directory if it does not exist yet."""
        if self.media_dir.exists():
            return
        logger.info(f"Creating media directory {self.media_dir}")
        try:
            self.media_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StoreIOError(f"Cannot create {self.media_dir}: {e}") from e
        logger.info("Media directory created successfully")

    def resolve(self, filename: str) -> Optional[Path]:
        """Path of a stored file, or None if it is absent or outside the store."""
        path = safe_child_path(self.media_dir, filename)
        if path is None or not path.is_file():
            return None
        return path

    def store(self, source: BinaryIO, original_name: str) -> StoredFile:
        """Write an uploaded stream under a freshly generated name.

        Raises:
            StoreIOError: If the file cannot be written
        """
        generated_id = str(uuid.uuid4())
        filename = generated_id + original_suffix(original_name)
        target = self.media_dir / filename

        try:
            with open(target, "xb") as out:
                shutil.copyfileobj(source, out, COPY_CHUNK_SIZE)
            size = target.stat().st_size
        except OSError as e:
            target.unlink(missing_ok=True)
            raise StoreIOError(f"Cannot write {filename}: {e}") from e

        logger.debug(f"Stored {original_name!r} as {filename} ({size} bytes)")
        return StoredFile(generated_id=generated_id, filename=filename, size=size)

    def delete(self, filename: str) -> FileDeleteResult:
        """Remove a stored file. Absence is reported, not raised."""
        path = safe_child_path(self.media_dir, filename)
        if path is None:
            logger.error(f"Refusing to delete file outside media directory: {filename!r}")
            return FileDeleteResult.ERROR

        try:
            path.unlink()
        except FileNotFoundError:
            logger.warning(f"File not found: {filename}")
            return FileDeleteResult.NOT_FOUND
        except OSError:
            logger.exception(f"Failed to delete file: {filename}")
            return FileDeleteResult.ERROR

        logger.info(f"File deleted successfully: {filename}")
        return FileDeleteResult.DELETED
