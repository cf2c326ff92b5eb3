"""
Upload pipeline: validate a batch of incoming files, persist them, and
append their track records to the library in a single transaction.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import BinaryIO, Optional, Sequence

from loguru import logger

from .exceptions import (
    FileTooLargeError,
    NoFilesError,
    TooManyFilesError,
    UnsupportedMediaTypeError,
)
from .files import FileStore
from .metadata import parse_display_name
from .models import MEDIA_URL_PREFIX, StoredFile, Track, utc_timestamp
from .store import LibraryStore

MAX_FILES_PER_UPLOAD = 10
MAX_FILE_SIZE = 50 * 1024 * 1024  # 50 MiB


@dataclass
class IncomingFile:
    """One file of an upload request, as declared by the client."""

    original_name: str
    content_type: str
    size: int
    stream: BinaryIO


def is_audio_type(content_type: Optional[str]) -> bool:
    return bool(content_type) and content_type.lower().startswith("audio/")


def validate_batch(
    files: Sequence[IncomingFile],
    max_files: int = MAX_FILES_PER_UPLOAD,
    max_file_size: int = MAX_FILE_SIZE,
) -> None:
    """Reject the whole batch on the first invalid file.

    Raises:
        NoFilesError: If the batch is empty
        TooManyFilesError: If the batch exceeds max_files
        UnsupportedMediaTypeError: If a file is not declared as audio
        FileTooLargeError: If a file exceeds max_file_size bytes
    """
    if not files:
        logger.warning("Upload failed: No files uploaded")
        raise NoFilesError()

    if len(files) > max_files:
        logger.warning(f"Upload failed: {len(files)} files exceeds limit of {max_files}")
        raise TooManyFilesError(len(files), max_files)

    for incoming in files:
        if not is_audio_type(incoming.content_type):
            logger.warning(
                f"Rejected file: {incoming.original_name} "
                f"(not an audio file: {incoming.content_type})"
            )
            raise UnsupportedMediaTypeError(incoming.original_name, incoming.content_type)
        if incoming.size > max_file_size:
            logger.warning(
                f"Rejected file: {incoming.original_name} "
                f"({incoming.size} bytes exceeds {max_file_size})"
            )
            raise FileTooLargeError(incoming.original_name, incoming.size, max_file_size)


def build_track(
    incoming: IncomingFile, stored: StoredFile, now: Optional[datetime] = None
) -> Track:
    """Pure function - track record for a file that has been persisted."""
    artist, name = parse_display_name(incoming.original_name)
    return Track(
        id=stored.generated_id,
        name=name,
        artist=artist,
        filename=stored.filename,
        path=MEDIA_URL_PREFIX + stored.filename,
        mimetype=incoming.content_type,
        size=stored.size,
        date_added=utc_timestamp(now),
    )


def ingest_batch(
    files: Sequence[IncomingFile],
    store: LibraryStore,
    file_store: FileStore,
    max_files: int = MAX_FILES_PER_UPLOAD,
    max_file_size: int = MAX_FILE_SIZE,
) -> list[Track]:
    """Validate, persist and record a batch of uploaded files.

    Either every file of the batch ends up in the library or none does:
    files written before a failure are removed again.

    Returns:
        The newly created track records, in upload order
    """
    logger.info("Processing music upload request...")
    validate_batch(files, max_files=max_files, max_file_size=max_file_size)
    logger.info(f"Received {len(files)} files for upload")

    new_tracks: list[Track] = []
    try:
        for incoming in files:
            stored = file_store.store(incoming.stream, incoming.original_name)
            track = build_track(incoming, stored)
            new_tracks.append(track)
            logger.info(f'Processing: "{track.name}" by {track.artist} ({track.filename})')

        with store.transaction() as library:
            previous_count = len(library.tracks)
            library.tracks.extend(new_tracks)
            new_count = len(library.tracks)
    except Exception:
        logger.error(f"Upload failed, removing {len(new_tracks)} stored files")
        for track in new_tracks:
            file_store.delete(track.filename)
        raise

    logger.info(f"Library updated: {previous_count} → {new_count} tracks")
    return new_tracks
