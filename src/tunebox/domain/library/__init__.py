"""Library domain - uploaded tracks and their metadata.

This domain handles:
- Track and library document models
- The JSON metadata store and the audio file store
- Upload validation and ingestion
- Track deletion and health reporting
"""

# Models
from .models import HealthStatus, Library, StoredFile, Track, UNKNOWN_ARTIST

# Errors
from .exceptions import (
    FileTooLargeError,
    LibraryError,
    NoFilesError,
    StoreCorruptError,
    StoreError,
    StoreIOError,
    TooManyFilesError,
    TrackNotFoundError,
    UnsupportedMediaTypeError,
    UploadRejectedError,
)

# Stores
from .store import InMemoryLibraryStore, JsonLibraryStore, LibraryStore
from .files import FileDeleteResult, FileStore

# Operations
from .metadata import parse_display_name
from .upload import IncomingFile, ingest_batch, validate_batch
from .lifecycle import delete_track, health_status, list_tracks

__all__ = [
    # Models
    "HealthStatus",
    "Library",
    "StoredFile",
    "Track",
    "UNKNOWN_ARTIST",
    # Errors
    "FileTooLargeError",
    "LibraryError",
    "NoFilesError",
    "StoreCorruptError",
    "StoreError",
    "StoreIOError",
    "TooManyFilesError",
    "TrackNotFoundError",
    "UnsupportedMediaTypeError",
    "UploadRejectedError",
    # Stores
    "InMemoryLibraryStore",
    "JsonLibraryStore",
    "LibraryStore",
    "FileDeleteResult",
    "FileStore",
    # Operations
    "parse_display_name",
    "IncomingFile",
    "ingest_batch",
    "validate_batch",
    "delete_track",
    "health_status",
    "list_tracks",
]
