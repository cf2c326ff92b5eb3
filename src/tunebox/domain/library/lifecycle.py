"""
Track lifecycle operations: list, delete, and health reporting.
"""

from loguru import logger

from .exceptions import StoreIOError, TrackNotFoundError
from .files import FileDeleteResult, FileStore
from .models import HealthStatus, Library, Track, utc_timestamp
from .store import LibraryStore


def list_tracks(store: LibraryStore) -> Library:
    """Return the full library document."""
    logger.info("Fetching music library...")
    library = store.load()
    logger.info(f"Retrieved {len(library.tracks)} tracks from library")
    return library


def delete_track(store: LibraryStore, file_store: FileStore, track_id: str) -> Track:
    """Remove a track record and its backing file.

    A missing backing file is logged and ignored; the record is still removed.

    Raises:
        TrackNotFoundError: If no record has this id (nothing is changed)
        StoreIOError: If the backing file exists but cannot be removed
    """
    logger.info(f"Deleting track with ID: {track_id}")

    with store.transaction() as library:
        previous_count = len(library.tracks)
        track = library.find(track_id)
        if track is None:
            logger.warning(f"Delete failed: Track with ID {track_id} not found")
            raise TrackNotFoundError(track_id)

        logger.info(f'Found track: "{track.name}" by {track.artist}')

        result = file_store.delete(track.filename)
        if result is FileDeleteResult.ERROR:
            raise StoreIOError(f"Could not delete file {track.filename}")

        library.remove(track_id)
        logger.info(
            f"Track removed from library: {previous_count} → {len(library.tracks)} tracks"
        )

    return track


def health_status(store: LibraryStore) -> HealthStatus:
    """Liveness snapshot with the current track count, read fresh from the store."""
    library = store.load()
    return HealthStatus(
        status="ok", timestamp=utc_timestamp(), music_count=len(library.tracks)
    )
