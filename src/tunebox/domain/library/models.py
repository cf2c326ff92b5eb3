"""
Music library domain models.

Contains data structures for track records and the library document.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from .exceptions import StoreCorruptError

UNKNOWN_ARTIST = "Unknown Artist"
MEDIA_URL_PREFIX = "/data/"


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO 8601 UTC timestamp with millisecond precision, e.g. 2026-01-01T12:00:00.000Z"""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


@dataclass
class Track:
    """One metadata entry describing an uploaded audio file.

    Serialized with camelCase keys in a stable order:
    id, name, artist, filename, path, mimetype, size, dateAdded.
    """

    id: str
    name: str
    artist: str
    filename: str
    path: str
    mimetype: str
    size: int
    date_added: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "artist": self.artist,
            "filename": self.filename,
            "path": self.path,
            "mimetype": self.mimetype,
            "size": self.size,
            "dateAdded": self.date_added,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Track":
        """Build a Track from its JSON form. Unknown keys are ignored.

        Raises:
            StoreCorruptError: If a required key is missing
        """
        try:
            return cls(
                id=str(data["id"]),
                name=data["name"],
                artist=data.get("artist", UNKNOWN_ARTIST),
                filename=data["filename"],
                path=data.get("path", MEDIA_URL_PREFIX + data["filename"]),
                mimetype=data.get("mimetype", "application/octet-stream"),
                size=int(data.get("size", 0)),
                date_added=data.get("dateAdded", ""),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise StoreCorruptError(f"Invalid track record: {e!r}") from e


@dataclass
class Library:
    """The full library document: an ordered list of track records."""

    tracks: list[Track] = field(default_factory=list)

    def find(self, track_id: str) -> Optional[Track]:
        return next((t for t in self.tracks if t.id == track_id), None)

    def remove(self, track_id: str) -> Optional[Track]:
        """Remove and return the track with this id, or None if absent."""
        track = self.find(track_id)
        if track is not None:
            self.tracks = [t for t in self.tracks if t.id != track_id]
        return track

    def to_dict(self) -> dict[str, Any]:
        return {"tracks": [t.to_dict() for t in self.tracks]}

    @classmethod
    def from_dict(cls, data: Any) -> "Library":
        """Build a Library from the parsed JSON document.

        Raises:
            StoreCorruptError: If the document is not shaped like {"tracks": [...]}
        """
        if not isinstance(data, dict) or not isinstance(data.get("tracks"), list):
            raise StoreCorruptError("Library document must be an object with a tracks list")
        tracks = []
        for item in data["tracks"]:
            if not isinstance(item, dict):
                raise StoreCorruptError(f"Invalid track record: {item!r}")
            tracks.append(Track.from_dict(item))
        return cls(tracks=tracks)


@dataclass(frozen=True)
class StoredFile:
    """Result of persisting an uploaded file to the file store."""

    generated_id: str
    filename: str
    size: int


@dataclass(frozen=True)
class HealthStatus:
    """Liveness snapshot reported by the health endpoint."""

    status: str
    timestamp: str
    music_count: int
