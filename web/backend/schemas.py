from pydantic import BaseModel, ConfigDict, Field

from tunebox.domain.library.models import HealthStatus, Track


class TrackRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    artist: str
    filename: str
    path: str
    mimetype: str
    size: int
    date_added: str = Field(alias="dateAdded")

    @classmethod
    def from_track(cls, track: Track) -> "TrackRecord":
        return cls(
            id=track.id,
            name=track.name,
            artist=track.artist,
            filename=track.filename,
            path=track.path,
            mimetype=track.mimetype,
            size=track.size,
            date_added=track.date_added,
        )


class LibraryResponse(BaseModel):
    tracks: list[TrackRecord]


class UploadResponse(BaseModel):
    message: str
    tracks: list[TrackRecord]


class DeleteResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    id: str
    track_name: str = Field(alias="trackName")
    artist: str


class HealthResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: str
    timestamp: str
    music_count: int = Field(alias="musicCount")

    @classmethod
    def from_status(cls, status: HealthStatus) -> "HealthResponse":
        return cls(
            status=status.status,
            timestamp=status.timestamp,
            music_count=status.music_count,
        )


class ErrorResponse(BaseModel):
    error: str
