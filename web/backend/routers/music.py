import os
from typing import Optional, Union

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from loguru import logger
from starlette.datastructures import UploadFile as StarletteUploadFile

from tunebox.core.config import Config
from tunebox.domain.library import (
    FileStore,
    IncomingFile,
    LibraryStore,
    TrackNotFoundError,
    UploadRejectedError,
    delete_track,
    ingest_batch,
    list_tracks,
)

from ..deps import get_config, get_file_store, get_store
from ..schemas import (
    DeleteResponse,
    ErrorResponse,
    LibraryResponse,
    TrackRecord,
    UploadResponse,
)

router = APIRouter()

UPLOAD_FIELD = "musicFiles"


def _to_incoming(upload: UploadFile) -> IncomingFile:
    """Wrap a parsed multipart file for the upload pipeline. Rewinds its stream."""
    stream = upload.file
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(0)
    return IncomingFile(
        original_name=upload.filename or "",
        content_type=upload.content_type or "",
        size=size,
        stream=stream,
    )


@router.get("/music", response_model=LibraryResponse)
def get_music(store: LibraryStore = Depends(get_store)):
    try:
        library = list_tracks(store)
    except Exception:
        logger.exception("Error reading music data")
        raise HTTPException(500, "Failed to read music data")

    return LibraryResponse(tracks=[TrackRecord.from_track(t) for t in library.tracks])


@router.post(
    "/music/upload",
    status_code=201,
    response_model=UploadResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def upload_music(
    music_files: Optional[list[Union[UploadFile, str]]] = File(
        default=None, alias=UPLOAD_FIELD
    ),
    store: LibraryStore = Depends(get_store),
    file_store: FileStore = Depends(get_file_store),
    config: Config = Depends(get_config),
):
    """Upload a batch of audio files. The batch is stored entirely or not at all."""
    # Browsers send an empty part with no filename when nothing was selected
    incoming = [
        _to_incoming(f)
        for f in music_files or []
        if isinstance(f, StarletteUploadFile) and f.filename
    ]

    try:
        tracks = ingest_batch(
            incoming,
            store,
            file_store,
            max_files=config.upload.max_files,
            max_file_size=config.upload.max_file_size,
        )
    except UploadRejectedError as e:
        raise HTTPException(400, str(e))
    except Exception:
        logger.exception("Error uploading files")
        raise HTTPException(500, "Failed to upload files")

    return UploadResponse(
        message="Files uploaded successfully",
        tracks=[TrackRecord.from_track(t) for t in tracks],
    )


@router.delete(
    "/music/{track_id}",
    response_model=DeleteResponse,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def remove_track(
    track_id: str,
    store: LibraryStore = Depends(get_store),
    file_store: FileStore = Depends(get_file_store),
):
    try:
        track = delete_track(store, file_store, track_id)
    except TrackNotFoundError:
        raise HTTPException(404, "Track not found")
    except Exception:
        logger.exception(f"Error deleting track {track_id}")
        raise HTTPException(500, "Failed to delete track")

    return DeleteResponse(
        message="Track deleted successfully",
        id=track.id,
        track_name=track.name,
        artist=track.artist,
    )
