import mimetypes
from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse
from loguru import logger

from tunebox.domain.library import FileStore

from ..deps import get_file_store

router = APIRouter()

AUDIO_MIME_TYPES: dict[str, str] = {
    ".opus": "audio/opus",
    ".mp3": "audio/mpeg",
    ".m4a": "audio/mp4",
    ".flac": "audio/flac",
    ".ogg": "audio/ogg",
    ".wav": "audio/wav",
}


def get_mime_type(file_path: Path) -> str:
    """Pure function - deterministic MIME type detection."""
    mime = AUDIO_MIME_TYPES.get(file_path.suffix.lower())
    if mime:
        return mime
    guessed, _ = mimetypes.guess_type(str(file_path))
    return guessed or "application/octet-stream"


@router.get("/data/{filename}")
def get_media_file(filename: str, file_store: FileStore = Depends(get_file_store)):
    path = file_store.resolve(filename)
    if path is None:
        logger.debug(f"Media file not found: {filename!r}")
        raise HTTPException(404, "File not found")

    return FileResponse(path, media_type=get_mime_type(path))
