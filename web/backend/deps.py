from fastapi import Request

from tunebox.core.config import Config
from tunebox.domain.library.files import FileStore
from tunebox.domain.library.store import LibraryStore


def get_config(request: Request) -> Config:
    """FastAPI dependency for configuration."""
    return request.app.state.config


def get_store(request: Request) -> LibraryStore:
    """FastAPI dependency for the library metadata store."""
    return request.app.state.store


def get_file_store(request: Request) -> FileStore:
    """FastAPI dependency for the audio file store."""
    return request.app.state.file_store
