"""
Metadata store for the library document.

The whole document is read and rewritten on every mutation. Mutations go
through transaction(), which holds the store's single-writer lock for the
full load -> modify -> save cycle.
"""

import copy
import json
import os
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import ContextManager, Iterator, Optional, Protocol

from loguru import logger

from .exceptions import StoreCorruptError, StoreIOError
from .models import Library


class LibraryStore(Protocol):
    """Interface for anything that can hold the library document."""

    def initialize(self) -> None: ...

    def load(self) -> Library: ...

    def save(self, library: Library) -> None: ...

    def transaction(self) -> ContextManager[Library]: ...


class JsonLibraryStore:
    """Library document persisted as a single JSON file."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = threading.RLock()

    def initialize(self) -> None:
        """Create the document as an empty library if it does not exist yet."""
        with self._lock:
            if self.path.exists():
                return
            logger.info(f"Creating library document at {self.path}")
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise StoreIOError(f"Cannot create {self.path.parent}: {e}") from e
            self.save(Library())
            logger.info("Library document created successfully")

    def load(self) -> Library:
        """Read and parse the full document.

        Raises:
            StoreCorruptError: If the file is not a valid library document
            StoreIOError: If the file cannot be read
        """
        with self._lock:
            try:
                with open(self.path, "r", encoding="utf-8") as f:
                    data = json.load(f)
            except json.JSONDecodeError as e:
                raise StoreCorruptError(f"Invalid JSON in {self.path}: {e}") from e
            except OSError as e:
                raise StoreIOError(f"Cannot read {self.path}: {e}") from e

            return Library.from_dict(data)

    def save(self, library: Library) -> None:
        """Serialize the full document and replace the file.

        Writes to a sibling temp file and renames it over the original, so a
        reader never sees a half-written document.

        Raises:
            StoreIOError: If the file cannot be written
        """
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        with self._lock:
            try:
                with open(tmp_path, "w", encoding="utf-8") as f:
                    json.dump(library.to_dict(), f, ensure_ascii=False, indent=2)
                os.replace(tmp_path, self.path)
            except OSError as e:
                tmp_path.unlink(missing_ok=True)
                raise StoreIOError(f"Cannot write {self.path}: {e}") from e

    @contextmanager
    def transaction(self) -> Iterator[Library]:
        """Load the library, yield it for mutation, save it on clean exit.

        Nothing is saved if the block raises.
        """
        with self._lock:
            library = self.load()
            yield library
            self.save(library)


class InMemoryLibraryStore:
    """Library document kept in memory. Used by tests."""

    def __init__(self, library: Optional[Library] = None):
        self._library = copy.deepcopy(library) if library is not None else None
        self._lock = threading.RLock()

    def initialize(self) -> None:
        with self._lock:
            if self._library is None:
                self._library = Library()

    def load(self) -> Library:
        with self._lock:
            if self._library is None:
                raise StoreIOError("Library store has not been initialized")
            return copy.deepcopy(self._library)

    def save(self, library: Library) -> None:
        with self._lock:
            self._library = copy.deepcopy(library)

    @contextmanager
    def transaction(self) -> Iterator[Library]:
        with self._lock:
            library = self.load()
            yield library
            self.save(library)
