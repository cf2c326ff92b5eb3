"""Library-specific exceptions for error handling."""


class LibraryError(Exception):
    """Base exception for library operations."""

    pass


class UploadRejectedError(LibraryError):
    """Raised when an upload batch fails validation. Nothing is stored."""

    pass


class NoFilesError(UploadRejectedError):
    """Raised when an upload request carries no files."""

    def __init__(self, message: str = "No files uploaded"):
        super().__init__(message)


class TooManyFilesError(UploadRejectedError):
    """Raised when an upload batch exceeds the per-request file limit."""

    def __init__(self, count: int, limit: int):
        self.count = count
        self.limit = limit
        super().__init__(f"Too many files: {count} (maximum is {limit})")


class UnsupportedMediaTypeError(UploadRejectedError):
    """Raised when an uploaded file is not declared as audio."""

    def __init__(self, filename: str, content_type: str):
        self.filename = filename
        self.content_type = content_type
        super().__init__("Only audio files are allowed!")


class FileTooLargeError(UploadRejectedError):
    """Raised when an uploaded file exceeds the size ceiling."""

    def __init__(self, filename: str, size: int, limit: int):
        self.filename = filename
        self.size = size
        self.limit = limit
        super().__init__(
            f"File too large: {filename} ({size} bytes, maximum is {limit} bytes)"
        )


class TrackNotFoundError(LibraryError):
    """Raised when no track record has the requested id."""

    def __init__(self, track_id: str):
        self.track_id = track_id
        super().__init__("Track not found")


class StoreError(LibraryError):
    """Base exception for metadata and file store failures."""

    pass


class StoreCorruptError(StoreError):
    """Raised when the library document cannot be parsed."""

    pass


class StoreIOError(StoreError):
    """Raised when a store cannot be read or written."""

    pass
