"""
Track information derived from uploaded filenames.
"""

from pathlib import PurePath

from .models import UNKNOWN_ARTIST

ARTIST_TITLE_SEPARATOR = " - "


def strip_extension(original_name: str) -> str:
    """Basename of an uploaded filename with its last extension removed."""
    # Browsers on Windows may send full client paths
    basename = PurePath(original_name.replace("\\", "/")).name
    # ".mp3" has an empty stem, "song." keeps its trailing dot
    head, dot, extension = basename.rpartition(".")
    return head if dot and extension else basename


def parse_display_name(original_name: str) -> tuple[str, str]:
    """Pure function - split an uploaded filename into (artist, title).

    "Artist - Title.mp3" -> ("Artist", "Title")
    "A - B - C.mp3"      -> ("A", "B - C")
    "JustATitle.mp3"     -> ("Unknown Artist", "JustATitle")
    """
    title = strip_extension(original_name)
    parts = title.split(ARTIST_TITLE_SEPARATOR)
    if len(parts) > 1:
        return parts[0], ARTIST_TITLE_SEPARATOR.join(parts[1:])
    return UNKNOWN_ARTIST, title
