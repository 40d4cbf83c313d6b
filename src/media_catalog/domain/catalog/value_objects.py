"""
Catalog value objects.

Closed enumerations for media kinds and statuses, plus the normalisation rules
applied to ratings and tags before an entry is persisted.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Dict, Iterable, Tuple

MIN_RATING = 0
MAX_RATING = 5

_TAG_SEPARATORS = re.compile(r"[,\n]")


class MediaKind(Enum):
    """Kinds of media tracked in the catalog, in canonical order."""
    BOOK = "book"
    MOVIE = "movie"
    ALBUM = "album"
    BLOG = "blog"
    VIDEO = "video"
    PODCAST = "podcast"
    OTHER = "other"

    @property
    def display_name(self) -> str:
        return kind_display_name(self)

    @property
    def icon_name(self) -> str:
        return kind_icon_name(self)


class MediaStatus(Enum):
    """Progress status of a catalog entry."""
    BACKLOG = "backlog"
    IN_PROGRESS = "inProgress"
    COMPLETED = "completed"
    ARCHIVED = "archived"

    @property
    def display_name(self) -> str:
        return status_display_name(self)

    @property
    def symbol_name(self) -> str:
        return status_symbol_name(self)


# kind -> (display name, icon)
_KIND_DISPLAY: Dict[MediaKind, Tuple[str, str]] = {
    MediaKind.BOOK: ("Book", "book.closed"),
    MediaKind.MOVIE: ("Movie", "film"),
    MediaKind.ALBUM: ("Album", "opticaldisc"),
    MediaKind.BLOG: ("Blog", "doc.richtext"),
    MediaKind.VIDEO: ("Video", "play.rectangle"),
    MediaKind.PODCAST: ("Podcast", "mic"),
    MediaKind.OTHER: ("Other", "square.stack"),
}

_STATUS_DISPLAY: Dict[MediaStatus, Tuple[str, str]] = {
    MediaStatus.BACKLOG: ("Backlog", "tray"),
    MediaStatus.IN_PROGRESS: ("In Progress", "hourglass"),
    MediaStatus.COMPLETED: ("Completed", "checkmark.circle"),
    MediaStatus.ARCHIVED: ("Archived", "archivebox"),
}


def kind_display_name(kind: MediaKind) -> str:
    """Get the human-readable name of a media kind."""
    return _KIND_DISPLAY[kind][0]


def kind_icon_name(kind: MediaKind) -> str:
    """Get the icon name used for a media kind."""
    return _KIND_DISPLAY[kind][1]


def status_display_name(status: MediaStatus) -> str:
    """Get the human-readable name of a status."""
    return _STATUS_DISPLAY[status][0]


def status_symbol_name(status: MediaStatus) -> str:
    """Get the symbol name used for a status."""
    return _STATUS_DISPLAY[status][1]


def parse_media_kind(value: str) -> MediaKind:
    """Parse a media kind from its value or display name (case-insensitive)."""
    if isinstance(value, MediaKind):
        return value
    text = str(value).strip().lower()
    for kind in MediaKind:
        if text in (kind.value, kind.display_name.lower()):
            return kind
    raise ValueError(f"Unknown media kind: {value!r}")


def parse_media_status(value: str) -> MediaStatus:
    """Parse a status from its value or display name (case-insensitive)."""
    if isinstance(value, MediaStatus):
        return value
    text = str(value).strip().lower().replace("_", "").replace("-", "").replace(" ", "")
    for status in MediaStatus:
        if text in (status.value.lower(), status.display_name.lower().replace(" ", "")):
            return status
    raise ValueError(f"Unknown media status: {value!r}")


def clamp_rating(value: int) -> int:
    """Clamp a rating into the inclusive 0-5 range."""
    return min(max(int(value), MIN_RATING), MAX_RATING)


def normalize_tags(tags: Iterable[str]) -> Tuple[str, ...]:
    """Trim tags and drop empty ones, keeping their order."""
    cleaned = (str(tag).strip() for tag in tags)
    return tuple(tag for tag in cleaned if tag)


def parse_tags(text: str) -> Tuple[str, ...]:
    """Split free-form tag input on commas and newlines."""
    if not text:
        return ()
    return normalize_tags(_TAG_SEPARATORS.split(text))
