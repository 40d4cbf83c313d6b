"""Catalog Context Entities.

This module defines the core entities for the Catalog bounded context.
A CatalogEntry is the persisted, immutable record of one piece of media;
an EntryDraft is the mutable staging value used to build or edit entries.
"""

import base64
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Any, Dict, Optional, Tuple
from uuid import uuid4

from ...exceptions import ValidationError
from .value_objects import (
    MediaKind,
    MediaStatus,
    clamp_rating,
    normalize_tags,
    parse_media_kind,
    parse_media_status,
    parse_tags,
)

UNKNOWN_CREATOR = "Unknown Creator"


def naive_local(value: datetime) -> datetime:
    """Convert an aware timestamp to naive local time; naive ones pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


@dataclass(frozen=True, slots=True, kw_only=True)
class CatalogEntry:
    """
    Represents a single item in the media catalog.

    Entries are immutable: every mutation produces a new version with a
    fresh ``updated_at`` stamp. The rating is clamped to 0-5 and tags are
    trimmed on construction, so a stored entry always satisfies both rules.
    """

    # Entity ID
    id: str = field(default_factory=lambda: str(uuid4()))

    # Core identity
    title: str
    creator: str = ""
    kind: MediaKind = MediaKind.OTHER

    # Timestamps
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    # Metadata
    release_date: Optional[date] = None
    platform: str = ""
    external_link: Optional[str] = None
    rating: int = 0
    status: MediaStatus = MediaStatus.BACKLOG
    tags: Tuple[str, ...] = ()
    note: str = ""
    is_favorite: bool = False

    # Artwork
    cover_image: Optional[bytes] = field(default=None, repr=False)

    def __post_init__(self):
        # stored timestamps are naive local time so they always compare
        object.__setattr__(self, "created_at", naive_local(self.created_at))
        object.__setattr__(self, "updated_at", naive_local(self.updated_at))
        object.__setattr__(self, "rating", clamp_rating(self.rating))
        object.__setattr__(self, "tags", normalize_tags(self.tags))

    @property
    def year(self) -> Optional[int]:
        """Get the release year, if a release date is known."""
        return self.release_date.year if self.release_date else None

    @property
    def display_creator(self) -> str:
        """Get the creator, falling back to a placeholder."""
        return self.creator.strip() or UNKNOWN_CREATOR

    @property
    def display_platform(self) -> str:
        """Get the platform, or a dash if none was recorded."""
        return self.platform.strip() or "-"

    @property
    def has_cover(self) -> bool:
        return self.cover_image is not None

    def with_changes(self, now: Optional[datetime] = None, **changes: Any) -> "CatalogEntry":
        """Return a new version of this entry with ``updated_at`` stamped."""
        changes.pop("id", None)
        changes.pop("created_at", None)
        return replace(self, updated_at=now or datetime.now(), **changes)

    def toggled_favorite(self, now: Optional[datetime] = None) -> "CatalogEntry":
        """Return a new version with the favorite flag flipped."""
        return self.with_changes(now=now, is_favorite=not self.is_favorite)

    def to_dict(self) -> Dict[str, Any]:
        """Convert entry to dictionary."""
        return {
            "id": self.id,
            "title": self.title,
            "creator": self.creator,
            "kind": self.kind.value,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "release_date": self.release_date.isoformat() if self.release_date else None,
            "platform": self.platform,
            "external_link": self.external_link,
            "rating": self.rating,
            "status": self.status.value,
            "tags": list(self.tags),
            "note": self.note,
            "is_favorite": self.is_favorite,
            "cover_image": (
                base64.b64encode(self.cover_image).decode("ascii")
                if self.cover_image is not None else None
            ),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CatalogEntry":
        """Create an entry from a dictionary produced by ``to_dict``."""
        release_date = data.get("release_date")
        cover_image = data.get("cover_image")
        return cls(
            id=data["id"],
            title=data["title"],
            creator=data.get("creator", ""),
            kind=parse_media_kind(data.get("kind", MediaKind.OTHER.value)),
            created_at=datetime.fromisoformat(data["created_at"]),
            updated_at=datetime.fromisoformat(data["updated_at"]),
            release_date=date.fromisoformat(release_date) if release_date else None,
            platform=data.get("platform", ""),
            external_link=data.get("external_link"),
            rating=data.get("rating", 0),
            status=parse_media_status(data.get("status", MediaStatus.BACKLOG.value)),
            tags=tuple(data.get("tags", ())),
            note=data.get("note", ""),
            is_favorite=bool(data.get("is_favorite", False)),
            cover_image=base64.b64decode(cover_image) if cover_image else None,
        )


@dataclass
class EntryDraft:
    """Editable staging copy of an entry.

    Fields are free-form while editing; ``commit`` and ``apply_to`` validate
    them and produce a new immutable CatalogEntry version.
    """

    title: str = ""
    creator: str = ""
    kind: MediaKind = MediaKind.BOOK
    has_release_date: bool = False
    release_date: date = field(default_factory=date.today)
    platform: str = ""
    link: str = ""
    rating: int = 0
    status: MediaStatus = MediaStatus.BACKLOG
    tag_input: str = ""
    note: str = ""
    is_favorite: bool = False
    cover_image: Optional[bytes] = field(default=None, repr=False)

    @classmethod
    def from_entry(cls, entry: CatalogEntry) -> "EntryDraft":
        """Create a draft pre-filled from an existing entry."""
        return cls(
            title=entry.title,
            creator=entry.creator,
            kind=entry.kind,
            has_release_date=entry.release_date is not None,
            release_date=entry.release_date or date.today(),
            platform=entry.platform,
            link=entry.external_link or "",
            rating=entry.rating,
            status=entry.status,
            tag_input=", ".join(entry.tags),
            note=entry.note,
            is_favorite=entry.is_favorite,
            cover_image=entry.cover_image,
        )

    @property
    def tags(self) -> Tuple[str, ...]:
        return parse_tags(self.tag_input)

    @property
    def can_save(self) -> bool:
        return bool(self.title.strip())

    def validate(self) -> None:
        """Validate the draft before it is committed.

        Raises:
            ValidationError: If the title is blank.
        """
        if not self.can_save:
            raise ValidationError("Title must not be empty")

    def _committed_fields(self) -> Dict[str, Any]:
        self.validate()
        link = self.link.strip()
        return {
            "title": self.title.strip(),
            "creator": self.creator.strip(),
            "kind": self.kind,
            "release_date": self.release_date if self.has_release_date else None,
            "platform": self.platform.strip(),
            "external_link": link or None,
            "rating": clamp_rating(self.rating),
            "status": self.status,
            "tags": self.tags,
            "note": self.note,
            "is_favorite": self.is_favorite,
            "cover_image": self.cover_image,
        }

    def commit(self, now: Optional[datetime] = None) -> CatalogEntry:
        """Build a brand-new entry from this draft."""
        fields = self._committed_fields()
        timestamp = now or datetime.now()
        return CatalogEntry(created_at=timestamp, updated_at=timestamp, **fields)

    def apply_to(self, entry: CatalogEntry, now: Optional[datetime] = None) -> CatalogEntry:
        """Copy the validated draft onto a new version of ``entry``."""
        return entry.with_changes(now=now, **self._committed_fields())
