"""
Catalog media entities.

Entities representing the four catalog variants (books, movies, games,
music) together with the cover image and image lookup blocks they own.
Every variant shares the same minimal capability set so the import and
enrichment pipelines can handle them uniformly.
"""

from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from enum import Enum
from typing import ClassVar, Optional

from mediaset.core.value_objects.media_type import MediaType


def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


@dataclass
class CoverImage:
    """
    Cover image stored for an entity.

    Replaced wholesale on every successful enrichment, never merged.

    Attributes:
        file_name: Stored file name (e.g. "42-3f2a....jpg")
        file_path: Path relative to the image storage root
        content_type: MIME type of the stored file
        file_size: Size in bytes after re-encoding
        source_url: URL the image was downloaded from
        created_at: First storage time
        updated_at: Last storage time
    """

    file_name: str
    file_path: str
    content_type: str
    file_size: int
    source_url: Optional[str] = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)


@dataclass
class ImageLookup:
    """
    Outcome of the last cover image lookup attempt.

    Absent until the first attempt. permanent_failure=True means the entity
    can never be enriched and must not be scheduled again.

    Attributes:
        attempted_at: Time of the last attempt
        failure_reason: Human readable cause, None when the attempt succeeded
        permanent_failure: True when the entity lacks a usable identifier
    """

    attempted_at: datetime
    failure_reason: Optional[str] = None
    permanent_failure: bool = False


class LookupState(Enum):
    """Enrichment state derived from an entity's cover image and lookup block."""

    NEVER_ATTEMPTED = "never_attempted"
    SUCCEEDED = "succeeded"
    FAILED_RETRYABLE = "failed_retryable"
    FAILED_PERMANENT = "failed_permanent"


@dataclass
class Disc:
    """One track of a music release."""

    track_number: int = 0
    title: str = ""
    duration: str = ""


@dataclass
class Entity:
    """
    Base class of every catalog entity.

    Attributes:
        id: Internal database ID, None until first save
        title: Display title
        format: Display/packaging format (e.g. "Hardcover", "Blu-ray")
        image_url: Known image URL, tried first during enrichment
        cover_image: Stored cover image
        image_lookup: Outcome of the last enrichment attempt

    Subclasses set media_type and name their lookup identifier field
    in LOOKUP_FIELD.
    """

    media_type: ClassVar[MediaType]
    LOOKUP_FIELD: ClassVar[Optional[str]] = None

    # Not part of the emptiness check
    _STATE_FIELDS: ClassVar[frozenset[str]] = frozenset({"id", "image_lookup"})

    id: Optional[str] = None
    title: str = ""
    format: str = ""
    image_url: Optional[str] = None
    cover_image: Optional[CoverImage] = None
    image_lookup: Optional[ImageLookup] = None

    @property
    def lookup_identifier(self) -> Optional[str]:
        """Trimmed value of the designated lookup field, None when blank."""
        if self.LOOKUP_FIELD is None:
            return None
        value = getattr(self, self.LOOKUP_FIELD, None)
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    def is_empty(self) -> bool:
        """True when no data field is set (blank rows of an import)."""
        for entity_field in fields(self):
            if entity_field.name in self._STATE_FIELDS:
                continue
            value = getattr(self, entity_field.name)
            if value is None or value is False:
                continue
            if isinstance(value, str) and not value.strip():
                continue
            if isinstance(value, list) and not value:
                continue
            return False
        return True


@dataclass
class Book(Entity):
    """
    Book entry of the catalog.

    Attributes:
        isbn: ISBN, the lookup identifier for books
        pages: Number of pages
        publication_date: Free-form publication date
        authors: Author names
        publisher: Publisher name
        subtitle: Subtitle
        genres: Genre names
        plot: Summary
    """

    media_type: ClassVar[MediaType] = MediaType.BOOKS
    LOOKUP_FIELD: ClassVar[Optional[str]] = "isbn"

    isbn: str = ""
    pages: Optional[int] = None
    publication_date: str = ""
    authors: list[str] = field(default_factory=list)
    publisher: str = ""
    subtitle: str = ""
    genres: list[str] = field(default_factory=list)
    plot: str = ""


@dataclass
class Movie(Entity):
    """
    Movie or TV series entry of the catalog.

    Attributes:
        barcode: UPC/EAN barcode, the lookup identifier
        release_date: Free-form release date
        rating: Audience rating (e.g. "PG-13")
        runtime: Runtime in minutes
        studios: Studio names
        genres: Genre names
        plot: Summary
        is_tv_series: True for TV series box sets
    """

    media_type: ClassVar[MediaType] = MediaType.MOVIES
    LOOKUP_FIELD: ClassVar[Optional[str]] = "barcode"

    barcode: str = ""
    release_date: str = ""
    rating: str = ""
    runtime: Optional[int] = None
    studios: list[str] = field(default_factory=list)
    genres: list[str] = field(default_factory=list)
    plot: str = ""
    is_tv_series: bool = False


@dataclass
class Game(Entity):
    """
    Video game entry of the catalog.

    Attributes:
        barcode: UPC/EAN barcode, the lookup identifier
        release_date: Free-form release date
        rating: Age rating (e.g. "ESRB: T")
        platform: Platform name
        developers: Developer studios
        publishers: Publishers
        genres: Genre names
        description: Summary
    """

    media_type: ClassVar[MediaType] = MediaType.GAMES
    LOOKUP_FIELD: ClassVar[Optional[str]] = "barcode"

    barcode: str = ""
    release_date: str = ""
    rating: str = ""
    platform: str = ""
    developers: list[str] = field(default_factory=list)
    publishers: list[str] = field(default_factory=list)
    genres: list[str] = field(default_factory=list)
    description: str = ""


@dataclass
class Music(Entity):
    """
    Music release entry of the catalog.

    Attributes:
        barcode: UPC/EAN barcode, the lookup identifier
        artist: Main artist
        release_date: Free-form release date
        genres: Genre names
        duration: Total duration in milliseconds
        label: Record label
        tracks: Number of tracks
        discs: Number of discs
        disc_list: Track listing
    """

    media_type: ClassVar[MediaType] = MediaType.MUSICS
    LOOKUP_FIELD: ClassVar[Optional[str]] = "barcode"

    barcode: str = ""
    artist: str = ""
    release_date: str = ""
    genres: list[str] = field(default_factory=list)
    duration: Optional[int] = None
    label: str = ""
    tracks: Optional[int] = None
    discs: Optional[int] = None
    disc_list: list[Disc] = field(default_factory=list)


class UnknownMediaTypeError(KeyError):
    """Raised when no entity variant is registered for a media type."""


ENTITY_TYPES: dict[MediaType, type[Entity]] = {
    MediaType.BOOKS: Book,
    MediaType.MOVIES: Movie,
    MediaType.GAMES: Game,
    MediaType.MUSICS: Music,
}


def entity_class_for(media_type: MediaType) -> type[Entity]:
    """Return the entity class registered for a media type."""
    try:
        return ENTITY_TYPES[media_type]
    except KeyError:
        raise UnknownMediaTypeError(media_type) from None


def lookup_state(entity: Entity) -> LookupState:
    """Derive the enrichment state of an entity."""
    if entity.cover_image is not None:
        return LookupState.SUCCEEDED
    if entity.image_lookup is None:
        return LookupState.NEVER_ATTEMPTED
    if entity.image_lookup.permanent_failure:
        return LookupState.FAILED_PERMANENT
    return LookupState.FAILED_RETRYABLE
