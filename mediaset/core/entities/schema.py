"""
Static import schema of each entity variant.

Each variant declares, once and for all, which of its fields can be filled
from a tabular import, under which column header, and with which value
converter. The mapper iterates these tables generically instead of
inspecting entity classes at runtime.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from mediaset.core.entities.media import UnknownMediaTypeError
from mediaset.core.value_objects.media_type import MediaType


class FieldKind(str, Enum):
    """Logical conversion kind of an importable field."""

    TEXT = "text"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    DURATION = "duration"
    DATE = "date"
    LIST = "list"


@dataclass(frozen=True)
class FieldSpec:
    """
    Import binding of one entity field.

    Attributes:
        attr: Attribute name on the entity dataclass
        name: Declared field name, matched against headers by default
        kind: Conversion kind applied to the raw cell
        header: Explicit column header, replaces name for matching when set
        lookup_identifier: True for the variant's lookup identifier field
    """

    attr: str
    name: str
    kind: FieldKind = FieldKind.TEXT
    header: Optional[str] = None
    lookup_identifier: bool = False

    @property
    def column_name(self) -> str:
        """Header the field is matched against."""
        return self.header if self.header is not None else self.name


BOOK_SCHEMA: tuple[FieldSpec, ...] = (
    FieldSpec("title", "Title"),
    FieldSpec("isbn", "ISBN", lookup_identifier=True),
    FieldSpec("format", "Format"),
    FieldSpec("pages", "Pages", FieldKind.INTEGER),
    FieldSpec("publication_date", "PublicationDate", header="Publication Date"),
    FieldSpec("authors", "Authors", FieldKind.LIST, header="Author"),
    FieldSpec("publisher", "Publisher"),
    FieldSpec("subtitle", "Subtitle"),
    FieldSpec("genres", "Genres", FieldKind.LIST, header="Genre"),
    FieldSpec("plot", "Plot"),
    FieldSpec("image_url", "ImageUrl", header="Image Url"),
)

MOVIE_SCHEMA: tuple[FieldSpec, ...] = (
    FieldSpec("title", "Title"),
    FieldSpec("barcode", "Barcode", lookup_identifier=True),
    FieldSpec("format", "Format"),
    FieldSpec("release_date", "ReleaseDate", header="Release Date"),
    FieldSpec("rating", "Rating", header="Audience Rating"),
    FieldSpec("runtime", "Runtime", FieldKind.DURATION),
    FieldSpec("studios", "Studios", FieldKind.LIST),
    FieldSpec("genres", "Genres", FieldKind.LIST),
    FieldSpec("plot", "Plot"),
    FieldSpec("is_tv_series", "IsTvSeries", FieldKind.BOOLEAN, header="Is TV Series"),
    FieldSpec("image_url", "ImageUrl", header="Image Url"),
)

GAME_SCHEMA: tuple[FieldSpec, ...] = (
    FieldSpec("title", "Title"),
    FieldSpec("format", "Format"),
    FieldSpec("barcode", "Barcode", lookup_identifier=True),
    FieldSpec("release_date", "ReleaseDate", header="Release Date"),
    FieldSpec("rating", "Rating", header="Audience Rating"),
    FieldSpec("platform", "Platform"),
    FieldSpec("developers", "Developers", FieldKind.LIST, header="Developer"),
    FieldSpec("publishers", "Publishers", FieldKind.LIST, header="Publisher"),
    FieldSpec("genres", "Genres", FieldKind.LIST, header="Genre"),
    FieldSpec("description", "Description"),
    FieldSpec("image_url", "ImageUrl", header="Image Url"),
)

MUSIC_SCHEMA: tuple[FieldSpec, ...] = (
    FieldSpec("title", "Title"),
    FieldSpec("format", "Format"),
    FieldSpec("artist", "Artist"),
    FieldSpec("release_date", "ReleaseDate", header="Release Date"),
    FieldSpec("genres", "Genres", FieldKind.LIST, header="Genre"),
    FieldSpec("duration", "Duration", FieldKind.INTEGER),
    FieldSpec("label", "Label"),
    FieldSpec("barcode", "Barcode", lookup_identifier=True),
    FieldSpec("tracks", "Tracks", FieldKind.INTEGER),
    FieldSpec("discs", "Discs", FieldKind.INTEGER),
    FieldSpec("image_url", "ImageUrl", header="Image Url"),
)

SCHEMAS: dict[MediaType, tuple[FieldSpec, ...]] = {
    MediaType.BOOKS: BOOK_SCHEMA,
    MediaType.MOVIES: MOVIE_SCHEMA,
    MediaType.GAMES: GAME_SCHEMA,
    MediaType.MUSICS: MUSIC_SCHEMA,
}


def schema_for(media_type: MediaType) -> tuple[FieldSpec, ...]:
    """Return the import schema of a media type."""
    try:
        return SCHEMAS[media_type]
    except KeyError:
        raise UnknownMediaTypeError(media_type) from None


def find_field(media_type: MediaType, name: str) -> Optional[FieldSpec]:
    """Find a schema field by attribute, declared name or header (case-insensitive)."""
    wanted = name.strip().casefold()
    for spec in schema_for(media_type):
        candidates = {spec.attr, spec.name, spec.column_name}
        if wanted in {candidate.casefold() for candidate in candidates}:
            return spec
    return None
