"""
Business entities representing core domain concepts.

Entities are mutable objects with identity that persist over time.

Exports:
- Entity: Base class shared by every catalog variant
- Book, Movie, Game, Music: Catalog variants
- Disc: Track of a music release
- CoverImage: Stored cover image of an entity
- ImageLookup: Outcome of the last cover image lookup
- LookupState: Derived enrichment state
- FieldSpec, FieldKind: Static import schema of each variant
"""

from mediaset.core.entities.media import (
    ENTITY_TYPES,
    Book,
    CoverImage,
    Disc,
    Entity,
    Game,
    ImageLookup,
    LookupState,
    Movie,
    Music,
    UnknownMediaTypeError,
    entity_class_for,
    lookup_state,
)
from mediaset.core.entities.schema import (
    SCHEMAS,
    FieldKind,
    FieldSpec,
    find_field,
    schema_for,
)

__all__ = [
    "ENTITY_TYPES",
    "Book",
    "CoverImage",
    "Disc",
    "Entity",
    "Game",
    "ImageLookup",
    "LookupState",
    "Movie",
    "Music",
    "UnknownMediaTypeError",
    "entity_class_for",
    "lookup_state",
    "SCHEMAS",
    "FieldKind",
    "FieldSpec",
    "find_field",
    "schema_for",
]
