"""
Interfaces ports pour les stratégies de recherche par identifiant.

Une stratégie sait retrouver les métadonnées (et l'image de couverture)
d'une catégorie de média à partir d'un identifiant externe (ISBN, UPC...).
Les réponses sont des dataclasses propres à chaque catégorie, qui partagent
au minimum un titre et une URL d'image.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

from mediaset.core.entities.media import Disc
from mediaset.core.value_objects.identifiers import IdentifierType
from mediaset.core.value_objects.media_type import MediaType


@dataclass
class LookupResponse:
    """
    Réponse commune à toutes les stratégies.

    Attributs :
        title : Titre trouvé
        image_url : URL de l'image de couverture, None si absente
    """

    title: str = ""
    image_url: Optional[str] = None


@dataclass
class BookResponse(LookupResponse):
    """Métadonnées d'un livre (OpenLibrary)."""

    subtitle: str = ""
    authors: list[str] = field(default_factory=list)
    pages: Optional[int] = None
    publishers: list[str] = field(default_factory=list)
    publish_date: str = ""
    subjects: list[str] = field(default_factory=list)
    format: str = ""


@dataclass
class MovieResponse(LookupResponse):
    """Métadonnées d'un film (UPCitemdb + TMDB)."""

    genres: list[str] = field(default_factory=list)
    studios: list[str] = field(default_factory=list)
    release_date: str = ""
    rating: str = ""
    runtime: Optional[int] = None
    plot: str = ""
    format: str = ""


@dataclass
class GameResponse(LookupResponse):
    """Métadonnées d'un jeu vidéo (UPCitemdb + GiantBomb)."""

    platform: str = ""
    genres: list[str] = field(default_factory=list)
    developers: list[str] = field(default_factory=list)
    publishers: list[str] = field(default_factory=list)
    release_date: str = ""
    rating: str = ""
    description: str = ""
    format: str = ""


@dataclass
class MusicResponse(LookupResponse):
    """Métadonnées d'un album (MusicBrainz + Cover Art Archive)."""

    artist: str = ""
    release_date: str = ""
    genres: list[str] = field(default_factory=list)
    duration: Optional[int] = None
    label: str = ""
    tracks: Optional[int] = None
    discs: Optional[int] = None
    disc_list: list[Disc] = field(default_factory=list)
    format: str = ""


class UnsupportedLookupError(LookupError):
    """Levée quand aucune stratégie ne gère une catégorie et un type d'identifiant."""

    def __init__(self, media_type: MediaType, identifier_type: IdentifierType) -> None:
        self.media_type = media_type
        self.identifier_type = identifier_type
        super().__init__(
            f"No lookup strategy for {media_type.label} "
            f"with identifier type {identifier_type.value}"
        )


class ILookupStrategy(ABC):
    """
    Interface d'une stratégie de recherche par identifiant.

    Une stratégie est propre à une catégorie de média et à un ensemble
    de types d'identifiants.
    """

    media_type: MediaType
    supported_identifier_types: frozenset[IdentifierType]

    def can_handle(self, media_type: MediaType, identifier_type: IdentifierType) -> bool:
        """Vérifie si la stratégie gère cette catégorie et ce type d'identifiant."""
        return (
            media_type == self.media_type
            and identifier_type in self.supported_identifier_types
        )

    @abstractmethod
    async def lookup(
        self, identifier_type: IdentifierType, value: str
    ) -> Optional[LookupResponse]:
        """
        Recherche les métadonnées correspondant à un identifiant.

        Args :
            identifier_type : Type de l'identifiant
            value : Valeur de l'identifiant

        Retourne :
            La réponse de la catégorie, ou None si aucune correspondance
        """
        ...
