"""
Interfaces ports pour les clients API.

Interfaces abstraites (ports) définissant les contrats pour les APIs externes
consommées par les stratégies de recherche :
- recherche par code-barres (UPCitemdb)
- recherche par titre puis détails (TMDB pour les films, GiantBomb pour les jeux)
- recherche bibliographique (OpenLibrary)
- recherche d'albums (MusicBrainz)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

from mediaset.core.ports.lookup import BookResponse, MusicResponse
from mediaset.core.value_objects.identifiers import IdentifierType


@dataclass
class SearchResult:
    """
    Résultat de recherche par titre depuis une API média.

    Attributs :
        id : ID spécifique à l'API (ID TMDB, GUID GiantBomb)
        title : Titre depuis l'API
        year : Année de sortie
        source : Identifiant de la source API ("tmdb" ou "giantbomb")
    """

    id: str
    title: str
    year: Optional[int] = None
    source: str = ""


@dataclass
class MediaDetails:
    """
    Informations détaillées d'un film ou d'un jeu.

    Attributs :
        id : ID spécifique à l'API
        title : Titre
        release_date : Date de sortie telle que fournie par l'API
        genres : Noms de genre
        companies : Studios (films) ou développeurs (jeux)
        publishers : Éditeurs (jeux)
        platforms : Plateformes (jeux)
        overview : Résumé
        rating : Note ou classification d'âge
        runtime : Durée en minutes (films)
        image_url : URL complète de l'affiche ou de la jaquette
    """

    id: str
    title: str
    release_date: str = ""
    genres: list[str] = field(default_factory=list)
    companies: list[str] = field(default_factory=list)
    publishers: list[str] = field(default_factory=list)
    platforms: list[str] = field(default_factory=list)
    overview: str = ""
    rating: str = ""
    runtime: Optional[int] = None
    image_url: Optional[str] = None


@dataclass
class BarcodeItem:
    """
    Produit retrouvé par son code-barres.

    Attributs :
        code : Code UPC/EAN interrogé
        title : Intitulé commercial brut (ex: "The Matrix (Blu-ray) NEW")
        isbn : ISBN associé pour les livres, si connu
        brand : Marque
        category : Catégorie commerciale
        model : Référence modèle
    """

    code: str
    title: str = ""
    isbn: Optional[str] = None
    brand: str = ""
    category: str = ""
    model: str = ""


class IMediaAPIClient(ABC):
    """
    Interface de base pour les APIs de recherche par titre.

    Implémentée par TMDB (films) et GiantBomb (jeux).
    """

    @abstractmethod
    async def search(self, query: str) -> list[SearchResult]:
        """
        Recherche des médias par titre.

        Args :
            query : Titre recherché

        Retourne :
            Liste des résultats dans l'ordre de l'API
        """
        ...

    @abstractmethod
    async def get_details(self, media_id: str) -> Optional[MediaDetails]:
        """
        Récupère les informations détaillées d'un média.

        Retourne :
            Informations détaillées, ou None si non trouvé
        """
        ...

    @property
    @abstractmethod
    def source(self) -> str:
        """Retourne l'identifiant de la source API (ex: 'tmdb')."""
        ...


class IBarcodeClient(ABC):
    """Interface de recherche de produits par code-barres."""

    @abstractmethod
    async def get_item(self, code: str) -> Optional[BarcodeItem]:
        """Récupère le premier produit correspondant au code, ou None."""
        ...


class IBookClient(ABC):
    """Interface de recherche bibliographique."""

    @abstractmethod
    async def get_book(
        self, identifier_type: IdentifierType, value: str
    ) -> Optional[BookResponse]:
        """Récupère un livre par ISBN, LCCN, OCLC ou OLID, ou None."""
        ...


class IMusicClient(ABC):
    """Interface de recherche d'albums."""

    @abstractmethod
    async def find_release_id(self, barcode: str) -> Optional[str]:
        """Retourne l'ID de la première édition portant ce code-barres, ou None."""
        ...

    @abstractmethod
    async def get_release(self, release_id: str) -> Optional[MusicResponse]:
        """Récupère le détail d'une édition (pistes, label, genres), ou None."""
        ...
