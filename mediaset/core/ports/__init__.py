"""
Ports (interfaces abstraites) définissant les contrats pour les adaptateurs.

Les ports sont les frontières de l'architecture hexagonale. Ils définissent
ce dont le domaine a besoin du monde extérieur sans spécifier
comment ces besoins sont satisfaits.

Ports repository :
- IEntityRepository : Stockage des entités du catalogue

Ports recherche :
- ILookupStrategy : Recherche de métadonnées par identifiant externe
- LookupResponse et ses variantes par catégorie

Ports client API :
- IMediaAPIClient : Recherche par titre puis détails (TMDB, GiantBomb)
- IBarcodeClient : Recherche par code-barres (UPCitemdb)
- IBookClient : Recherche bibliographique (OpenLibrary)
- IMusicClient : Recherche d'albums (MusicBrainz)

Ports image :
- IImageService : Téléchargement et enregistrement des couvertures
- IImageStorage : Stockage des fichiers image
"""

from mediaset.core.ports.repositories import IEntityRepository
from mediaset.core.ports.lookup import (
    BookResponse,
    GameResponse,
    ILookupStrategy,
    LookupResponse,
    MovieResponse,
    MusicResponse,
    UnsupportedLookupError,
)
from mediaset.core.ports.api_clients import (
    BarcodeItem,
    IBarcodeClient,
    IBookClient,
    IMediaAPIClient,
    IMusicClient,
    MediaDetails,
    SearchResult,
)
from mediaset.core.ports.images import IImageService, IImageStorage, ImageDownloadError

__all__ = [
    # Repositories
    "IEntityRepository",
    # Recherche
    "ILookupStrategy",
    "LookupResponse",
    "BookResponse",
    "MovieResponse",
    "GameResponse",
    "MusicResponse",
    "UnsupportedLookupError",
    # Clients API
    "IMediaAPIClient",
    "IBarcodeClient",
    "IBookClient",
    "IMusicClient",
    "SearchResult",
    "MediaDetails",
    "BarcodeItem",
    # Images
    "IImageService",
    "IImageStorage",
    "ImageDownloadError",
]
