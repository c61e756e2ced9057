"""
Clients API externes pour la recherche par identifiant.

Ce module fournit les adaptateurs pour communiquer avec les API externes:
- UPCitemdb: produits par code-barres (films, jeux)
- TMDB: The Movie Database pour les films
- GiantBomb: jeux video
- OpenLibrary: livres (ISBN, LCCN, OCLC, OLID)
- MusicBrainz: albums, jaquettes via Cover Art Archive

Infrastructure partagee:
- APICache: Cache persistant avec TTL differencies
- RateLimitError: Exception pour les erreurs 429
- with_retry / request_with_retry: backoff exponentiel sur rate limiting

Les clients implementent les ports definis dans core/ports/api_clients.py.
"""

from mediaset.adapters.api.cache import APICache, make_key
from mediaset.adapters.api.giantbomb_client import GiantBombClient
from mediaset.adapters.api.musicbrainz_client import MusicBrainzClient
from mediaset.adapters.api.openlibrary_client import OpenLibraryClient
from mediaset.adapters.api.retry import RateLimitError, request_with_retry, with_retry
from mediaset.adapters.api.tmdb_client import TMDBClient
from mediaset.adapters.api.upcitemdb_client import UpcItemDbClient

__all__ = [
    "APICache",
    "make_key",
    "RateLimitError",
    "with_retry",
    "request_with_retry",
    "GiantBombClient",
    "MusicBrainzClient",
    "OpenLibraryClient",
    "TMDBClient",
    "UpcItemDbClient",
]
