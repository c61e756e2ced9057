"""
Cache persistant pour les API externes avec TTL differencies.

Le cache utilise diskcache pour la persistence sur disque : un code-barres
deja resolu ne consomme plus le quota journalier de l'API au run suivant.

TTL par defaut:
- Recherches par titre (SEARCH_TTL): 24 heures
- Details (DETAILS_TTL): 7 jours
- Codes-barres et identifiants (LOOKUP_TTL): 30 jours, un code-barres
  designe toujours le meme produit
"""

import asyncio
from functools import partial
from typing import Any, Awaitable, Callable, Optional

from diskcache import Cache


def make_key(source: str, kind: str, *parts: Any) -> str:
    """
    Construit une cle de cache normalisee.

    Example:
        make_key("tmdb", "search", "The Matrix")  # "tmdb:search:the matrix"
    """
    normalized = [str(part).strip().lower() for part in parts]
    return ":".join([source, kind, *normalized])


class APICache:
    """
    Cache asynchrone avec TTL pour les appels API.

    Utilise diskcache pour la persistence et run_in_executor pour
    les operations asynchrones non-bloquantes.

    Example:
        cache = APICache(cache_dir=".cache/api")
        item = await cache.get_or_fetch(
            make_key("upcitemdb", "item", code),
            APICache.LOOKUP_TTL,
            lambda: client.fetch(code),
        )
    """

    SEARCH_TTL = 24 * 60 * 60  # 24 heures
    DETAILS_TTL = 7 * 24 * 60 * 60  # 7 jours
    LOOKUP_TTL = 30 * 24 * 60 * 60  # 30 jours

    def __init__(self, cache_dir: str = ".cache/api") -> None:
        """
        Initialise le cache avec un repertoire de stockage.

        Args:
            cache_dir: Chemin vers le repertoire du cache (cree si inexistant)
        """
        self._cache = Cache(str(cache_dir))

    async def get(self, key: str) -> Optional[Any]:
        """Recupere une valeur du cache, None si absente ou expiree."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._cache.get, key)

    async def set(self, key: str, value: Any, ttl: int) -> None:
        """Stocke une valeur avec un TTL en secondes."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            None, partial(self._cache.set, key, value, expire=ttl)
        )

    async def set_search(self, key: str, value: Any) -> None:
        """Stocke un resultat de recherche (TTL de 24h)."""
        await self.set(key, value, self.SEARCH_TTL)

    async def set_details(self, key: str, value: Any) -> None:
        """Stocke les details d'un media (TTL de 7 jours)."""
        await self.set(key, value, self.DETAILS_TTL)

    async def get_or_fetch(
        self,
        key: str,
        ttl: int,
        fetch: Callable[[], Awaitable[Optional[Any]]],
    ) -> Optional[Any]:
        """
        Pattern cache-first : retourne la valeur cachee ou l'obtient via fetch.

        Les resultats None ne sont pas caches, pour qu'un produit absent
        aujourd'hui puisse etre trouve plus tard.

        Args:
            key: Cle unique
            ttl: Duree de vie en secondes si la valeur est cachee
            fetch: Coroutine appelee en cas de cache miss
        """
        cached = await self.get(key)
        if cached is not None:
            return cached
        value = await fetch()
        if value is not None:
            await self.set(key, value, ttl)
        return value

    async def clear(self) -> None:
        """Supprime toutes les entrees du cache."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._cache.clear)

    def close(self) -> None:
        """Ferme la connexion au cache (a appeler a la fin)."""
        self._cache.close()
