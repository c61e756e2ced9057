"""
Client GiantBomb pour la recherche de jeux video.

Implemente IMediaAPIClient : recherche par titre puis details par GUID.
GiantBomb exige une cle API et un User-Agent explicite.

Usage:
    client = GiantBombClient(api_key="your_key", cache=APICache())
    results = await client.search("Halo 3")
    details = await client.get_details(results[0].id)
"""

from typing import Optional

import httpx

from mediaset.adapters.api.cache import APICache, make_key
from mediaset.adapters.api.retry import request_with_retry
from mediaset.core.ports.api_clients import IMediaAPIClient, MediaDetails, SearchResult


def _names(items: Optional[list[dict]]) -> list[str]:
    return [item["name"] for item in items or [] if item.get("name")]


class GiantBombClient(IMediaAPIClient):
    """
    Client API GiantBomb pour les metadonnees de jeux.

    Attributes:
        BASE_URL: URL de base de l'API
        USER_AGENT: User-Agent envoye (requis par GiantBomb)
    """

    BASE_URL = "https://www.giantbomb.com/api"
    USER_AGENT = "MediaSet/0.1 (GiantBomb)"

    def __init__(self, api_key: str, cache: APICache, timeout: float = 30.0) -> None:
        """
        Initialise le client GiantBomb.

        Args:
            api_key: Cle API GiantBomb
            cache: Instance APICache pour le caching des resultats
            timeout: Timeout des requetes en secondes
        """
        self._api_key = api_key
        self._cache = cache
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, le cree si necessaire (lazy init)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.BASE_URL,
                headers={"Accept": "application/json", "User-Agent": self.USER_AGENT},
                params={"api_key": self._api_key, "format": "json"},
                timeout=self._timeout,
            )
        return self._client

    @property
    def source(self) -> str:
        """Retourne l'identifiant de la source API."""
        return "giantbomb"

    async def search(self, query: str) -> list[SearchResult]:
        """Recherche des jeux par titre (cache 24h)."""
        cache_key = make_key("giantbomb", "search", query)
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        response = await request_with_retry(
            self._get_client(),
            "GET",
            "/search/",
            params={"resources": "game", "query": query},
        )

        results = []
        for item in response.json().get("results") or []:
            release_date = item.get("original_release_date") or ""
            results.append(
                SearchResult(
                    id=item.get("guid") or str(item.get("id", "")),
                    title=item.get("name") or "",
                    year=int(release_date[:4]) if len(release_date) >= 4 else None,
                    source=self.source,
                )
            )

        await self._cache.set_search(cache_key, results)
        return results

    async def get_details(self, media_id: str) -> Optional[MediaDetails]:
        """
        Recupere les details d'un jeu par son GUID (cache 7 jours).

        Args:
            media_id: GUID GiantBomb (ex: "3030-20455")

        Returns:
            MediaDetails, ou None si non trouve
        """
        cache_key = make_key("giantbomb", "details", media_id)
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        try:
            response = await request_with_retry(
                self._get_client(), "GET", f"/game/{media_id}/"
            )
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                return None
            raise

        data = response.json().get("results")
        if not data:
            return None

        ratings = _names(data.get("original_game_rating"))
        esrb = next((rating for rating in ratings if "ESRB" in rating.upper()), None)
        image = data.get("image") or {}

        details = MediaDetails(
            id=data.get("guid") or media_id,
            title=data.get("name") or "",
            release_date=data.get("original_release_date") or "",
            genres=_names(data.get("genres")),
            companies=_names(data.get("developers")),
            publishers=_names(data.get("publishers")),
            platforms=_names(data.get("platforms")),
            overview=data.get("deck") or "",
            rating=esrb or (ratings[0] if ratings else ""),
            image_url=image.get("super_url") or image.get("medium_url") or image.get("small_url"),
        )

        await self._cache.set_details(cache_key, details)
        return details

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
