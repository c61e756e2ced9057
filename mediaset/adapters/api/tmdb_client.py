"""
Client TMDB pour la recherche de films et la recuperation des affiches.

Implemente l'interface IMediaAPIClient pour TMDB (The Movie Database).
Utilise le cache persistant et le mecanisme de retry pour gerer
le rate limiting.

Usage:
    client = TMDBClient(api_key="your_key", cache=APICache())
    results = await client.search("The Matrix")
    details = await client.get_details(results[0].id)
    await client.close()
"""

from typing import Optional

import httpx

from mediaset.adapters.api.cache import APICache, make_key
from mediaset.adapters.api.retry import request_with_retry
from mediaset.core.ports.api_clients import IMediaAPIClient, MediaDetails, SearchResult


class TMDBClient(IMediaAPIClient):
    """
    Client API TMDB pour les metadonnees de films.

    Implemente IMediaAPIClient avec:
    - Recherche de films par titre
    - Recuperation des details (genres, studios, duree, affiche)
    - Cache persistant (24h recherches, 7j details)
    - Retry automatique sur rate limiting (429)

    Attributes:
        TMDB_BASE_URL: URL de base de l'API TMDB v3
        TMDB_IMAGE_BASE_URL: URL de base pour les affiches (largeur 500px)
    """

    TMDB_BASE_URL = "https://api.themoviedb.org/3"
    TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p/w500"

    def __init__(
        self,
        api_key: str,
        cache: APICache,
        language: str = "en-US",
        timeout: float = 30.0,
    ) -> None:
        """
        Initialise le client TMDB.

        Args:
            api_key: Cle API v3 ou Read Access Token v4
            cache: Instance APICache pour le caching des resultats
            language: Langue des titres et resumes
            timeout: Timeout des requetes en secondes
        """
        self._api_key = api_key
        self._cache = cache
        self._language = language
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """
        Retourne le client HTTP, le cree si necessaire (lazy init).

        Supporte les deux modes d'authentification TMDB:
        - API Key v3 (32 caracteres hex) : passe en parametre api_key
        - Read Access Token v4 (long JWT) : passe en header Bearer
        """
        if self._client is None or self._client.is_closed:
            is_v4_token = len(self._api_key) > 40

            headers = {"Accept": "application/json"}
            params = {}
            if is_v4_token:
                headers["Authorization"] = f"Bearer {self._api_key}"
            else:
                params["api_key"] = self._api_key

            self._client = httpx.AsyncClient(
                base_url=self.TMDB_BASE_URL,
                headers=headers,
                params=params,
                timeout=self._timeout,
            )
        return self._client

    @property
    def source(self) -> str:
        """Retourne l'identifiant de la source API."""
        return "tmdb"

    async def search(self, query: str) -> list[SearchResult]:
        """
        Recherche des films par titre (cache 24h).

        Args:
            query: Titre nettoye du film

        Returns:
            Liste de SearchResult dans l'ordre de pertinence TMDB
        """
        cache_key = make_key("tmdb", "search", query)
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        response = await request_with_retry(
            self._get_client(),
            "GET",
            "/search/movie",
            params={"query": query, "language": self._language, "include_adult": "false"},
        )

        results = []
        for item in response.json().get("results", []):
            release_date = item.get("release_date") or ""
            results.append(
                SearchResult(
                    id=str(item["id"]),
                    title=item.get("title") or item.get("original_title") or "",
                    year=int(release_date[:4]) if len(release_date) >= 4 else None,
                    source=self.source,
                )
            )

        await self._cache.set_search(cache_key, results)
        return results

    async def get_details(self, media_id: str) -> Optional[MediaDetails]:
        """
        Recupere les details d'un film (cache 7 jours).

        Args:
            media_id: ID TMDB du film

        Returns:
            MediaDetails avec l'URL de l'affiche, ou None si non trouve
        """
        cache_key = make_key("tmdb", "details", media_id)
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        try:
            response = await request_with_retry(
                self._get_client(),
                "GET",
                f"/movie/{media_id}",
                params={"language": self._language},
            )
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                return None
            raise

        data = response.json()
        poster_path = data.get("poster_path")
        vote_average = data.get("vote_average") or 0

        details = MediaDetails(
            id=str(data["id"]),
            title=data.get("title") or data.get("original_title") or "",
            release_date=data.get("release_date") or "",
            genres=[genre["name"] for genre in data.get("genres", []) if genre.get("name")],
            companies=[
                company["name"]
                for company in data.get("production_companies", [])
                if company.get("name")
            ],
            overview=data.get("overview") or "",
            rating=f"{vote_average:.1f}/10" if vote_average > 0 else "",
            runtime=data.get("runtime") or None,
            image_url=f"{self.TMDB_IMAGE_BASE_URL}{poster_path}" if poster_path else None,
        )

        await self._cache.set_details(cache_key, details)
        return details

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
