"""
Client OpenLibrary pour la recherche bibliographique.

Utilise la Read API (api/volumes/brief) qui accepte ISBN, LCCN, OCLC et
OLID. Aucune cle API n'est requise.

Usage:
    client = OpenLibraryClient(cache=APICache())
    book = await client.get_book(IdentifierType.ISBN, "9780441172719")
"""

from typing import Optional

import httpx
from loguru import logger

from mediaset.adapters.api.cache import APICache, make_key
from mediaset.adapters.api.retry import request_with_retry
from mediaset.core.ports.api_clients import IBookClient
from mediaset.core.ports.lookup import BookResponse
from mediaset.core.value_objects.identifiers import IdentifierType


class OpenLibraryClient(IBookClient):
    """
    Client de la Read API OpenLibrary.

    Attributes:
        BASE_URL: URL de base d'OpenLibrary
        COVERS_URL: Modele d'URL des couvertures (grande taille)
        SUPPORTED_TYPES: Types d'identifiants acceptes par la Read API
    """

    BASE_URL = "https://openlibrary.org"
    COVERS_URL = "https://covers.openlibrary.org/b/id/{cover_id}-L.jpg"
    SUPPORTED_TYPES = frozenset(
        {IdentifierType.ISBN, IdentifierType.LCCN, IdentifierType.OCLC, IdentifierType.OLID}
    )

    def __init__(self, cache: APICache, timeout: float = 30.0) -> None:
        """
        Initialise le client OpenLibrary.

        Args:
            cache: Instance APICache pour le caching des resultats
            timeout: Timeout des requetes en secondes
        """
        self._cache = cache
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, le cree si necessaire (lazy init)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.BASE_URL,
                headers={"Accept": "application/json"},
                timeout=self._timeout,
                follow_redirects=True,
            )
        return self._client

    async def get_book(
        self, identifier_type: IdentifierType, value: str
    ) -> Optional[BookResponse]:
        """
        Recupere un livre par identifiant.

        Args:
            identifier_type: ISBN, LCCN, OCLC ou OLID
            value: Valeur de l'identifiant

        Returns:
            BookResponse, ou None si aucune notice ne correspond

        Raises:
            ValueError: Si le type d'identifiant n'est pas gere par OpenLibrary
        """
        if identifier_type not in self.SUPPORTED_TYPES:
            raise ValueError(
                f"OpenLibrary ne gere pas les identifiants {identifier_type.value}"
            )
        return await self._cache.get_or_fetch(
            make_key("openlibrary", identifier_type.value, value),
            APICache.LOOKUP_TTL,
            lambda: self._fetch_book(identifier_type, value),
        )

    async def _fetch_book(
        self, identifier_type: IdentifierType, value: str
    ) -> Optional[BookResponse]:
        path = f"/api/volumes/brief/{identifier_type.value}/{value.strip()}.json"
        try:
            response = await request_with_retry(self._get_client(), "GET", path)
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                return None
            raise

        payload = response.json()
        # Reponse vide ([] ou {}) quand l'identifiant est inconnu
        records = payload.get("records") if isinstance(payload, dict) else None
        if not records:
            logger.info(f"OpenLibrary: aucune notice pour {identifier_type.value} {value}")
            return None

        record = next(iter(records.values()))
        return self._to_response(record)

    def _to_response(self, record: dict) -> BookResponse:
        data = record.get("data") or {}
        details = (record.get("details") or {}).get("details") or {}

        publish_date = data.get("publish_date") or ""
        if not publish_date:
            dates = record.get("publishDates") or []
            publish_date = dates[0] if dates else ""

        covers = details.get("covers") or []
        image_url = self.COVERS_URL.format(cover_id=covers[0]) if covers else None

        return BookResponse(
            title=data.get("title") or "",
            subtitle=data.get("subtitle") or "",
            authors=[author["name"] for author in data.get("authors", []) if author.get("name")],
            pages=data.get("number_of_pages"),
            publishers=[
                publisher["name"]
                for publisher in data.get("publishers", [])
                if publisher.get("name")
            ],
            publish_date=publish_date,
            subjects=[subject["name"] for subject in data.get("subjects", []) if subject.get("name")],
            format=(details.get("physical_format") or "").title(),
            image_url=image_url,
        )

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
