"""
Client UPCitemdb pour la recherche de produits par code-barres.

Sans cle API, le endpoint d'essai (trial) est utilise : 100 requetes par
jour, d'ou le cache de 30 jours sur chaque code resolu. Avec une cle, le
endpoint v1 authentifie est utilise.

Usage:
    client = UpcItemDbClient(cache=APICache())
    item = await client.get_item("883929247318")
    await client.close()
"""

from typing import Optional

import httpx
from loguru import logger

from mediaset.adapters.api.cache import APICache, make_key
from mediaset.adapters.api.retry import request_with_retry
from mediaset.core.ports.api_clients import BarcodeItem, IBarcodeClient


class UpcItemDbClient(IBarcodeClient):
    """
    Client API UPCitemdb.

    Attributes:
        BASE_URL: URL de base de l'API
        TRIAL_PATH: Endpoint sans authentification
        AUTHENTICATED_PATH: Endpoint avec cle API
    """

    BASE_URL = "https://api.upcitemdb.com"
    TRIAL_PATH = "/prod/trial/lookup"
    AUTHENTICATED_PATH = "/prod/v1/lookup"

    def __init__(
        self,
        cache: APICache,
        api_key: Optional[str] = None,
        timeout: float = 30.0,
    ) -> None:
        """
        Initialise le client UPCitemdb.

        Args:
            cache: Instance APICache pour le caching des resultats
            api_key: Cle API (optionnelle, endpoint trial si absente)
            timeout: Timeout des requetes en secondes
        """
        self._cache = cache
        self._api_key = api_key
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, le cree si necessaire (lazy init)."""
        if self._client is None or self._client.is_closed:
            headers = {"Accept": "application/json"}
            if self._api_key:
                headers["user_key"] = self._api_key
                headers["key_type"] = "3scale"
            self._client = httpx.AsyncClient(
                base_url=self.BASE_URL,
                headers=headers,
                timeout=self._timeout,
            )
        return self._client

    async def get_item(self, code: str) -> Optional[BarcodeItem]:
        """
        Recupere le premier produit correspondant a un code UPC/EAN.

        Args:
            code: Code-barres UPC ou EAN

        Returns:
            BarcodeItem, ou None si le code est inconnu ou invalide
        """
        return await self._cache.get_or_fetch(
            make_key("upcitemdb", "item", code),
            APICache.LOOKUP_TTL,
            lambda: self._fetch_item(code),
        )

    async def _fetch_item(self, code: str) -> Optional[BarcodeItem]:
        path = self.AUTHENTICATED_PATH if self._api_key else self.TRIAL_PATH
        try:
            response = await request_with_retry(
                self._get_client(), "GET", path, params={"upc": code}
            )
        except httpx.HTTPStatusError as e:
            # 400 INVALID_UPC, 404 NOT_FOUND
            if e.response.status_code in (400, 404):
                logger.info(f"UPCitemdb: code inconnu ou invalide {code}")
                return None
            raise

        items = response.json().get("items") or []
        if not items:
            logger.info(f"UPCitemdb: aucun produit pour {code}")
            return None

        item = items[0]
        return BarcodeItem(
            code=code,
            title=(item.get("title") or "").strip(),
            isbn=item.get("isbn") or None,
            brand=item.get("brand") or "",
            category=item.get("category") or "",
            model=item.get("model") or "",
        )

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
