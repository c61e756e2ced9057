"""
Tests unitaires pour APICache.

Ces tests verifient:
- Stockage et recuperation de valeurs
- TTL differencies pour recherche (24h), details (7j) et codes (30j)
- Le pattern cache-first de get_or_fetch
"""

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from mediaset.adapters.api.cache import APICache, make_key


class TestAPICache:
    """Tests pour la classe APICache."""

    @pytest.fixture
    def cache(self, tmp_path: Path) -> APICache:
        """Cree un cache avec un repertoire temporaire."""
        cache = APICache(cache_dir=str(tmp_path / "test_cache"))
        yield cache
        cache.close()

    @pytest.mark.asyncio
    async def test_get_returns_none_for_missing_key(self, cache: APICache) -> None:
        """get() retourne None pour une cle inexistante."""
        assert await cache.get("nonexistent_key") is None

    @pytest.mark.asyncio
    async def test_set_and_get(self, cache: APICache) -> None:
        """set() puis get() retourne la valeur stockee."""
        value = {"title": "Dune", "pages": 535}

        await cache.set("openlibrary:isbn:9780441172719", value, ttl=3600)

        assert await cache.get("openlibrary:isbn:9780441172719") == value

    def test_ttls(self) -> None:
        """24h pour les recherches, 7 jours pour les details, 30 jours pour les codes."""
        assert APICache.SEARCH_TTL == 86400
        assert APICache.DETAILS_TTL == 604800
        assert APICache.LOOKUP_TTL == 2592000

    @pytest.mark.asyncio
    async def test_get_or_fetch_calls_fetch_on_miss(self, cache: APICache) -> None:
        fetch = AsyncMock(return_value={"title": "OK Computer"})

        first = await cache.get_or_fetch("k", APICache.LOOKUP_TTL, fetch)
        second = await cache.get_or_fetch("k", APICache.LOOKUP_TTL, fetch)

        assert first == second == {"title": "OK Computer"}
        fetch.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_get_or_fetch_does_not_cache_none(self, cache: APICache) -> None:
        """Un produit introuvable aujourd'hui peut etre trouve plus tard."""
        fetch = AsyncMock(return_value=None)

        await cache.get_or_fetch("k", APICache.LOOKUP_TTL, fetch)
        await cache.get_or_fetch("k", APICache.LOOKUP_TTL, fetch)

        assert fetch.await_count == 2

    @pytest.mark.asyncio
    async def test_clear_removes_all_entries(self, cache: APICache) -> None:
        """clear() supprime toutes les entrees du cache."""
        await cache.set_search("key1", ["value1"])
        await cache.set_details("key2", "value2")

        await cache.clear()

        assert await cache.get("key1") is None
        assert await cache.get("key2") is None


def test_make_key_normalizes_parts() -> None:
    assert make_key("tmdb", "search", "  The Matrix ") == "tmdb:search:the matrix"
