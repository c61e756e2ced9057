"""
Tests for UpcItemDbClient - product lookup by barcode.
"""

from unittest.mock import AsyncMock

import httpx
import pytest
import respx

from mediaset.adapters.api.upcitemdb_client import UpcItemDbClient
from tests.fixtures.upcitemdb_responses import (
    UPCITEMDB_BOOK_RESPONSE,
    UPCITEMDB_EMPTY_RESPONSE,
    UPCITEMDB_INVALID_RESPONSE,
    UPCITEMDB_MOVIE_RESPONSE,
)

TRIAL_URL = "https://api.upcitemdb.com/prod/trial/lookup"


class TestGetItem:
    """Tests for UpcItemDbClient.get_item()."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_trial_endpoint_without_key(self, mock_cache: AsyncMock):
        route = respx.get(TRIAL_URL).mock(
            return_value=httpx.Response(200, json=UPCITEMDB_MOVIE_RESPONSE)
        )
        client = UpcItemDbClient(cache=mock_cache)

        item = await client.get_item("883929247318")

        assert route.calls.last.request.url.params["upc"] == "883929247318"
        assert item.code == "883929247318"
        assert item.title == "The Matrix (Blu-ray) NEW"
        assert item.brand == "Warner Home Video"
        assert item.isbn is None

    @pytest.mark.asyncio
    @respx.mock
    async def test_authenticated_endpoint_with_key(self, mock_cache: AsyncMock):
        route = respx.get("https://api.upcitemdb.com/prod/v1/lookup").mock(
            return_value=httpx.Response(200, json=UPCITEMDB_BOOK_RESPONSE)
        )
        client = UpcItemDbClient(cache=mock_cache, api_key="secret")

        item = await client.get_item("9780441172719")

        assert route.calls.last.request.headers["user_key"] == "secret"
        assert item.isbn == "9780441172719"

    @pytest.mark.asyncio
    @respx.mock
    async def test_no_items(self, mock_cache: AsyncMock):
        respx.get(TRIAL_URL).mock(return_value=httpx.Response(200, json=UPCITEMDB_EMPTY_RESPONSE))

        assert await UpcItemDbClient(cache=mock_cache).get_item("000000000000") is None

    @pytest.mark.asyncio
    @respx.mock
    async def test_invalid_code(self, mock_cache: AsyncMock):
        respx.get(TRIAL_URL).mock(return_value=httpx.Response(400, json=UPCITEMDB_INVALID_RESPONSE))

        assert await UpcItemDbClient(cache=mock_cache).get_item("12") is None

    @pytest.mark.asyncio
    @respx.mock
    async def test_server_error_propagates(self, mock_cache: AsyncMock):
        respx.get(TRIAL_URL).mock(return_value=httpx.Response(503))

        with pytest.raises(httpx.HTTPStatusError):
            await UpcItemDbClient(cache=mock_cache).get_item("883929247318")
