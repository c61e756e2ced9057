"""
Tests unitaires pour le mecanisme de retry avec backoff exponentiel.

Ces tests verifient:
- RateLimitError capture le header Retry-After
- with_retry relance sur RateLimitError et erreurs reseau transitoires
- request_with_retry detecte les 429 et relance automatiquement
- Les echecs permanents remontent apres epuisement des tentatives
"""

import httpx
import pytest
import respx

from mediaset.adapters.api.retry import RateLimitError, request_with_retry, with_retry


class TestRateLimitError:
    """Tests pour l'exception RateLimitError."""

    def test_rate_limit_error_stores_retry_after(self) -> None:
        """RateLimitError stocke la valeur Retry-After."""
        error = RateLimitError(retry_after=60)
        assert error.retry_after == 60
        assert "60" in str(error)

    def test_rate_limit_error_without_retry_after(self) -> None:
        """RateLimitError fonctionne sans Retry-After."""
        error = RateLimitError(retry_after=None)
        assert error.retry_after is None


class TestWithRetryDecorator:
    """Tests pour le decorateur with_retry."""

    @pytest.mark.asyncio
    async def test_with_retry_retries_on_rate_limit_error(self) -> None:
        """with_retry relance quand RateLimitError est levee."""
        call_count = 0

        @with_retry(max_attempts=3, max_wait=1)
        async def flaky_function() -> str:
            nonlocal call_count
            call_count += 1
            if call_count < 3:
                raise RateLimitError(retry_after=0)
            return "success"

        result = await flaky_function()
        assert result == "success"
        assert call_count == 3

    @pytest.mark.asyncio
    async def test_with_retry_retries_on_connect_error(self) -> None:
        """with_retry relance sur une connexion coupee."""
        call_count = 0

        @with_retry(max_attempts=2, max_wait=1)
        async def flaky_network() -> str:
            nonlocal call_count
            call_count += 1
            if call_count == 1:
                raise httpx.ConnectError("connection reset")
            return "ok"

        assert await flaky_network() == "ok"
        assert call_count == 2

    @pytest.mark.asyncio
    async def test_with_retry_stops_after_max_attempts(self) -> None:
        """with_retry abandonne apres max_attempts tentatives."""
        call_count = 0

        @with_retry(max_attempts=3, max_wait=1)
        async def always_fails() -> str:
            nonlocal call_count
            call_count += 1
            raise RateLimitError(retry_after=0)

        with pytest.raises(RateLimitError):
            await always_fails()
        assert call_count == 3

    @pytest.mark.asyncio
    async def test_with_retry_does_not_retry_other_exceptions(self) -> None:
        """with_retry ne relance pas les autres exceptions."""
        call_count = 0

        @with_retry(max_attempts=3, max_wait=1)
        async def raises_value_error() -> str:
            nonlocal call_count
            call_count += 1
            raise ValueError("not a rate limit error")

        with pytest.raises(ValueError):
            await raises_value_error()
        assert call_count == 1  # Pas de retry


class TestRequestWithRetry:
    """Tests pour request_with_retry avec httpx."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_request_with_retry_raises_on_429(self, respx_mock: respx.Router) -> None:
        """request_with_retry convertit 429 en RateLimitError et relance."""
        route = respx_mock.get("https://api.example.com/data").mock(
            return_value=httpx.Response(429, headers={"Retry-After": "0"})
        )

        async with httpx.AsyncClient() as client:
            with pytest.raises(RateLimitError) as exc_info:
                await request_with_retry(
                    client, "GET", "https://api.example.com/data", max_attempts=3, max_wait=1
                )

        assert exc_info.value.retry_after == 0
        assert route.call_count == 3

    @pytest.mark.asyncio
    @respx.mock
    async def test_request_with_retry_retries_then_succeeds(self, respx_mock: respx.Router) -> None:
        """request_with_retry reussit apres un 429 initial."""
        route = respx_mock.get("https://api.example.com/data").mock(
            side_effect=[
                httpx.Response(429, headers={"Retry-After": "0"}),
                httpx.Response(200, json={"status": "ok"}),
            ]
        )

        async with httpx.AsyncClient() as client:
            response = await request_with_retry(
                client, "GET", "https://api.example.com/data", max_attempts=3, max_wait=1
            )

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}
        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_retry_after_http_date_is_ignored(self, respx_mock: respx.Router) -> None:
        """Un Retry-After au format date donne retry_after=None."""
        respx_mock.get("https://api.example.com/data").mock(
            return_value=httpx.Response(
                429, headers={"Retry-After": "Wed, 21 Oct 2015 07:28:00 GMT"}
            )
        )

        async with httpx.AsyncClient() as client:
            with pytest.raises(RateLimitError) as exc_info:
                await request_with_retry(
                    client, "GET", "https://api.example.com/data", max_attempts=1
                )

        assert exc_info.value.retry_after is None

    @pytest.mark.asyncio
    @respx.mock
    async def test_request_with_retry_raises_on_other_errors(self, respx_mock: respx.Router) -> None:
        """request_with_retry leve HTTPStatusError sur autres erreurs."""
        route = respx_mock.get("https://api.example.com/data").mock(
            return_value=httpx.Response(500, text="Internal Server Error")
        )

        async with httpx.AsyncClient() as client:
            with pytest.raises(httpx.HTTPStatusError) as exc_info:
                await request_with_retry(client, "GET", "https://api.example.com/data")

        assert exc_info.value.response.status_code == 500
        assert route.call_count == 1  # Pas de retry sur 500
