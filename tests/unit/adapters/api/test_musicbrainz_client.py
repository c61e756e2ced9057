"""
Tests for MusicBrainzClient - album lookup by barcode.
"""

from unittest.mock import AsyncMock

import httpx
import pytest
import respx

from mediaset.adapters.api.musicbrainz_client import MusicBrainzClient, format_track_length
from mediaset.utils.rate_limiter import AsyncRateLimiter
from tests.fixtures.musicbrainz_responses import (
    MUSICBRAINZ_RELEASE_NO_COVER_RESPONSE,
    MUSICBRAINZ_RELEASE_RESPONSE,
    MUSICBRAINZ_RELEASE_SEARCH_EMPTY_RESPONSE,
    MUSICBRAINZ_RELEASE_SEARCH_RESPONSE,
)

RELEASE_ID = "b84ee12a-09ef-421b-82de-0441a926375b"


@pytest.fixture
def rate_limiter() -> AsyncMock:
    return AsyncMock(spec=AsyncRateLimiter)


@pytest.fixture
def musicbrainz_client(mock_cache: AsyncMock, rate_limiter: AsyncMock) -> MusicBrainzClient:
    return MusicBrainzClient(cache=mock_cache, rate_limiter=rate_limiter)


class TestFindReleaseId:
    """Tests for MusicBrainzClient.find_release_id()."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_returns_first_release(self, musicbrainz_client, rate_limiter):
        route = respx.get("https://musicbrainz.org/ws/2/release/").mock(
            return_value=httpx.Response(200, json=MUSICBRAINZ_RELEASE_SEARCH_RESPONSE)
        )

        release_id = await musicbrainz_client.find_release_id("724385522925")

        assert release_id == RELEASE_ID
        request = route.calls.last.request
        assert request.url.params["query"] == "barcode:724385522925"
        assert request.url.params["fmt"] == "json"
        assert "MediaSet" in request.headers["User-Agent"]
        rate_limiter.acquire.assert_awaited_once()

    @pytest.mark.asyncio
    @respx.mock
    async def test_no_release(self, musicbrainz_client):
        respx.get("https://musicbrainz.org/ws/2/release/").mock(
            return_value=httpx.Response(200, json=MUSICBRAINZ_RELEASE_SEARCH_EMPTY_RESPONSE)
        )

        assert await musicbrainz_client.find_release_id("000000000000") is None

    @pytest.mark.asyncio
    @respx.mock
    async def test_bad_request_returns_none(self, musicbrainz_client):
        respx.get("https://musicbrainz.org/ws/2/release/").mock(return_value=httpx.Response(400))

        assert await musicbrainz_client.find_release_id("abc") is None


class TestGetRelease:
    """Tests for MusicBrainzClient.get_release()."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_maps_release(self, musicbrainz_client):
        route = respx.get(f"https://musicbrainz.org/ws/2/release/{RELEASE_ID}").mock(
            return_value=httpx.Response(200, json=MUSICBRAINZ_RELEASE_RESPONSE)
        )

        album = await musicbrainz_client.get_release(RELEASE_ID)

        assert "recordings" in route.calls.last.request.url.params["inc"]
        assert album.title == "OK Computer"
        assert album.artist == "Radiohead"
        assert album.label == "Parlophone"
        assert album.release_date == "1997-06-16"
        # Les 5 tags les plus votes
        assert album.genres == ["Alternative rock", "Rock", "Art rock", "British", "Experimental"]
        assert album.tracks == 2
        assert album.discs == 1
        assert album.duration == 667000
        assert album.format == "CD"
        assert [disc.title for disc in album.disc_list] == ["Airbag", "Paranoid Android"]
        assert album.disc_list[1].track_number == 2
        assert album.disc_list[1].duration == "6:23"
        assert album.image_url == f"https://coverartarchive.org/release/{RELEASE_ID}/front-500"

    @pytest.mark.asyncio
    @respx.mock
    async def test_release_without_cover(self, musicbrainz_client):
        release_id = MUSICBRAINZ_RELEASE_NO_COVER_RESPONSE["id"]
        respx.get(f"https://musicbrainz.org/ws/2/release/{release_id}").mock(
            return_value=httpx.Response(200, json=MUSICBRAINZ_RELEASE_NO_COVER_RESPONSE)
        )

        album = await musicbrainz_client.get_release(release_id)

        assert album.image_url is None
        assert album.artist == ""
        assert album.duration is None
        assert album.discs is None

    @pytest.mark.asyncio
    @respx.mock
    async def test_unknown_release(self, musicbrainz_client):
        respx.get("https://musicbrainz.org/ws/2/release/missing").mock(return_value=httpx.Response(404))

        assert await musicbrainz_client.get_release("missing") is None


@pytest.mark.parametrize(
    "milliseconds,expected",
    [(284000, "4:44"), (59999, "0:59"), (None, ""), (0, "")],
)
def test_format_track_length(milliseconds, expected):
    assert format_track_length(milliseconds) == expected
