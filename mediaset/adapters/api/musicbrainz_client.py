"""
Client MusicBrainz pour la recherche d'albums par code-barres.

MusicBrainz impose au plus une requete par seconde et un User-Agent
identifiant l'application : toutes les requetes passent par un
AsyncRateLimiter partage par l'instance.

Les jaquettes proviennent de Cover Art Archive, indexe par l'ID
d'edition MusicBrainz.
"""

from typing import Optional

import httpx

from mediaset.adapters.api.cache import APICache, make_key
from mediaset.adapters.api.retry import request_with_retry
from mediaset.core.entities.media import Disc
from mediaset.core.ports.api_clients import IMusicClient
from mediaset.core.ports.lookup import MusicResponse
from mediaset.utils.rate_limiter import AsyncRateLimiter

# Nombre de tags conserves comme genres
MAX_GENRES = 5


def format_track_length(milliseconds: Optional[int]) -> str:
    """Formate une duree de piste en "M:SS" ("" si inconnue)."""
    if not milliseconds:
        return ""
    minutes, seconds = divmod(milliseconds // 1000, 60)
    return f"{minutes}:{seconds:02d}"


class MusicBrainzClient(IMusicClient):
    """
    Client de l'API MusicBrainz (ws/2).

    Attributes:
        BASE_URL: URL de base de l'API
        COVER_ART_URL: Modele d'URL de la jaquette (500px)
        USER_AGENT: User-Agent requis par MusicBrainz
    """

    BASE_URL = "https://musicbrainz.org/ws/2"
    COVER_ART_URL = "https://coverartarchive.org/release/{release_id}/front-500"
    USER_AGENT = "MediaSet/0.1 ( https://github.com/mediaset/mediaset )"

    def __init__(
        self,
        cache: APICache,
        rate_limiter: Optional[AsyncRateLimiter] = None,
        timeout: float = 30.0,
    ) -> None:
        """
        Initialise le client MusicBrainz.

        Args:
            cache: Instance APICache pour le caching des resultats
            rate_limiter: Limiteur partage (1 requete/s par defaut)
            timeout: Timeout des requetes en secondes
        """
        self._cache = cache
        self._rate_limiter = rate_limiter or AsyncRateLimiter(min_interval=1.0)
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, le cree si necessaire (lazy init)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.BASE_URL,
                headers={"Accept": "application/json", "User-Agent": self.USER_AGENT},
                params={"fmt": "json"},
                timeout=self._timeout,
            )
        return self._client

    async def _get(self, path: str, **params) -> Optional[dict]:
        await self._rate_limiter.acquire()
        try:
            response = await request_with_retry(
                self._get_client(), "GET", path, params=params
            )
        except httpx.HTTPStatusError as e:
            if e.response.status_code in (400, 404):
                return None
            raise
        return response.json()

    async def find_release_id(self, barcode: str) -> Optional[str]:
        """
        Recherche l'ID de la premiere edition portant ce code-barres.

        Args:
            barcode: Code UPC ou EAN

        Returns:
            ID MusicBrainz de l'edition, ou None
        """
        return await self._cache.get_or_fetch(
            make_key("musicbrainz", "barcode", barcode),
            APICache.LOOKUP_TTL,
            lambda: self._fetch_release_id(barcode),
        )

    async def _fetch_release_id(self, barcode: str) -> Optional[str]:
        data = await self._get("/release/", query=f"barcode:{barcode.strip()}")
        releases = (data or {}).get("releases") or []
        if not releases:
            return None
        return releases[0].get("id")

    async def get_release(self, release_id: str) -> Optional[MusicResponse]:
        """
        Recupere le detail d'une edition (cache 7 jours).

        Args:
            release_id: ID MusicBrainz de l'edition

        Returns:
            MusicResponse avec artiste, pistes, label et genres, ou None
        """
        return await self._cache.get_or_fetch(
            make_key("musicbrainz", "release", release_id),
            APICache.DETAILS_TTL,
            lambda: self._fetch_release(release_id),
        )

    async def _fetch_release(self, release_id: str) -> Optional[MusicResponse]:
        data = await self._get(
            f"/release/{release_id}", inc="artist-credits+labels+recordings+tags"
        )
        if not data:
            return None
        return self._to_response(release_id, data)

    def _to_response(self, release_id: str, data: dict) -> MusicResponse:
        credits = data.get("artist-credit") or []
        artist = credits[0].get("name", "") if credits else ""

        tags = sorted(data.get("tags") or [], key=lambda tag: tag.get("count", 0), reverse=True)
        genres = [tag["name"].capitalize() for tag in tags[:MAX_GENRES] if tag.get("name")]

        label_info = data.get("label-info") or []
        label = ""
        if label_info and label_info[0].get("label"):
            label = label_info[0]["label"].get("name") or ""

        media = data.get("media") or []
        disc_list = []
        total_length = 0
        total_tracks = 0
        for medium in media:
            total_tracks += medium.get("track-count") or 0
            for track in medium.get("tracks") or []:
                length = track.get("length") or 0
                total_length += length
                disc_list.append(
                    Disc(
                        track_number=int(track.get("position") or track.get("number") or 0),
                        title=track.get("title") or "",
                        duration=format_track_length(length),
                    )
                )

        cover_art = data.get("cover-art-archive") or {}
        image_url = (
            self.COVER_ART_URL.format(release_id=release_id) if cover_art.get("front") else None
        )

        return MusicResponse(
            title=data.get("title") or "",
            artist=artist,
            release_date=data.get("date") or "",
            genres=genres,
            duration=total_length or None,
            label=label,
            tracks=total_tracks or None,
            discs=len(media) or None,
            disc_list=disc_list,
            format=(media[0].get("format") or "") if media else "",
            image_url=image_url,
        )

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
