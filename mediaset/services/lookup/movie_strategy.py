"""
Strategie de recherche des films.

Le code-barres donne un intitule commercial (UPCitemdb), nettoye puis
recherche sur TMDB. Le support (DVD, Blu-ray...) est deduit de l'intitule.
"""

from typing import Optional

from loguru import logger

from mediaset.core.ports.api_clients import IBarcodeClient, IMediaAPIClient
from mediaset.core.ports.lookup import ILookupStrategy, MovieResponse
from mediaset.core.value_objects.identifiers import IdentifierType
from mediaset.core.value_objects.media_type import MediaType
from mediaset.services.lookup.matcher import best_title_match
from mediaset.utils.titles import clean_movie_title, extract_movie_format


class MovieLookupStrategy(ILookupStrategy):
    """Recherche de films via UPCitemdb puis TMDB."""

    media_type = MediaType.MOVIES
    supported_identifier_types = frozenset({IdentifierType.UPC, IdentifierType.EAN})

    def __init__(self, barcode_client: IBarcodeClient, movie_client: IMediaAPIClient) -> None:
        self._barcode_client = barcode_client
        self._movie_client = movie_client

    async def lookup(
        self, identifier_type: IdentifierType, value: str
    ) -> Optional[MovieResponse]:
        logger.info(f"Recherche film {identifier_type.value}: {value}")

        item = await self._barcode_client.get_item(value)
        if item is None or not item.title:
            logger.warning(f"Aucun intitule trouve pour le code {value}")
            return None

        title = clean_movie_title(item.title)
        media_format = extract_movie_format(item.title)
        logger.debug(f"Intitule '{item.title}' nettoye en '{title}' (format '{media_format}')")
        if not title:
            return None

        results = await self._movie_client.search(title)
        match = best_title_match(title, results)
        if match is None:
            logger.warning(f"Aucun resultat {self._movie_client.source} pour '{title}'")
            return None

        details = await self._movie_client.get_details(match.id)
        if details is None:
            logger.warning(f"Details introuvables pour {self._movie_client.source} {match.id}")
            return None

        return MovieResponse(
            title=details.title,
            genres=details.genres,
            studios=details.companies,
            release_date=details.release_date,
            rating=details.rating,
            runtime=details.runtime,
            plot=details.overview,
            format=media_format,
            image_url=details.image_url,
        )
