"""
Strategie de recherche des jeux video.

Le code-barres donne un intitule commercial (UPCitemdb) dont on extrait
titre, edition, support et plateforme avant la recherche GiantBomb.
"""

from typing import Optional

from loguru import logger

from mediaset.core.ports.api_clients import IBarcodeClient, IMediaAPIClient
from mediaset.core.ports.lookup import GameResponse, ILookupStrategy
from mediaset.core.value_objects.identifiers import IdentifierType
from mediaset.core.value_objects.media_type import MediaType
from mediaset.services.lookup.matcher import best_title_match
from mediaset.utils.titles import (
    clean_game_title,
    derive_format_from_platforms,
    extract_game_format,
    extract_platform,
)


class GameLookupStrategy(ILookupStrategy):
    """Recherche de jeux via UPCitemdb puis GiantBomb."""

    media_type = MediaType.GAMES
    supported_identifier_types = frozenset({IdentifierType.UPC, IdentifierType.EAN})

    def __init__(self, barcode_client: IBarcodeClient, game_client: IMediaAPIClient) -> None:
        self._barcode_client = barcode_client
        self._game_client = game_client

    async def lookup(
        self, identifier_type: IdentifierType, value: str
    ) -> Optional[GameResponse]:
        logger.info(f"Recherche jeu {identifier_type.value}: {value}")

        item = await self._barcode_client.get_item(value)
        if item is None or not item.title.strip():
            logger.warning(f"Aucun intitule trouve pour le code {value}")
            return None

        title, edition = clean_game_title(item.title)
        media_format = extract_game_format(item.title)
        platform = extract_platform(item.title, item.category, item.brand, item.model)
        logger.debug(
            f"Intitule '{item.title}' nettoye en '{title}' "
            f"(edition '{edition}', format '{media_format}', plateforme '{platform}')"
        )
        if not title:
            return None

        results = await self._game_client.search(title)
        match = best_title_match(title, results)
        if match is None:
            logger.warning(f"Aucun resultat {self._game_client.source} pour '{title}'")
            return None

        details = await self._game_client.get_details(match.id)
        if details is None:
            logger.warning(f"Details introuvables pour {self._game_client.source} {match.id}")
            return None

        if not media_format:
            media_format = derive_format_from_platforms(details.platforms, platform)

        return GameResponse(
            title=f"{details.title} ({edition})" if edition else details.title,
            platform=platform,
            genres=details.genres,
            developers=details.companies,
            publishers=details.publishers,
            release_date=details.release_date,
            rating=details.rating,
            description=details.overview,
            format=media_format,
            image_url=details.image_url,
        )
