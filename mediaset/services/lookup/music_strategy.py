"""
Strategie de recherche des albums via MusicBrainz.

Deux appels : l'edition portant le code-barres, puis son detail complet.
"""

from typing import Optional

from loguru import logger

from mediaset.core.ports.api_clients import IMusicClient
from mediaset.core.ports.lookup import ILookupStrategy, MusicResponse
from mediaset.core.value_objects.identifiers import IdentifierType
from mediaset.core.value_objects.media_type import MediaType


class MusicLookupStrategy(ILookupStrategy):
    """Recherche d'albums par code-barres."""

    media_type = MediaType.MUSICS
    supported_identifier_types = frozenset({IdentifierType.UPC, IdentifierType.EAN})

    def __init__(self, music_client: IMusicClient) -> None:
        self._music_client = music_client

    async def lookup(
        self, identifier_type: IdentifierType, value: str
    ) -> Optional[MusicResponse]:
        logger.info(f"Recherche album {identifier_type.value}: {value}")

        release_id = await self._music_client.find_release_id(value)
        if release_id is None:
            logger.warning(f"Aucune edition MusicBrainz pour le code {value}")
            return None

        release = await self._music_client.get_release(release_id)
        if release is None:
            logger.warning(f"Detail introuvable pour l'edition {release_id}")
        return release
