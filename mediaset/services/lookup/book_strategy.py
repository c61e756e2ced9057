"""
Strategie de recherche des livres.

ISBN, LCCN, OCLC et OLID sont resolus directement par OpenLibrary. Un
code UPC/EAN passe d'abord par UPCitemdb pour obtenir l'ISBN associe.
"""

from typing import Optional

from loguru import logger

from mediaset.core.ports.api_clients import IBarcodeClient, IBookClient
from mediaset.core.ports.lookup import BookResponse, ILookupStrategy
from mediaset.core.value_objects.identifiers import IdentifierType
from mediaset.core.value_objects.media_type import MediaType

_BARCODE_TYPES = frozenset({IdentifierType.UPC, IdentifierType.EAN})


class BookLookupStrategy(ILookupStrategy):
    """Recherche de livres via OpenLibrary (et UPCitemdb pour les codes-barres)."""

    media_type = MediaType.BOOKS
    supported_identifier_types = frozenset(
        {
            IdentifierType.ISBN,
            IdentifierType.LCCN,
            IdentifierType.OCLC,
            IdentifierType.OLID,
            IdentifierType.UPC,
            IdentifierType.EAN,
        }
    )

    def __init__(self, book_client: IBookClient, barcode_client: IBarcodeClient) -> None:
        self._book_client = book_client
        self._barcode_client = barcode_client

    async def lookup(
        self, identifier_type: IdentifierType, value: str
    ) -> Optional[BookResponse]:
        logger.info(f"Recherche livre {identifier_type.value}: {value}")

        if identifier_type in _BARCODE_TYPES:
            return await self._lookup_by_barcode(value)
        return await self._book_client.get_book(identifier_type, value)

    async def _lookup_by_barcode(self, code: str) -> Optional[BookResponse]:
        item = await self._barcode_client.get_item(code)
        if item is None:
            logger.warning(f"Aucun produit trouve pour le code {code}")
            return None
        if not item.isbn:
            logger.warning(f"Le code {code} n'est associe a aucun ISBN")
            return None

        logger.info(f"ISBN {item.isbn} trouve pour le code {code}")
        return await self._book_client.get_book(IdentifierType.ISBN, item.isbn)
