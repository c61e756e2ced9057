"""
Service d'enrichissement des images de couverture pour une entite.

Strategie par paliers:
1. URL d'image deja connue sur l'entite : telechargement direct
2. Sinon, recherche par identifiant (ISBN, UPC...) via la strategie de la
   categorie, puis telechargement de l'image trouvee

L'etat de la tentative (ImageLookup) n'est ecrit sur l'entite qu'une fois
l'issue connue. Une annulation (asyncio.CancelledError) se propage sans
rien modifier.
"""

from dataclasses import dataclass
from typing import Optional

from loguru import logger

from mediaset.core.entities.media import CoverImage, Entity, ImageLookup, utcnow
from mediaset.core.ports.images import IImageService, ImageDownloadError
from mediaset.core.ports.lookup import UnsupportedLookupError
from mediaset.core.value_objects.identifiers import identifier_type_for
from mediaset.services.lookup.factory import LookupStrategyFactory

NO_IDENTIFIER = "No lookup identifier available"
NO_STRATEGY = "No lookup strategy available"
NO_MATCH = "No match found for identifier"
NO_IMAGE_URL = "No image URL returned from lookup"


@dataclass
class ImageLookupResult:
    """
    Issue d'une tentative d'enrichissement.

    Attributes:
        success: True si une image a ete enregistree
        image_url: URL de l'image telechargee ou trouvee
        saved_image: Image enregistree en cas de succes
        error_message: Cause lisible de l'echec
        permanent_failure: True si l'entite ne doit plus etre soumise
    """

    success: bool
    image_url: Optional[str] = None
    saved_image: Optional[CoverImage] = None
    error_message: Optional[str] = None
    permanent_failure: bool = False


class ImageLookupService:
    """
    Orchestrateur de l'enrichissement d'une entite.

    Le service ne consulte pas le drapeau permanent_failure : c'est a
    l'appelant de ne plus soumettre ces entites.
    """

    def __init__(
        self,
        strategy_factory: LookupStrategyFactory,
        image_service: IImageService,
    ) -> None:
        self._strategy_factory = strategy_factory
        self._image_service = image_service

    async def lookup_and_save_image(self, entity: Entity) -> ImageLookupResult:
        """
        Tente d'obtenir une image de couverture pour l'entite.

        Args:
            entity: Entite deja persistee (id renseigne)

        Returns:
            ImageLookupResult ; l'entite porte le meme resultat dans
            cover_image et image_lookup

        Raises:
            ValueError: Si l'entite n'a pas d'ID
        """
        if not entity.id:
            raise ValueError("Entity must be saved before image lookup")

        identifier = entity.lookup_identifier
        direct_url = (entity.image_url or "").strip() or None

        if identifier is None and direct_url is None:
            logger.info(f"{entity.media_type.label} {entity.id}: aucun identifiant, echec permanent")
            return self._fail(entity, NO_IDENTIFIER, permanent=True)

        direct_error = None
        if direct_url is not None:
            try:
                cover = await self._image_service.download_and_save(
                    direct_url, entity.media_type, entity.id
                )
                return self._succeed(entity, direct_url, cover)
            except ImageDownloadError as e:
                direct_error = f"Download failed: {e.reason}"
                logger.debug(f"{entity.media_type.label} {entity.id}: {direct_error}")
            except Exception as e:
                direct_error = f"Download failed: {e}"
                logger.warning(f"{entity.media_type.label} {entity.id}: {direct_error}")

        if identifier is None:
            return self._fail(entity, direct_error or NO_IDENTIFIER, permanent=True)

        return await self._lookup_by_identifier(entity, identifier)

    async def _lookup_by_identifier(
        self, entity: Entity, identifier: str
    ) -> ImageLookupResult:
        identifier_type = identifier_type_for(entity.media_type, identifier)
        try:
            strategy = self._strategy_factory.get_strategy(entity.media_type, identifier_type)
        except UnsupportedLookupError:
            return self._fail(entity, NO_STRATEGY)

        try:
            response = await strategy.lookup(identifier_type, identifier)
        except Exception as e:
            logger.warning(
                f"{entity.media_type.label} {entity.id}: erreur de recherche "
                f"{identifier_type.value} {identifier}: {e}"
            )
            return self._fail(entity, f"Lookup error: {e}")

        if response is None:
            return self._fail(entity, NO_MATCH)
        if not response.image_url:
            return self._fail(entity, NO_IMAGE_URL)

        try:
            cover = await self._image_service.download_and_save(
                response.image_url, entity.media_type, entity.id
            )
        except ImageDownloadError as e:
            return self._fail(entity, f"Download failed: {e.reason}", image_url=response.image_url)
        except Exception as e:
            logger.warning(f"{entity.media_type.label} {entity.id}: erreur de telechargement: {e}")
            return self._fail(entity, f"Download failed: {e}", image_url=response.image_url)

        return self._succeed(entity, response.image_url, cover)

    def _succeed(self, entity: Entity, url: str, cover: CoverImage) -> ImageLookupResult:
        entity.cover_image = cover
        entity.image_lookup = ImageLookup(attempted_at=utcnow())
        logger.info(f"{entity.media_type.label} {entity.id}: image enregistree depuis {url}")
        return ImageLookupResult(success=True, image_url=url, saved_image=cover)

    def _fail(
        self,
        entity: Entity,
        reason: str,
        permanent: bool = False,
        image_url: Optional[str] = None,
    ) -> ImageLookupResult:
        entity.image_lookup = ImageLookup(
            attempted_at=utcnow(),
            failure_reason=reason,
            permanent_failure=permanent,
        )
        if not permanent:
            logger.info(f"{entity.media_type.label} {entity.id}: echec ({reason})")
        return ImageLookupResult(
            success=False,
            image_url=image_url,
            error_message=reason,
            permanent_failure=permanent,
        )
