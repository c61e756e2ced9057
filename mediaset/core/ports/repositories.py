"""
Interfaces ports pour les repositories.

Interfaces abstraites (ports) définissant les contrats pour la persistance des
entités du catalogue. Le pipeline d'import et d'enrichissement ne fait jamais
de requête de stockage lui-même : il passe par ce contrat.
"""

from abc import ABC, abstractmethod
from typing import Optional

from mediaset.core.entities.media import Entity
from mediaset.core.value_objects.media_type import MediaType


class IEntityRepository(ABC):
    """
    Interface de stockage des entités du catalogue.

    Le bloc ImageLookup doit traverser le stockage sans modification entre
    deux exécutions de l'enrichissement.
    """

    @abstractmethod
    def get_by_id(self, media_type: MediaType, entity_id: str) -> Optional[Entity]:
        """Récupère une entité par catégorie et ID."""
        ...

    @abstractmethod
    def save(self, entity: Entity) -> Entity:
        """Sauvegarde une entité (insertion ou mise à jour). Retourne l'entité avec son ID."""
        ...

    @abstractmethod
    def bulk_create(self, entities: list[Entity]) -> list[Entity]:
        """Insère un lot d'entités dans l'ordre fourni. Retourne les entités avec leur ID."""
        ...

    @abstractmethod
    def list_missing_images(self, media_type: MediaType, limit: int) -> list[Entity]:
        """
        Liste les entités éligibles à l'enrichissement.

        Éligible : pas d'image de couverture et pas d'échec permanent.
        Les entités jamais tentées passent en premier, puis les plus
        anciennes tentatives.
        """
        ...

    @abstractmethod
    def list_all(self, media_type: MediaType) -> list[Entity]:
        """Liste toutes les entités d'une catégorie."""
        ...
