"""
Selection de la strategie de recherche par categorie et type d'identifiant.
"""

from typing import Iterable

from mediaset.core.ports.lookup import ILookupStrategy, UnsupportedLookupError
from mediaset.core.value_objects.identifiers import IdentifierType
from mediaset.core.value_objects.media_type import MediaType


class LookupStrategyFactory:
    """
    Registre des strategies disponibles.

    Les strategies sont interrogees dans l'ordre d'enregistrement ; la
    premiere qui accepte le couple (categorie, type d'identifiant) gagne.
    Une strategie absente (cle API non configuree) n'est simplement pas
    enregistree.
    """

    def __init__(self, strategies: Iterable[ILookupStrategy]) -> None:
        self._strategies = list(strategies)

    def get_strategy(
        self, media_type: MediaType, identifier_type: IdentifierType
    ) -> ILookupStrategy:
        """
        Retourne la strategie gerant ce couple.

        Raises:
            UnsupportedLookupError: Si aucune strategie ne le gere
        """
        for strategy in self._strategies:
            if strategy.can_handle(media_type, identifier_type):
                return strategy
        raise UnsupportedLookupError(media_type, identifier_type)

    def supports(self, media_type: MediaType) -> bool:
        """Verifie qu'au moins une strategie couvre cette categorie."""
        return any(strategy.media_type == media_type for strategy in self._strategies)

    @property
    def strategies(self) -> list[ILookupStrategy]:
        return list(self._strategies)
