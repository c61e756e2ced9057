"""
Recherche de metadonnees par identifiant externe.

Une strategie par categorie de media, selectionnee par LookupStrategyFactory.
"""

from mediaset.services.lookup.book_strategy import BookLookupStrategy
from mediaset.services.lookup.factory import LookupStrategyFactory
from mediaset.services.lookup.game_strategy import GameLookupStrategy
from mediaset.services.lookup.matcher import best_title_match, title_score
from mediaset.services.lookup.movie_strategy import MovieLookupStrategy
from mediaset.services.lookup.music_strategy import MusicLookupStrategy

__all__ = [
    "BookLookupStrategy",
    "GameLookupStrategy",
    "LookupStrategyFactory",
    "MovieLookupStrategy",
    "MusicLookupStrategy",
    "best_title_match",
    "title_score",
]
