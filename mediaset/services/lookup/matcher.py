"""
Selection du meilleur resultat d'une recherche par titre.

Le titre issu d'un code-barres est approximatif : on privilegie une
correspondance exacte (hors casse), puis le resultat le plus proche selon
rapidfuzz, et a defaut le premier resultat de l'API.
"""

from typing import Optional, Sequence

from rapidfuzz import fuzz, utils

from mediaset.core.ports.api_clients import SearchResult

# Score minimal (0-100) pour preferer un resultat au premier de la liste
MIN_TITLE_SCORE = 50.0


def title_score(query_title: str, candidate_title: str) -> float:
    """
    Calcule la similarite de deux titres (0-100).

    token_sort_ratio rend le score independant de l'ordre des mots,
    default_process normalise la casse et la ponctuation.
    """
    return fuzz.token_sort_ratio(
        query_title, candidate_title, processor=utils.default_process
    )


def best_title_match(
    query_title: str,
    results: Sequence[SearchResult],
    min_score: float = MIN_TITLE_SCORE,
) -> Optional[SearchResult]:
    """
    Choisit le resultat le plus proche du titre recherche.

    Args:
        query_title: Titre nettoye utilise pour la recherche
        results: Resultats dans l'ordre de l'API
        min_score: Score minimal pour s'ecarter du premier resultat

    Returns:
        Le meilleur resultat, ou None si la liste est vide
    """
    if not results:
        return None

    wanted = query_title.casefold()
    for result in results:
        if result.title.casefold() == wanted:
            return result

    best = max(results, key=lambda result: title_score(query_title, result.title))
    if title_score(query_title, best.title) >= min_score:
        return best
    return results[0]
