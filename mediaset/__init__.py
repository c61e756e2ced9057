"""
MediaSet - Catalogue personnel de livres, films, jeux et musique.

Ce package fournit l'import de fichiers tabulaires (exports de tableur)
vers des entités typées, puis l'enrichissement de ces entités avec des
images de couverture récupérées depuis des services externes.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entités, ports, objets valeur)
- services/ : Couche application (import, recherche, enrichissement)
- adapters/ : Couche infrastructure (CLI, clients API, stockage d'images)
- infrastructure/ : Persistance SQLModel
- web/ : API FastAPI
"""

__version__ = "0.1.0"
