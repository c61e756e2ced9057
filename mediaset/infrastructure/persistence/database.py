"""
Configuration de la base de donnees SQLite pour MediaSet.

Ce module fournit :
- Engine SQLite configure pour un usage multi-thread (workers, API web)
- Session factory avec context manager
- Fonction d'initialisation des tables

La base de donnees est configuree via MEDIASET_DATABASE_URL (defaut: sqlite:///mediaset.db).
"""

from collections.abc import Generator
from pathlib import Path
from typing import Optional

from sqlalchemy import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

# Engine global - initialise lors du premier appel a get_engine()
_engine: Optional[Engine] = None


def build_engine(db_url: str) -> Engine:
    """
    Cree un engine pour l'URL donnee.

    Une base SQLite en memoire partage une connexion unique (StaticPool),
    sinon chaque session verrait une base vide.
    """
    if db_url.startswith("sqlite:///") and ":memory:" not in db_url:
        db_path = Path(db_url.replace("sqlite:///", "", 1))
        db_path.parent.mkdir(exist_ok=True, parents=True)

    kwargs = {}
    if db_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in db_url or db_url == "sqlite://":
            kwargs["poolclass"] = StaticPool
    return create_engine(db_url, echo=False, **kwargs)


def get_engine() -> Engine:
    """
    Retourne l'engine de l'application, en le creant si necessaire.

    Utilise la configuration de l'application pour l'URL de la BDD.
    """
    global _engine
    if _engine is None:
        from mediaset.config import Settings

        _engine = build_engine(Settings().database_url)
    return _engine


def reset_engine() -> None:
    """Oublie l'engine courant (changement de configuration, tests)."""
    global _engine
    if _engine is not None:
        _engine.dispose()
    _engine = None


def get_session() -> Generator[Session, None, None]:
    """
    Generateur de session SQLModel.

    Utilisation avec next() :
        session = next(get_session())

    Yields:
        Session SQLModel connectee a l'engine
    """
    with Session(get_engine()) as session:
        yield session


def init_db(engine: Optional[Engine] = None) -> None:
    """
    Initialise la base de donnees en creant toutes les tables.

    Importe les modeles pour enregistrer leurs metadonnees dans
    SQLModel.metadata, puis cree les tables manquantes.

    Doit etre appelee une fois au demarrage de l'application.
    """
    # Import ici pour eviter les imports circulaires
    from mediaset.infrastructure.persistence import models  # noqa: F401

    SQLModel.metadata.create_all(engine or get_engine())
