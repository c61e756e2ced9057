"""
Utilitaires partages pour les commandes CLI de MediaSet.

Ce module fournit :
- console : instance Rich Console partagee
- suppress_loguru : context manager pour desactiver/reactiver les logs loguru
- with_container : decorateur injectant un container initialise
- parse_media_type / parse_identifier : validation des arguments
"""

from contextlib import contextmanager
from functools import wraps

import typer
from loguru import logger as loguru_logger
from rich.console import Console

from mediaset.container import Container
from mediaset.core.value_objects.identifiers import (
    IdentifierType,
    InvalidIdentifierTypeError,
    parse_identifier_type,
)
from mediaset.core.value_objects.media_type import MediaType
from mediaset.core.value_objects.parameter import Parameter

console = Console()


@contextmanager
def suppress_loguru():
    """
    Context manager pour desactiver les logs loguru pendant l'affichage Rich.

    Usage:
        with suppress_loguru():
            console.print(...)
    """
    loguru_logger.disable("mediaset")
    try:
        yield
    finally:
        loguru_logger.enable("mediaset")


def with_container(requires_db: bool = True):
    """
    Decorateur qui injecte un container initialise en premier argument.

    Args:
        requires_db: Si True (defaut), initialise la base de donnees.

    Usage:
        @with_container()
        async def my_command(container, ...):
            config = container.config()
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            container = Container()
            if requires_db:
                container.database.init()
            return await func(container, *args, **kwargs)
        return wrapper
    return decorator


def parse_media_type(raw: str) -> MediaType:
    """
    Valide une categorie passee en argument.

    Raises:
        typer.BadParameter: Si la categorie est inconnue
    """
    parameter = Parameter.parse(MediaType, raw)
    if not parameter.is_valid:
        raise typer.BadParameter(
            f"Invalid media type: {raw}. Valid types are: {MediaType.valid_types()}"
        )
    return parameter.value


def parse_identifier(raw: str) -> IdentifierType:
    """
    Valide un type d'identifiant passe en argument.

    Raises:
        typer.BadParameter: Si le type est inconnu
    """
    try:
        return parse_identifier_type(raw)
    except InvalidIdentifierTypeError as e:
        raise typer.BadParameter(str(e)) from e
