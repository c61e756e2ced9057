"""
Point d'entrée CLI de MediaSet.

Initialise le container DI, configure le logging et fournit les commandes CLI.
"""

from typing import Annotated

import typer
from loguru import logger

from . import __version__
from .adapters.cli.commands import enrich_daemon, enrich_images, lookup, metadata, upload
from .config import Settings
from .container import Container
from .logging_config import configure_logging

app = typer.Typer(
    name="mediaset",
    help="Catalogue de livres, films, jeux et musique",
)
container = Container()

# Etat global pour les options de verbosite
state = {"verbose": 0, "quiet": False}


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Augmenter la verbosite (-v, -vv)"
        ),
    ] = 0,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Mode silencieux (erreurs uniquement)"),
    ] = False,
) -> None:
    """MediaSet - Catalogue de medias personnel."""
    if quiet:
        state["quiet"] = True
        _configure_logging("ERROR")
    elif verbose:
        state["verbose"] = verbose
        _configure_logging("INFO" if verbose == 1 else "DEBUG")


def _configure_logging(log_level: str) -> None:
    settings = get_config()
    configure_logging(
        log_level=log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )


# Monter les commandes
app.command()(upload)
app.command(name="enrich-images")(enrich_images)
app.command(name="enrich-daemon")(enrich_daemon)
app.command()(lookup)
app.command()(metadata)


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return container.config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    logger.info("Configuration MediaSet")
    typer.echo(f"Base de données : {config.database_url}")
    typer.echo(f"Images : {config.image_storage_dir}")
    typer.echo(f"OpenLibrary : {'activée' if config.openlibrary_enabled else 'désactivée'}")
    typer.echo(f"API TMDB : {'activée' if config.tmdb_enabled else 'désactivée'}")
    typer.echo(f"API GiantBomb : {'activée' if config.giantbomb_enabled else 'désactivée'}")
    typer.echo(f"MusicBrainz : {'activée' if config.musicbrainz_enabled else 'désactivée'}")
    typer.echo(
        f"Enrichissement en arrière-plan : "
        f"{'activé' if config.background_enabled else 'désactivé'} "
        f"(toutes les {config.background_interval_hours:g}h, lot de {config.background_batch_size})"
    )
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"MediaSet v{__version__}")


@app.command()
def serve(
    host: Annotated[str, typer.Option(help="Adresse d'écoute")] = "127.0.0.1",
    port: Annotated[int, typer.Option(help="Port d'écoute")] = 8000,
    reload: Annotated[bool, typer.Option(help="Rechargement automatique")] = False,
) -> None:
    """Lance l'API web."""
    import uvicorn

    uvicorn.run("mediaset.web.app:app", host=host, port=port, reload=reload)


def main() -> None:
    """Point d'entrée de l'application."""
    _configure_logging(get_config().log_level)
    logger.info(f"Démarrage de MediaSet v{__version__}")
    app()


if __name__ == "__main__":
    main()
