"""
Commandes CLI de recherche par identifiant et de consultation des metadonnees.
"""

import asyncio
from dataclasses import asdict
from typing import Annotated

import typer
from rich.table import Table

from mediaset.adapters.cli.helpers import (
    console,
    parse_identifier,
    parse_media_type,
    suppress_loguru,
    with_container,
)
from mediaset.core.ports.lookup import LookupResponse, UnsupportedLookupError


def lookup(
    media_type: Annotated[str, typer.Argument(help="Categorie (books, movies, games, musics)")],
    identifier_type: Annotated[
        str, typer.Argument(help="Type d'identifiant (isbn, lccn, oclc, olid, upc, ean)")
    ],
    value: Annotated[str, typer.Argument(help="Valeur de l'identifiant")],
) -> None:
    """Recherche les metadonnees d'un media par identifiant."""
    parsed_type = parse_media_type(media_type)
    parsed_identifier = parse_identifier(identifier_type)
    asyncio.run(_lookup_async(parsed_type, parsed_identifier, value))


@with_container(requires_db=False)
async def _lookup_async(container, media_type, identifier_type, value: str) -> None:
    """Implementation async de la commande lookup."""
    factory = container.strategy_factory()
    try:
        strategy = factory.get_strategy(media_type, identifier_type)
    except UnsupportedLookupError as e:
        console.print(f"[red]Erreur:[/red] {e}")
        raise typer.Exit(code=1)

    with suppress_loguru():
        response = await strategy.lookup(identifier_type, value)

    if response is None:
        console.print(f"[yellow]Aucun resultat pour {identifier_type.value} {value}[/yellow]")
        raise typer.Exit(code=1)

    _display_response(response)


def _display_response(response: LookupResponse) -> None:
    """Affiche les champs renseignes d'une reponse."""
    table = Table(title=response.title or "(sans titre)", show_header=False)
    table.add_column("Champ", style="cyan")
    table.add_column("Valeur")
    for name, raw in asdict(response).items():
        if raw in (None, "", []):
            continue
        if name == "disc_list":
            value = f"{len(raw)} piste(s)"
        elif isinstance(raw, list):
            value = ", ".join(str(item) for item in raw)
        else:
            value = str(raw)
        table.add_row(name, value)
    console.print(table)


def metadata(
    media_type: Annotated[str, typer.Argument(help="Categorie (books, movies, games, musics)")],
    property_name: Annotated[
        str, typer.Argument(metavar="PROPERTY", help="Champ consulte (ex: format, genres)")
    ],
) -> None:
    """Liste les valeurs existantes d'un champ (formats, genres...)."""
    parsed_type = parse_media_type(media_type)
    asyncio.run(_metadata_async(parsed_type, property_name))


@with_container()
async def _metadata_async(container, media_type, property_name: str) -> None:
    """Implementation async de la commande metadata."""
    service = container.metadata_service()
    try:
        values = service.get_values(media_type, property_name)
    except ValueError as e:
        console.print(f"[red]Erreur:[/red] {e}")
        raise typer.Exit(code=1)

    if not values:
        console.print("[dim]Aucune valeur.[/dim]")
        return
    for value in values:
        console.print(value)
