"""
Commandes CLI d'enrichissement des images de couverture.
"""

import asyncio
import signal
from typing import Annotated, Optional

import typer
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

from mediaset.adapters.cli.helpers import (
    console,
    parse_media_type,
    suppress_loguru,
    with_container,
)
from mediaset.core.entities.media import lookup_state
from mediaset.core.value_objects.media_type import MediaType


def enrich_images(
    media_type: Annotated[
        Optional[str],
        typer.Option("--media", "-m", help="Limiter a une categorie"),
    ] = None,
    limit: Annotated[
        int,
        typer.Option("--limit", "-l", help="Nombre maximum d'entites a traiter"),
    ] = 50,
) -> None:
    """Recherche les images de couverture manquantes (une passe)."""
    parsed_type = parse_media_type(media_type) if media_type else None
    asyncio.run(_enrich_images_async(parsed_type, limit))


@with_container()
async def _enrich_images_async(container, media_type, limit: int) -> None:
    """Implementation async de la commande enrich-images."""
    factory = container.strategy_factory()
    repository = container.entity_repository()
    lookup_service = container.image_lookup_service()

    media_types = [media_type] if media_type else [
        candidate for candidate in MediaType if factory.supports(candidate)
    ]
    if not media_types:
        console.print("[yellow]Aucune strategie de recherche configuree.[/yellow]")
        return

    entities = []
    for candidate in media_types:
        entities.extend(repository.list_missing_images(candidate, limit - len(entities)))
        if len(entities) >= limit:
            break

    if not entities:
        console.print("[yellow]Aucune entite a enrichir.[/yellow]")
        return

    console.print(f"[bold cyan]Recherche d'images[/bold cyan]: {len(entities)} entite(s)\n")
    succeeded = failed = permanent = 0
    with suppress_loguru():
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console,
        ) as progress:
            task = progress.add_task("[cyan]Enrichissement...", total=len(entities))
            for entity in entities:
                result = await lookup_service.lookup_and_save_image(entity)
                repository.save(entity)
                label = f"{entity.media_type.label} {entity.id} - {entity.title or '(sans titre)'}"
                if result.success:
                    succeeded += 1
                    progress.console.print(f"  [green]✓[/green] {label}")
                else:
                    failed += 1
                    permanent += int(result.permanent_failure)
                    state = lookup_state(entity).value
                    progress.console.print(
                        f"  [red]✗[/red] {label} - {result.error_message} [dim]({state})[/dim]"
                    )
                progress.advance(task)

    console.print("\n[bold]Resume:[/bold]")
    console.print(f"  [green]{succeeded}[/green] image(s) enregistree(s)")
    if failed:
        console.print(f"  [red]{failed}[/red] echec(s) dont {permanent} definitif(s)")


def enrich_daemon() -> None:
    """Lance l'enrichissement periodique jusqu'a interruption (Ctrl+C)."""
    asyncio.run(_enrich_daemon_async())


@with_container()
async def _enrich_daemon_async(container) -> None:
    """Implementation async de la commande enrich-daemon."""
    service = container.background_image_lookup_service()
    stop_event = asyncio.Event()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop_event.set)
        except NotImplementedError:
            # Windows : pas de gestion de signaux dans la boucle asyncio
            pass

    console.print("[bold cyan]Enrichissement periodique demarre[/bold cyan] (Ctrl+C pour arreter)")
    await service.run_once()
    await service.run_forever(stop_event)
