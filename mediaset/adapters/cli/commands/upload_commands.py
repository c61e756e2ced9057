"""
Commande CLI d'import d'un export tabulaire.
"""

import asyncio
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.table import Table

from mediaset.adapters.cli.helpers import console, parse_media_type, with_container
from mediaset.services.upload.mapper import MalformedCellPolicy, RecordMapper
from mediaset.services.upload.service import UploadFormatError, UploadReport, UploadService

# Nombre maximal d'avertissements affiches
MAX_DISPLAYED_WARNINGS = 20


def upload(
    media_type: Annotated[
        str, typer.Argument(help="Categorie importee (books, movies, games, musics)")
    ],
    file: Annotated[
        Path, typer.Argument(help="Fichier delimite par ';' (premiere ligne = en-tete)")
    ],
    policy: Annotated[
        Optional[MalformedCellPolicy],
        typer.Option(
            "--policy",
            help="Traitement des cellules mal formees (defaut: configuration)",
            case_sensitive=False,
        ),
    ] = None,
) -> None:
    """Importe un export tabulaire dans le catalogue."""
    parsed_type = parse_media_type(media_type)
    asyncio.run(_upload_async(parsed_type, file, policy))


@with_container()
async def _upload_async(container, media_type, file: Path, policy) -> None:
    """Implementation async de la commande upload."""
    parser = container.file_parser()
    mapper = container.record_mapper()
    if policy is not None:
        mapper = RecordMapper(registry=container.converter_registry(), policy=policy)
    service = UploadService(
        repository=container.entity_repository(),
        mapper=mapper,
        parser=parser,
    )

    try:
        header_row, data_rows = parser.parse_file(file)
        report = service.upload(media_type, header_row, data_rows)
    except FileNotFoundError as e:
        console.print(f"[red]Erreur:[/red] {e}")
        raise typer.Exit(code=1)
    except UploadFormatError as e:
        console.print(f"[red]Erreur:[/red] {e}")
        raise typer.Exit(code=1)

    _display_report(report)


def _display_report(report: UploadReport) -> None:
    """Affiche le resume d'un import."""
    console.print(f"\n[bold]Import {report.media_type.label}[/bold]")
    console.print(f"  [green]{report.created_count}[/green] entite(s) creee(s)")
    if report.skipped_empty:
        console.print(f"  [dim]{report.skipped_empty} ligne(s) vide(s) ignoree(s)[/dim]")
    if report.rejected_rows:
        rows = ", ".join(str(row) for row in report.rejected_rows)
        console.print(f"  [red]{len(report.rejected_rows)}[/red] ligne(s) rejetee(s): {rows}")

    if not report.warnings:
        return

    table = Table(title=f"{len(report.warnings)} cellule(s) mal formee(s)")
    table.add_column("Ligne", justify="right")
    table.add_column("Champ")
    table.add_column("Valeur")
    table.add_column("Erreur", style="yellow")
    for warning in report.warnings[:MAX_DISPLAYED_WARNINGS]:
        table.add_row(str(warning.row_number), warning.field, warning.value, warning.reason)
    console.print(table)
    if len(report.warnings) > MAX_DISPLAYED_WARNINGS:
        console.print(f"[dim]... et {len(report.warnings) - MAX_DISPLAYED_WARNINGS} autre(s)[/dim]")
