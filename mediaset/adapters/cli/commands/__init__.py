"""Sous-package CLI commands - re-exporte les commandes publiques."""

from mediaset.adapters.cli.commands.enrichment_commands import enrich_daemon, enrich_images
from mediaset.adapters.cli.commands.lookup_commands import lookup, metadata
from mediaset.adapters.cli.commands.upload_commands import upload

__all__ = [
    "enrich_daemon",
    "enrich_images",
    "lookup",
    "metadata",
    "upload",
]
