"""
Adaptateurs d'ingestion des fichiers importes.

- DelimitedFileParser : lecture des exports de tableur delimites
"""

from mediaset.adapters.upload.delimited_parser import DelimitedFileParser

__all__ = ["DelimitedFileParser"]
