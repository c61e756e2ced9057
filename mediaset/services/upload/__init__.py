"""
Import tabulaire : conversion des cellules, liaison des en-tetes et mapping.

Exports:
- ConverterRegistry, ConversionError, EnumConverter : conversion des cellules
- resolve, bind_columns : liaison en-tete -> champ
- RecordMapper, MappingResult, MappingWarning, MalformedCellPolicy : mapping
- UploadService, UploadReport, UploadFormatError : import complet
"""

from mediaset.services.upload.converters import (
    ConversionError,
    ConverterRegistry,
    EnumConverter,
)
from mediaset.services.upload.binder import bind_columns, resolve
from mediaset.services.upload.mapper import (
    MalformedCellPolicy,
    MappingResult,
    MappingWarning,
    RecordMapper,
)
from mediaset.services.upload.service import (
    UploadFormatError,
    UploadReport,
    UploadService,
)

__all__ = [
    "ConversionError",
    "ConverterRegistry",
    "EnumConverter",
    "bind_columns",
    "resolve",
    "MalformedCellPolicy",
    "MappingResult",
    "MappingWarning",
    "RecordMapper",
    "UploadFormatError",
    "UploadReport",
    "UploadService",
]
