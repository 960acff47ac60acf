"""Public interface for the ``inscription_export`` package.

Symbol re-exports only; no runtime logic lives here.
"""

from .errors import (
    CoercionError,
    DecodeError,
    InscriptionExportError,
    MissingPaginationError,
    TransportError,
    UnknownValueError,
)
from .export import CSV_HEADER, output_path, to_csv_row, write_csv
from .models import (
    ActionKind,
    CsvRow,
    Inscription,
    InscriptionRaw,
    OutputCategory,
    Page,
    PaginationRaw,
    ResponseRaw,
    TokenStandard,
    TransactionStatus,
)
from .normalizers import (
    normalize_inscription,
    normalize_page,
    normalize_response,
    parse_amount,
    parse_timestamp_ms,
)
from .pagination import fetch_inscriptions, iter_pages

__all__ = [
    # Pipeline
    "fetch_inscriptions",
    "iter_pages",
    "normalize_inscription",
    "normalize_page",
    "normalize_response",
    "parse_amount",
    "parse_timestamp_ms",
    "to_csv_row",
    "write_csv",
    "output_path",
    "CSV_HEADER",
    # Models
    "ActionKind",
    "CsvRow",
    "Inscription",
    "InscriptionRaw",
    "OutputCategory",
    "Page",
    "PaginationRaw",
    "ResponseRaw",
    "TokenStandard",
    "TransactionStatus",
    # Errors
    "CoercionError",
    "DecodeError",
    "InscriptionExportError",
    "MissingPaginationError",
    "TransportError",
    "UnknownValueError",
]
