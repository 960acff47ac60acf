"""Project inscriptions onto the CTC CSV import schema and write the file.

Header (exact order)::

    Timestamp (UTC), Type, Base Currency, Base Amount, Quote Currency,
    Quote Amount, Fee Currency, Fee Amount, From, To, Blockchain, ID,
    Description

Quote and fee columns are always empty; ``Blockchain`` is always
``Bitcoin``. Files are named after the local time of the export.
"""

from __future__ import annotations

import csv
from collections.abc import Iterable
from datetime import UTC, datetime
from os import PathLike
from pathlib import Path

from .logging_setup import get_logger
from .models import CsvRow, Inscription, OutputCategory

CSV_HEADER: tuple[str, ...] = (
    "Timestamp (UTC)",
    "Type",
    "Base Currency",
    "Base Amount",
    "Quote Currency",
    "Quote Amount",
    "Fee Currency",
    "Fee Amount",
    "From",
    "To",
    "Blockchain",
    "ID",
    "Description",
)

TIMESTAMP_FORMAT = "%Y/%m/%d %H:%M:%S"
FILENAME_FORMAT = "%Y-%m-%d %H-%M-%S"
DEFAULT_OUTPUT_DIR = "csv"

_logger = get_logger("inscription_export.export")


def to_csv_row(inscription: Inscription) -> CsvRow:
    """Format one inscription for export. Total; never raises."""

    category = OutputCategory.from_action(inscription.action)
    return CsvRow(
        timestamp=inscription.timestamp.astimezone(UTC).strftime(TIMESTAMP_FORMAT),
        category=category.value,
        base_currency=inscription.token,
        # str(int) is exact base-10: no separators, rounding or exponent.
        base_amount=str(inscription.amount),
        from_address=inscription.from_address,
        to_address=inscription.to_address,
        hash=inscription.tx_id,
        description=(
            f"{inscription.token_type.label} {inscription.action.label} "
            f"with inscription_id {inscription.inscription_id}"
        ),
    )


def output_path(
    out_dir: str | PathLike[str] = DEFAULT_OUTPUT_DIR, now: datetime | None = None
) -> Path:
    """Return ``<out_dir>/<YYYY-MM-DD HH-MM-SS>.csv`` for ``now`` (local time)."""

    stamp = (now or datetime.now().astimezone()).strftime(FILENAME_FORMAT)
    return Path(out_dir) / f"{stamp}.csv"


def write_csv(
    inscriptions: Iterable[Inscription],
    out_dir: str | PathLike[str] = DEFAULT_OUTPUT_DIR,
    *,
    now: datetime | None = None,
) -> Path:
    """Write all inscriptions to a new CSV under ``out_dir`` and return its path.

    The directory is created when missing. Rows follow the input order. I/O
    failures propagate as ``OSError``.
    """

    rows = [to_csv_row(i) for i in inscriptions]
    path = output_path(out_dir, now)
    path.parent.mkdir(parents=True, exist_ok=True)

    _logger.info("Writing %s", path)
    with path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_HEADER)
        for row in rows:
            writer.writerow(row.as_record())
    _logger.info("Successfully wrote %d rows to %s", len(rows), path)
    return path


__all__ = [
    "CSV_HEADER",
    "DEFAULT_OUTPUT_DIR",
    "output_path",
    "to_csv_row",
    "write_csv",
]
