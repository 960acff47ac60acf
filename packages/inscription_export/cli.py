"""CLI for the ``inscription_export`` package.

``cmd_export`` holds the command logic and returns a process exit code; the
Typer command wraps it. Environment variables (notably ``OKLINK_API_KEY``)
are loaded from a local ``.env`` via ``python-dotenv`` without overriding
values already set.

Nothing is written unless every page was fetched and normalized.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import typer
from dotenv import load_dotenv

from .errors import InscriptionExportError
from .export import DEFAULT_OUTPUT_DIR, write_csv
from .logging_setup import configure_logging, get_logger
from .pagination import PageFetcher, fetch_inscriptions

_logger = get_logger("inscription_export.cli")


def _mask(secret: str) -> str:
    tail = secret[-4:] if len(secret) > 4 else ""
    return f"****{tail}"


def _resolve_output_dir(output_dir: str | os.PathLike[str] | None) -> Path:
    if output_dir is not None:
        return Path(output_dir)
    env_dir = os.getenv("INSCRIPTION_EXPORT_OUTPUT_DIR")
    if env_dir and env_dir.strip():
        return Path(env_dir.strip())
    return Path(DEFAULT_OUTPUT_DIR)


def cmd_export(
    wallet: str,
    *,
    api_key: str | None = None,
    output_dir: str | os.PathLike[str] | None = None,
    fetch_page: PageFetcher | None = None,
) -> int:
    """Fetch every inscription for ``wallet`` and write them to a CSV.

    Parameters
    ----------
    wallet:
        Bitcoin wallet address to export.
    api_key:
        OKLink API key. Falls back to ``OKLINK_API_KEY`` when omitted.
    output_dir:
        Directory for the CSV. Falls back to ``INSCRIPTION_EXPORT_OUTPUT_DIR``,
        then ``./csv``.
    fetch_page:
        Optional replacement for the HTTP page fetch.

    Errors are written to stderr as ``Error: <message>`` and the function
    returns ``1``. On success the output path is printed and ``0`` returned.
    """

    api_key = api_key or os.getenv("OKLINK_API_KEY")
    if not api_key and fetch_page is None:
        print("Error: OKLINK_API_KEY is not set and no --api-key was given.", file=sys.stderr)
        return 1

    _logger.info(
        "Fetching inscriptions for wallet %s using API key %s", wallet, _mask(api_key or "")
    )

    try:
        inscriptions = fetch_inscriptions(api_key or "", wallet, fetch_page=fetch_page)
    except InscriptionExportError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    _logger.info("Total inscriptions: %d", len(inscriptions))

    try:
        path = write_csv(inscriptions, _resolve_output_dir(output_dir))
    except OSError as e:
        print(f"Error: failed to write CSV: {e}", file=sys.stderr)
        return 1

    print(path)
    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    add_completion=False,
    help=(
        "Export a wallet's BRC20 inscription history from the OKLink explorer "
        "as a CTC-compatible CSV. Loads OKLINK_API_KEY from a local .env."
    ),
)


@app.command()
def export_cmd(
    wallet: str = typer.Argument(..., help="Bitcoin wallet address to export."),
    *,
    api_key: str | None = typer.Option(
        None, "--api-key", help="OKLink API key (falls back to OKLINK_API_KEY)."
    ),
    output_dir: Path | None = typer.Option(
        None,
        "--output-dir",
        help="Directory for the CSV (falls back to INSCRIPTION_EXPORT_OUTPUT_DIR, then ./csv).",
        file_okay=False,
        dir_okay=True,
    ),
    log_level: str | None = typer.Option(
        None, "--log-level", help="Log level (falls back to INSCRIPTION_EXPORT_LOG_LEVEL)."
    ),
) -> None:
    """Fetch all inscription transactions for WALLET and write them to CSV."""

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging(log_level)

    code = cmd_export(wallet, api_key=api_key, output_dir=output_dir)
    if code != 0:
        raise typer.Exit(code)


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
