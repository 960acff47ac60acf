"""Pytest configuration for test isolation.

Every test runs from its own temporary working directory with the package's
environment variables cleared. A developer's ``.env`` or exported
``OKLINK_API_KEY`` therefore never leaks into assertions, and CSV output
lands under ``tmp_path``.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

# Make sure the workspace `packages/` dir is on sys.path so `inscription_export`
# is importable, and the repo root so `tests.helpers` resolves.
_ROOT = Path(__file__).resolve().parents[1]
_PKG_DIR = _ROOT / "packages"
sys.path[:0] = [p for p in [str(_PKG_DIR), str(_ROOT)] if p not in sys.path]

from inscription_export.logging_setup import reset_logging  # noqa: E402

_ENV_VARS = (
    "OKLINK_API_KEY",
    "OKLINK_API_URL",
    "OKLINK_HTTP_TIMEOUT",
    "INSCRIPTION_EXPORT_LOG_LEVEL",
    "INSCRIPTION_EXPORT_OUTPUT_DIR",
)


@pytest.fixture(autouse=True)
def _isolate(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    yield
    # python-dotenv writes straight into os.environ, bypassing monkeypatch.
    for name in _ENV_VARS:
        os.environ.pop(name, None)
    # The CLI configures the package logger once per process; undo it so the
    # next test's stream capture sees output.
    reset_logging()
