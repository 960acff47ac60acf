"""Exception types raised by the export pipeline.

Every error is fatal for the run: nothing in the package catches these to
retry or degrade. The CLI reports the message and exits non-zero. Subclasses
also derive from the closest builtin (``ValueError``/``RuntimeError``) so
callers that only know the builtins still catch them.
"""

from __future__ import annotations


class InscriptionExportError(Exception):
    """Base class for all errors raised by ``inscription_export``."""


class UnknownValueError(InscriptionExportError, ValueError):
    """A raw enumerated string is outside the recognized vocabulary."""

    def __init__(self, kind: str, value: str) -> None:
        super().__init__(f"unknown {kind}: {value}")
        self.kind = kind
        self.value = value


class CoercionError(InscriptionExportError, ValueError):
    """A numeric or temporal string could not be coerced."""


class MissingPaginationError(InscriptionExportError, ValueError):
    """The response envelope carried no pagination block."""


class DecodeError(InscriptionExportError, ValueError):
    """The response body is not JSON or does not match the expected shape."""


class TransportError(InscriptionExportError, RuntimeError):
    """The HTTP request failed or returned a non-success status."""

    def __init__(self, message: str, *, status: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status = status
        self.body = body


__all__ = [
    "CoercionError",
    "DecodeError",
    "InscriptionExportError",
    "MissingPaginationError",
    "TransportError",
    "UnknownValueError",
]
