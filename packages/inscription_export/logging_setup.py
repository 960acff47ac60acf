"""Centralized logging configuration for the ``inscription_export`` package.

- ``configure_logging(...)``: attach a single ``StreamHandler`` to the package
  root logger (``"inscription_export"``). Called once by the CLI at startup.
- ``get_logger(name)``: acquire a logger by name, attaching a ``NullHandler``
  to the package root logger when nothing has been configured yet.

Library modules never attach their own handlers; they call
``get_logger("inscription_export.<module>")`` and rely on the CLI (or host
application) for configuration.
"""

from __future__ import annotations

import logging
import os

_PKG_LOGGER_NAME = "inscription_export"
_LEVEL_ENV = "INSCRIPTION_EXPORT_LOG_LEVEL"
_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
_CONFIGURED = False


def _parse_level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        # Numeric strings or standard level names (INFO/DEBUG/etc.).
        level = level.strip().upper()
        if level.isdigit():
            return int(level)
        numeric = getattr(logging, level, None)
        if isinstance(numeric, int):
            return numeric
        return logging.INFO
    env_val = os.getenv(_LEVEL_ENV)
    if env_val:
        return _parse_level(env_val)
    return logging.INFO


def configure_logging(level: int | str | None = None) -> None:
    """Configure the package root logger exactly once.

    Parameters
    ----------
    level:
        Logging level as ``int`` or level-name string. When ``None``, the
        ``INSCRIPTION_EXPORT_LOG_LEVEL`` environment variable is used if set,
        otherwise ``logging.INFO``.

    Records go to whatever ``sys.stderr`` is when this runs, so a test runner
    that swaps the stream before invoking the CLI captures them.
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    logger = logging.getLogger(_PKG_LOGGER_NAME)

    # Drop placeholder NullHandlers so records are not swallowed after config.
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    resolved = _parse_level(level)
    handler = logging.StreamHandler()
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(_FORMAT))

    logger.setLevel(resolved)
    logger.addHandler(handler)
    logger.propagate = False

    _CONFIGURED = True


def reset_logging() -> None:
    """Detach handlers installed by :func:`configure_logging`.

    Used by tests and embedding applications that call the CLI entrypoint
    more than once in a single process.
    """

    global _CONFIGURED
    logger = logging.getLogger(_PKG_LOGGER_NAME)
    for h in list(logger.handlers):
        logger.removeHandler(h)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    _CONFIGURED = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger by name with library-safe defaults.

    When central configuration hasn't run yet, a ``NullHandler`` is attached
    to the package root logger to avoid "no handler" warnings.
    """

    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "reset_logging"]
