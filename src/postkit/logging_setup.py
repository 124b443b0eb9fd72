"""Centralized logging configuration for postkit."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Final, cast

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["configure_logging", "console"]

_LOG_LEVEL_ENV: Final[str] = "POSTKIT_LOG_LEVEL"
_DEFAULT_LEVEL_NAME: Final[str] = "INFO"

console = Console(stderr=True)

if TYPE_CHECKING:
    class _ManagedRichHandler(RichHandler):
        _postkit_managed: bool
else:
    _ManagedRichHandler = RichHandler


def _resolve_level(verbose: bool) -> int:
    """Return the logging level from the CLI flag or the environment."""
    if verbose:
        return logging.DEBUG
    level_name = os.getenv(_LOG_LEVEL_ENV, _DEFAULT_LEVEL_NAME).upper()
    return getattr(logging, level_name, logging.INFO)


def configure_logging(*, verbose: bool = False) -> None:
    """Configure logging once with a Rich handler."""
    root_logger = logging.getLogger()
    level = _resolve_level(verbose)

    managed_handler: _ManagedRichHandler | None = None
    for handler in root_logger.handlers:
        if isinstance(handler, RichHandler) and getattr(handler, "_postkit_managed", False):
            managed_handler = cast(_ManagedRichHandler, handler)
            break

    if managed_handler is None:
        root_logger.handlers.clear()
        handler = _ManagedRichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        handler._postkit_managed = True
        root_logger.addHandler(handler)
    else:
        handler = managed_handler
        handler.markup = False
        handler.show_path = False

    root_logger.setLevel(level)
    logging.captureWarnings(True)
