"""Custom exceptions for configuration handling."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from postkit.exceptions import PostkitError


class ConfigError(PostkitError):
    """Base exception for all configuration-related errors."""


class ConfigValidationError(ConfigError):
    """Raised when the configuration file fails validation."""

    def __init__(
        self,
        path: Path | None,
        errors: Sequence[dict[str, Any]] | None = None,
        reason: str | None = None,
    ) -> None:
        self.path = path
        self.errors = list(errors or [])
        source = str(path) if path else "configuration"
        if reason:
            message = f"{source}: {reason}"
        else:
            message = f"{source}: validation failed with {len(self.errors)} error(s)."
        super().__init__(message)


class ConfigExistsError(ConfigError):
    """Raised when ``init`` would overwrite an existing configuration file."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Configuration already exists at {path} (use --force to overwrite)")
