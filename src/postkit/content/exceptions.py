"""Exceptions raised while reading and writing post files."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from postkit.exceptions import PostkitError


class ContentError(PostkitError):
    """Base exception for post content errors."""


class FrontmatterError(ContentError):
    """Base exception for front-matter parsing problems."""


class MissingFrontmatterError(FrontmatterError):
    """Raised when a file does not open with a ``---`` delimiter line."""

    def __init__(self) -> None:
        super().__init__("File does not start with a '---' front matter delimiter")


class UnterminatedFrontmatterError(FrontmatterError):
    """Raised when the front matter block is never closed."""

    def __init__(self) -> None:
        super().__init__("Front matter block has no closing '---' delimiter")


class FrontmatterSyntaxError(FrontmatterError):
    """Raised when the front matter block is not valid YAML."""

    def __init__(self, reason: str, line: int | None = None) -> None:
        self.reason = reason
        self.line = line
        location = f" (line {line})" if line is not None else ""
        super().__init__(f"Invalid YAML in front matter{location}: {reason}")


class FrontmatterNotMappingError(FrontmatterError):
    """Raised when the front matter parses to something other than a mapping."""

    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(f"Front matter must be a mapping of keys to values, got {type_name}")


class PostDirectoryNotFoundError(ContentError):
    """Raised when the posts directory does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Posts directory not found: {path}")


class UniqueFilenameError(ContentError):
    """Raised when a free filename cannot be found for a new post."""

    def __init__(self, base_slug: str, attempts: int) -> None:
        self.base_slug = base_slug
        self.attempts = attempts
        super().__init__(f"Could not find a unique filename for '{base_slug}' after {attempts} attempts")


class InvalidPostMetadataError(ContentError):
    """Raised when metadata for a new post fails validation."""

    def __init__(self, errors: Sequence[dict[str, Any]]) -> None:
        self.errors = list(errors)
        details = "; ".join(
            f"{'.'.join(str(part) for part in err.get('loc', ())) or 'post'}: {err.get('msg', '')}"
            for err in self.errors
        )
        super().__init__(f"Invalid post metadata: {details}")
