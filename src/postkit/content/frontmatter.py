"""Helpers for parsing and writing YAML front matter in Markdown posts."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

import frontmatter
import yaml

from postkit.content.exceptions import (
    FrontmatterNotMappingError,
    FrontmatterSyntaxError,
    MissingFrontmatterError,
    UnterminatedFrontmatterError,
)

if TYPE_CHECKING:
    from pathlib import Path

OPENING_DELIMITER = "---"
CLOSING_DELIMITERS = ("---", "...")
_BOM = "\ufeff"

_yaml_handler = frontmatter.YAMLHandler()


def split_frontmatter(content: str) -> tuple[str, str]:
    """Split a post into its raw YAML block and its body.

    Args:
        content: Full text of a post.

    Returns:
        Tuple of (YAML text between the delimiters, body after the closing delimiter).

    Raises:
        MissingFrontmatterError: If the first line is not ``---``.
        UnterminatedFrontmatterError: If no closing ``---`` (or ``...``) line follows.

    """
    lines = content.removeprefix(_BOM).splitlines(keepends=True)
    closing = _closing_index(lines)
    return "".join(lines[1:closing]), "".join(lines[closing + 1 :])


def _strip_line_ending(line: str) -> str:
    return line.rstrip("\r\n")


def _line_ending(line: str) -> str:
    return line[len(_strip_line_ending(line)) :]


def _closing_index(lines: list[str]) -> int:
    """Index of the closing delimiter line; ``lines[0]`` must be the opening one."""
    if not lines or _strip_line_ending(lines[0]) != OPENING_DELIMITER:
        raise MissingFrontmatterError

    for index, line in enumerate(lines[1:], start=1):
        if _strip_line_ending(line) in CLOSING_DELIMITERS:
            return index

    raise UnterminatedFrontmatterError


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Parse YAML front matter using python-frontmatter.

    The delimiters are checked strictly first so that a file without a
    front matter block is reported instead of being read as all body.

    Args:
        content: Markdown content including front matter.

    Returns:
        Tuple of (metadata dict, body string).

    Raises:
        FrontmatterError: If the block is missing, unterminated, not YAML or not a mapping.

    """
    yaml_text, body = split_frontmatter(content)

    try:
        raw_metadata = _yaml_handler.load(yaml_text)
    except (yaml.YAMLError, ValueError) as exc:
        # ValueError: YAML timestamps such as 2024-02-30 that are not real dates
        mark = getattr(exc, "problem_mark", None)
        # +2: the block starts after the opening delimiter and marks are zero-based
        line = mark.line + 2 if mark is not None else None
        reason = getattr(exc, "problem", None) or str(exc)
        raise FrontmatterSyntaxError(reason, line) from exc

    if raw_metadata is None:
        return {}, body
    if not isinstance(raw_metadata, dict):
        raise FrontmatterNotMappingError(type(raw_metadata).__name__)

    return dict(raw_metadata), body


def parse_frontmatter_file(path: Path, *, encoding: str = "utf-8") -> tuple[dict[str, Any], str]:
    """Read a Markdown file and parse its front matter.

    Raises:
        OSError: If the file cannot be read.
        FrontmatterError: If the front matter is malformed.

    """
    content = path.read_text(encoding=encoding)
    return parse_frontmatter(content)


def render_post(metadata: dict[str, Any], body: str) -> str:
    """Serialize front matter and body into post text, keeping key order."""
    post = frontmatter.Post(body.strip("\n"))
    post.metadata.update(metadata)
    text = frontmatter.dumps(post, sort_keys=False)
    return text if text.endswith("\n") else text + "\n"


def update_frontmatter_field(content: str, key: str, value: Any) -> str:
    """Set one scalar key inside the front matter block, leaving other lines untouched.

    Args:
        content: Full text of a post.
        key: Top-level front matter key.
        value: New scalar value, rendered as YAML.

    Returns:
        The updated post text.

    Raises:
        FrontmatterError: If the block is missing or unterminated.

    """
    prefix = _BOM if content.startswith(_BOM) else ""
    lines = content.removeprefix(_BOM).splitlines(keepends=True)
    closing = _closing_index(lines)
    rendered = yaml.safe_dump({key: value}, default_flow_style=False, allow_unicode=True).strip()
    newline = _line_ending(lines[0]) or "\n"

    pattern = re.compile(rf"{re.escape(key)}\s*:")
    for index in range(1, closing):
        if pattern.match(lines[index]):
            lines[index] = rendered + (_line_ending(lines[index]) or newline)
            break
    else:
        lines.insert(closing, rendered + newline)

    return prefix + "".join(lines)
