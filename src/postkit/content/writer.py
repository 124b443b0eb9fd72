"""Scaffolding new post files."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from postkit.content.exceptions import InvalidPostMetadataError, UniqueFilenameError
from postkit.content.frontmatter import render_post
from postkit.content.schema import REQUIRED_KEYS, PostFrontmatter
from postkit.text import slugify

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

logger = logging.getLogger(__name__)

MAX_FILENAME_ATTEMPTS = 100


def _resolve_filepath(output_dir: Path, prefix: str, base_slug: str) -> Path:
    """Return a free path, appending ``-2``, ``-3``, ... to the slug on collision.

    Raises:
        UniqueFilenameError: If every candidate up to ``MAX_FILENAME_ATTEMPTS`` exists.

    """
    max_attempts = MAX_FILENAME_ATTEMPTS
    for i in range(max_attempts):
        slug_candidate = base_slug if i == 0 else f"{base_slug}-{i + 1}"
        filepath = output_dir / f"{prefix}{slug_candidate}.md"
        if not filepath.exists():
            return filepath

    raise UniqueFilenameError(base_slug, max_attempts)


def write_post(
    metadata: dict[str, Any],
    body: str,
    output_dir: Path,
    *,
    dated: bool = True,
    required_fields: Sequence[str] = (),
) -> Path:
    """Validate ``metadata`` and write a new post into ``output_dir``.

    Args:
        metadata: Front matter values. An optional ``slug`` key picks the
            filename; it is not written to the front matter.
        body: Markdown body.
        output_dir: Posts (or drafts) directory, created if needed.
        dated: Prefix the filename with the post date (posts) or not (drafts).
        required_fields: Extra keys that must have a value, as in
            ``lint.required_fields``.

    Returns:
        Path of the written file.

    Raises:
        InvalidPostMetadataError: If the metadata fails schema validation or
            lacks a required field.
        UniqueFilenameError: If no free filename is found.

    """
    values = dict(metadata)
    slug_source = values.pop("slug", None) or values.get("title")

    errors: list[dict[str, Any]] = []
    record = None
    try:
        record = PostFrontmatter.model_validate(values)
    except ValidationError as e:
        errors.extend(e.errors(include_url=False))
    errors.extend(
        {"loc": (key,), "msg": "required by lint.required_fields", "type": "missing"}
        for key in required_fields
        if key not in REQUIRED_KEYS and values.get(key) is None
    )
    if errors or record is None:
        raise InvalidPostMetadataError(errors)

    output_dir.mkdir(parents=True, exist_ok=True)
    prefix = f"{record.date.isoformat()}-" if dated else ""
    filepath = _resolve_filepath(output_dir, prefix, slugify(slug_source))

    filepath.write_text(render_post(record.to_yaml_dict(), body), encoding="utf-8")
    logger.info("Wrote %s", filepath)
    return filepath
