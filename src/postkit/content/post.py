"""Loading post files from a content directory."""

from __future__ import annotations

import datetime as dt
import logging
import re
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path
from typing import TYPE_CHECKING, Any

from postkit.content.exceptions import FrontmatterError, PostDirectoryNotFoundError
from postkit.content.frontmatter import parse_frontmatter_file
from postkit.content.schema import PostFrontmatter

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)

POST_SUFFIXES = (".md", ".markdown")

_DATED_NAME = re.compile(r"^(?P<date>\d{4}-\d{2}-\d{2})-(?P<slug>.+)$")


@dataclass
class Post:
    """A post file split into raw metadata and Markdown body."""

    path: Path
    metadata: dict[str, Any]
    body: str
    filename_date: dt.date | None = field(init=False)
    slug: str = field(init=False)

    def __post_init__(self) -> None:
        self.filename_date, self.slug = parse_post_filename(self.path.name)

    @cached_property
    def frontmatter(self) -> PostFrontmatter:
        """Validated front matter; raises pydantic's ValidationError when invalid."""
        return PostFrontmatter.model_validate(self.metadata)

    @property
    def title(self) -> str:
        return str(self.metadata.get("title") or self.slug)

    @property
    def date(self) -> dt.date | None:
        value = self.metadata.get("date")
        if isinstance(value, dt.datetime):
            return value.date()
        if isinstance(value, dt.date):
            return value
        return self.filename_date

    @property
    def tags(self) -> list[str]:
        tags = self.metadata.get("tags")
        if not isinstance(tags, list):
            return []
        return [str(tag) for tag in tags]


def parse_post_filename(name: str) -> tuple[dt.date | None, str]:
    """Split ``YYYY-MM-DD-slug.md`` into its date and slug.

    Returns:
        Tuple of (date or None, slug). The date is None when the prefix is
        missing or is not a real calendar date; the slug is then the whole stem.

    """
    stem = name
    for suffix in POST_SUFFIXES:
        if stem.endswith(suffix):
            stem = stem[: -len(suffix)]
            break

    match = _DATED_NAME.match(stem)
    if not match:
        return None, stem
    try:
        file_date = dt.date.fromisoformat(match.group("date"))
    except ValueError:
        return None, stem
    return file_date, match.group("slug")


def load_post(path: Path) -> Post:
    """Read and parse one post file.

    Raises:
        OSError: If the file cannot be read.
        UnicodeDecodeError: If the file is not UTF-8.
        FrontmatterError: If the front matter is malformed.

    """
    metadata, body = parse_frontmatter_file(path)
    return Post(path=path, metadata=metadata, body=body)


def iter_post_paths(directory: Path) -> Iterator[Path]:
    """Yield post files in ``directory`` sorted by name.

    Raises:
        PostDirectoryNotFoundError: If ``directory`` does not exist.

    """
    if not directory.is_dir():
        raise PostDirectoryNotFoundError(str(directory))
    for path in sorted(directory.iterdir()):
        if path.is_file() and path.suffix in POST_SUFFIXES:
            yield path


def load_posts(directory: Path) -> list[Post]:
    """Load every parseable post in ``directory``; broken files are logged and skipped."""
    posts = []
    for path in iter_post_paths(directory):
        try:
            posts.append(load_post(path))
        except (FrontmatterError, UnicodeDecodeError) as exc:
            logger.warning("Skipping %s: %s", path.name, exc)
    return posts
