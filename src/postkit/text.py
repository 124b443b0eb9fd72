"""Text helpers shared by the content modules."""

from __future__ import annotations

import re

from pymdownx.slugs import slugify as _md_slugify

# NFKD so accented letters decompose before the ASCII filter below.
_slugify_lower = _md_slugify(case="lower", normalize="NFKD")

_REPEATED_HYPHENS = re.compile(r"-{2,}")


def slugify(text: str | None, max_len: int = 60) -> str:
    """Convert text to a URL-friendly slug using Python Markdown semantics.

    Examples:
        >>> slugify("Hello World!")
        'hello-world'
        >>> slugify("A/B Testing Pitfalls")
        'ab-testing-pitfalls'
        >>> slugify("Café à Paris")
        'cafe-a-paris'
        >>> slugify("")
        'post'

    """
    if not text:
        return "post"

    slug = _slugify_lower(text, sep="-")
    slug = slug.encode("ascii", "ignore").decode("ascii")
    slug = _REPEATED_HYPHENS.sub("-", slug).strip("-")
    slug = slug[:max_len].rstrip("-")
    return slug or "post"
