"""Read-time estimate for a Markdown body."""

from __future__ import annotations

import math
import re

DEFAULT_WORDS_PER_MINUTE = 200

_FENCE = re.compile(r"^(?P<indent> {0,3})(?P<fence>`{3,}|~{3,})")
_HTML_TAG = re.compile(r"<[^>]+>")
_LINK_TARGET = re.compile(r"\]\([^)]*\)")
_WORD = re.compile(r"[^\W_]+(?:['’][^\W_]+)*")


def strip_code_blocks(body: str) -> str:
    """Drop fenced code blocks (``` or ~~~) from a Markdown body.

    An unclosed fence runs to the end of the document, as in CommonMark.
    """
    kept: list[str] = []
    open_fence: str | None = None
    for line in body.splitlines():
        match = _FENCE.match(line)
        if open_fence is None:
            if match:
                open_fence = match.group("fence")
                continue
            kept.append(line)
        elif match and _closes(match, line, open_fence):
            open_fence = None
    return "\n".join(kept)


def _closes(match: re.Match[str], line: str, open_fence: str) -> bool:
    fence = match.group("fence")
    return fence[0] == open_fence[0] and len(fence) >= len(open_fence) and not line[match.end() :].strip()


def count_words(body: str, *, include_code: bool = False) -> int:
    """Count words in a Markdown body.

    Link targets and HTML tags are not words. Fenced code is skipped unless
    ``include_code`` is set.
    """
    text = body if include_code else strip_code_blocks(body)
    text = _LINK_TARGET.sub("]", text)
    text = _HTML_TAG.sub(" ", text)
    return len(_WORD.findall(text))


def estimate_read_time(
    body: str,
    words_per_minute: int = DEFAULT_WORDS_PER_MINUTE,
    *,
    include_code: bool = False,
) -> int:
    """Estimate whole minutes needed to read ``body``; never less than one."""
    if words_per_minute <= 0:
        msg = f"words_per_minute must be positive, got {words_per_minute}"
        raise ValueError(msg)
    words = count_words(body, include_code=include_code)
    return max(1, math.ceil(words / words_per_minute))
