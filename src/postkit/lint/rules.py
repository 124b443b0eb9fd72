"""Front matter lint rules.

Per-post rules take a :class:`PostContext` and yield issues. Collection rules
look across every post checked in one run.
"""

from __future__ import annotations

import datetime as dt
from collections import defaultdict
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from postkit.content.post import parse_post_filename
from postkit.content.reading import estimate_read_time
from postkit.content.schema import DEFAULT_LAYOUT, REQUIRED_KEYS, SCHEMA_KEYS, PostFrontmatter
from postkit.lint.issues import LintIssue, Severity

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator
    from pathlib import Path

    from postkit.config.settings import LintSettings

ERROR = Severity.ERROR
WARNING = Severity.WARNING

# Rule ids and their severities.
RULES: dict[str, Severity] = {
    "missing-frontmatter": ERROR,
    "unterminated-frontmatter": ERROR,
    "invalid-yaml": ERROR,
    "invalid-field": ERROR,
    "missing-field": ERROR,
    "empty-body": ERROR,
    "invalid-encoding": ERROR,
    "unknown-key": WARNING,
    "unknown-layout": WARNING,
    "unknown-category": WARNING,
    "filename-pattern": WARNING,
    "filename-date-mismatch": WARNING,
    "read-time-drift": WARNING,
    "excerpt-too-long": WARNING,
    "duplicate-title": WARNING,
    "duplicate-slug": ERROR,
}


@dataclass(frozen=True)
class PostContext:
    """Everything a per-post rule needs."""

    path: Path
    metadata: dict[str, Any]
    body: str
    settings: LintSettings
    draft: bool = False

    def issue(self, rule: str, message: str, field: str | None = None) -> LintIssue:
        return LintIssue(path=self.path, rule=rule, severity=RULES[rule], message=message, field=field)


def check_schema(ctx: PostContext) -> Iterator[LintIssue]:
    """Validate against :class:`PostFrontmatter`; missing schema keys become ``missing-field``."""
    try:
        PostFrontmatter.model_validate(ctx.metadata)
    except ValidationError as e:
        for error in e.errors(include_url=False):
            loc = error.get("loc", ())
            key = str(loc[0]) if loc else None
            if error.get("type") == "missing":
                yield ctx.issue("missing-field", f"required key '{key}' is missing", key)
                continue
            where = ".".join(str(part) for part in loc) or "front matter"
            yield ctx.issue("invalid-field", f"{where}: {error.get('msg')}", key)


def check_required_fields(ctx: PostContext) -> Iterator[LintIssue]:
    """Keys the site requires beyond the schema's own required keys."""
    for key in ctx.settings.required_fields:
        if key in REQUIRED_KEYS:
            continue  # enforced by check_schema
        if key not in ctx.metadata:
            yield ctx.issue("missing-field", f"required key '{key}' is missing", key)
        elif ctx.metadata[key] is None:
            yield ctx.issue("missing-field", f"key '{key}' is declared without a value", key)


def check_body(ctx: PostContext) -> Iterator[LintIssue]:
    if not ctx.body.strip():
        yield ctx.issue("empty-body", "post has no content after the front matter")


def check_unknown_keys(ctx: PostContext) -> Iterator[LintIssue]:
    allowed = set(SCHEMA_KEYS) | set(ctx.settings.extra_keys)
    for key in ctx.metadata:
        if key not in allowed:
            yield ctx.issue("unknown-key", f"unknown key '{key}'", str(key))


def check_layout(ctx: PostContext) -> Iterator[LintIssue]:
    layout = ctx.metadata.get("layout", DEFAULT_LAYOUT)
    layouts = ctx.settings.layouts
    if layouts and isinstance(layout, str) and layout.strip() and layout.strip() not in layouts:
        yield ctx.issue("unknown-layout", f"layout '{layout}' is not one of: {', '.join(layouts)}", "layout")


def check_category(ctx: PostContext) -> Iterator[LintIssue]:
    category = ctx.metadata.get("category")
    categories = ctx.settings.categories
    if categories and isinstance(category, str) and category.strip() and category.strip() not in categories:
        yield ctx.issue(
            "unknown-category",
            f"category '{category}' is not one of: {', '.join(categories)}",
            "category",
        )


def check_filename(ctx: PostContext) -> Iterator[LintIssue]:
    """Published posts are named ``YYYY-MM-DD-slug.md`` and the date agrees with the front matter."""
    if ctx.draft:
        return
    filename_date, _ = parse_post_filename(ctx.path.name)
    if filename_date is None:
        yield ctx.issue("filename-pattern", f"filename '{ctx.path.name}' does not match YYYY-MM-DD-slug.md")
        return

    declared = _as_date(ctx.metadata.get("date"))
    if declared is not None and declared != filename_date:
        yield ctx.issue(
            "filename-date-mismatch",
            f"filename date {filename_date.isoformat()} differs from front matter date {declared.isoformat()}",
            "date",
        )


def check_read_time(ctx: PostContext) -> Iterator[LintIssue]:
    declared = ctx.metadata.get("read_time")
    if isinstance(declared, bool) or not isinstance(declared, int) or declared <= 0:
        return
    settings = ctx.settings
    estimate = estimate_read_time(
        ctx.body,
        settings.words_per_minute,
        include_code=settings.include_code_in_read_time,
    )
    if abs(declared - estimate) > settings.read_time_tolerance:
        yield ctx.issue(
            "read-time-drift",
            f"read_time is {declared} min but the body reads in about {estimate} min",
            "read_time",
        )


def check_excerpt(ctx: PostContext) -> Iterator[LintIssue]:
    excerpt = ctx.metadata.get("excerpt")
    limit = ctx.settings.max_excerpt_length
    if isinstance(excerpt, str) and len(excerpt.strip()) > limit:
        yield ctx.issue(
            "excerpt-too-long",
            f"excerpt is {len(excerpt.strip())} characters (limit {limit})",
            "excerpt",
        )


POST_RULES: tuple[Callable[[PostContext], Iterable[LintIssue]], ...] = (
    check_schema,
    check_required_fields,
    check_body,
    check_unknown_keys,
    check_layout,
    check_category,
    check_filename,
    check_read_time,
    check_excerpt,
)


def check_duplicates(posts: Iterable[tuple[Path, dict[str, Any]]]) -> Iterator[LintIssue]:
    """Flag posts sharing a title (case-insensitive) or a filename slug."""
    by_title: dict[str, list[Path]] = defaultdict(list)
    by_slug: dict[str, list[Path]] = defaultdict(list)
    for path, metadata in posts:
        title = metadata.get("title")
        if isinstance(title, str) and title.strip():
            by_title[title.strip().casefold()].append(path)
        _, slug = parse_post_filename(path.name)
        by_slug[slug].append(path)

    for paths in by_title.values():
        if len(paths) > 1:
            for path in paths[1:]:
                yield LintIssue(
                    path=path,
                    rule="duplicate-title",
                    severity=RULES["duplicate-title"],
                    message=f"title also used by {paths[0].name}",
                    field="title",
                )
    for slug, paths in by_slug.items():
        if len(paths) > 1:
            for path in paths[1:]:
                yield LintIssue(
                    path=path,
                    rule="duplicate-slug",
                    severity=RULES["duplicate-slug"],
                    message=f"slug '{slug}' also used by {paths[0].name}",
                )


def _as_date(value: Any) -> dt.date | None:
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str):
        try:
            return dt.date.fromisoformat(value.strip())
        except ValueError:
            return None
    return None
