"""Main Typer application for postkit."""

from __future__ import annotations

import json
import logging
from collections import Counter
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from postkit.cli.errorhandler import handle_cli_errors
from postkit.config import PostkitConfig, find_config, load_config, save_config
from postkit.content import (
    estimate_read_time,
    iter_post_paths,
    load_post,
    load_posts,
    update_frontmatter_field,
    write_post,
)
from postkit.lint import LintReport, Severity, lint_paths
from postkit.logging_setup import configure_logging

app = typer.Typer(
    name="postkit",
    help="Lint and manage Markdown blog posts with YAML front matter",
    add_completion=False,
)

console = Console()
logger = logging.getLogger(__name__)

DEFAULT_EMOJI = "📝"
DEFAULT_BANNER_BG = "#eef2ff"
DRAFT_BODY = "Start writing here.\n"


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


@dataclass
class CliState:
    config_path: Path | None = None
    debug: bool = False


@app.callback()
def main(
    ctx: typer.Context,
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to .postkit.yml (default: search upward from cwd)"),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    debug: Annotated[bool, typer.Option("--debug", help="Show tracebacks on errors")] = False,
) -> None:
    """Lint and manage Markdown blog posts."""
    configure_logging(verbose=verbose)
    ctx.obj = CliState(config_path=config, debug=debug)


def _state(ctx: typer.Context) -> CliState:
    return ctx.obj if isinstance(ctx.obj, CliState) else CliState()


def _load_config(state: CliState) -> PostkitConfig:
    config_path = state.config_path or find_config(Path.cwd())
    if config_path is None:
        return PostkitConfig().resolve(Path.cwd())
    return load_config(config_path)


def _print_issues(report: LintReport) -> None:
    for issue in report.issues:
        color = "red" if issue.severity is Severity.ERROR else "yellow"
        console.print(
            f"[{color}]{issue.severity.value}[/{color}] {escape(str(issue.path))}: "
            f"{escape(issue.message)} ({escape(issue.rule)})",
            soft_wrap=True,
        )

    summary = (
        f"{report.files_checked} file(s) checked, "
        f"{len(report.errors)} error(s), {len(report.warnings)} warning(s)"
    )
    style = "green" if report.ok() else "red"
    console.print(f"[{style}]{summary}[/{style}]", soft_wrap=True)


@app.command()
def init(
    ctx: typer.Context,
    root: Annotated[Path, typer.Argument(help="Repository root")] = Path(),
    *,
    force: Annotated[bool, typer.Option("--force", help="Overwrite an existing config")] = False,
) -> None:
    """Write a default .postkit.yml and create the content directories."""
    with handle_cli_errors(debug=_state(ctx).debug):
        config = PostkitConfig()
        config_path = save_config(config, root, overwrite=force)
        for directory in (config.paths.posts_dir, config.paths.drafts_dir):
            (root / directory).mkdir(parents=True, exist_ok=True)
        console.print(f"[green]Wrote {escape(str(config_path))}[/green]", soft_wrap=True)


@app.command()
def lint(
    ctx: typer.Context,
    paths: Annotated[
        list[Path] | None,
        typer.Argument(help="Post files or directories (default: the posts directory)"),
    ] = None,
    *,
    strict: Annotated[bool, typer.Option("--strict", help="Fail on warnings too")] = False,
    output_format: Annotated[
        OutputFormat, typer.Option("--format", "-f", help="Report format")
    ] = OutputFormat.TEXT,
) -> None:
    """Check front matter of posts; exits with 1 when problems are found."""
    state = _state(ctx)
    with handle_cli_errors(debug=state.debug):
        config = _load_config(state)
        targets = paths or [config.paths.posts_dir]
        report = lint_paths(targets, config)

    if output_format is OutputFormat.JSON:
        typer.echo(json.dumps(report.to_dict(), indent=2))
    else:
        _print_issues(report)

    if not report.ok(strict=strict):
        raise typer.Exit(1)


@app.command("list")
def list_posts(
    ctx: typer.Context,
    tag: Annotated[str | None, typer.Option("--tag", "-t", help="Only posts with this tag")] = None,
    category: Annotated[str | None, typer.Option("--category", help="Only posts in this category")] = None,
    *,
    as_json: Annotated[bool, typer.Option("--json", help="Print JSON instead of a table")] = False,
) -> None:
    """List posts, newest first."""
    state = _state(ctx)
    with handle_cli_errors(debug=state.debug):
        config = _load_config(state)
        posts = load_posts(config.paths.posts_dir)

    if tag:
        posts = [post for post in posts if tag in post.tags]
    if category:
        posts = [post for post in posts if post.metadata.get("category") == category]
    posts.sort(key=lambda post: (post.date or date.min, post.path.name), reverse=True)

    if as_json:
        rows = [
            {
                "file": post.path.name,
                "title": post.title,
                "date": post.date.isoformat() if post.date else None,
                "category": post.metadata.get("category"),
                "read_time": post.metadata.get("read_time"),
                "tags": post.tags,
            }
            for post in posts
        ]
        typer.echo(json.dumps(rows, indent=2, ensure_ascii=False))
        return

    table = Table(title=f"{len(posts)} post(s)")
    table.add_column("Date", no_wrap=True)
    table.add_column("Title")
    table.add_column("Category")
    table.add_column("Min", justify="right")
    table.add_column("Tags")
    for post in posts:
        table.add_row(
            post.date.isoformat() if post.date else "-",
            escape(post.title),
            escape(str(post.metadata.get("category") or "-")),
            str(post.metadata.get("read_time") or "-"),
            escape(", ".join(post.tags)),
        )
    console.print(table)


@app.command()
def tags(ctx: typer.Context) -> None:
    """Show how many posts use each tag."""
    state = _state(ctx)
    with handle_cli_errors(debug=state.debug):
        config = _load_config(state)
        posts = load_posts(config.paths.posts_dir)

    counts = Counter(tag for post in posts for tag in post.tags)
    table = Table(title=f"{len(counts)} tag(s)")
    table.add_column("Tag")
    table.add_column("Posts", justify="right")
    for name, count in sorted(counts.items(), key=lambda item: (-item[1], item[0].casefold())):
        table.add_row(escape(name), str(count))
    console.print(table)


@app.command()
def new(
    ctx: typer.Context,
    title: Annotated[str, typer.Argument(help="Post title")],
    *,
    tag: Annotated[list[str] | None, typer.Option("--tag", "-t", help="Tag (repeatable)")] = None,
    category: Annotated[str | None, typer.Option("--category", help="Category label")] = None,
    post_date: Annotated[
        datetime | None,
        typer.Option("--date", formats=["%Y-%m-%d"], help="Publication date (default: today)"),
    ] = None,
    excerpt: Annotated[str | None, typer.Option("--excerpt", help="One-line summary")] = None,
    emoji: Annotated[str, typer.Option("--emoji", help="Banner emoji")] = DEFAULT_EMOJI,
    banner_bg: Annotated[str, typer.Option("--bg", help="Banner background")] = DEFAULT_BANNER_BG,
    slug: Annotated[str | None, typer.Option("--slug", help="Filename slug (default: from title)")] = None,
    draft: Annotated[
        bool, typer.Option("--draft", help="Write to the drafts directory without a date prefix")
    ] = False,
) -> None:
    """Scaffold a new post with complete front matter."""
    state = _state(ctx)
    with handle_cli_errors(debug=state.debug):
        config = _load_config(state)
        metadata = {
            "layout": config.lint.layouts[0] if config.lint.layouts else "post",
            "title": title,
            "date": (post_date.date() if post_date else date.today()),
            "category": category,
            "banner_emoji": emoji,
            "banner_bg": banner_bg,
            "read_time": estimate_read_time(DRAFT_BODY, config.lint.words_per_minute),
            "tags": list(tag or []),
            "excerpt": excerpt,
            "slug": slug,
        }
        output_dir = config.paths.drafts_dir if draft else config.paths.posts_dir
        path = write_post(
            metadata,
            DRAFT_BODY,
            output_dir,
            dated=not draft,
            required_fields=config.lint.required_fields,
        )
    console.print(f"[green]Created {escape(str(path))}[/green]", soft_wrap=True)


@app.command("read-time")
def read_time(
    ctx: typer.Context,
    paths: Annotated[
        list[Path] | None,
        typer.Argument(help="Post files or directories (default: the posts directory)"),
    ] = None,
    *,
    write: Annotated[bool, typer.Option("--write", help="Update read_time in files that differ")] = False,
) -> None:
    """Compare declared read_time with an estimate from the body."""
    state = _state(ctx)
    with handle_cli_errors(debug=state.debug):
        config = _load_config(state)
        files: list[Path] = []
        for target in paths or [config.paths.posts_dir]:
            files.extend(iter_post_paths(target) if target.is_dir() else [target])

        updated = 0
        for path in files:
            post = load_post(path)
            estimate = estimate_read_time(
                post.body,
                config.lint.words_per_minute,
                include_code=config.lint.include_code_in_read_time,
            )
            declared = post.metadata.get("read_time")
            marker = "" if declared == estimate else " *"
            console.print(
                f"{escape(path.name)}: declared {declared if declared is not None else '-'}, "
                f"estimated {estimate}{marker}",
                soft_wrap=True,
            )
            if write and declared != estimate:
                text = path.read_text(encoding="utf-8")
                path.write_text(update_frontmatter_field(text, "read_time", estimate), encoding="utf-8")
                logger.info("Updated read_time in %s", path.name)
                updated += 1

    if write:
        console.print(f"[green]Updated {updated} file(s)[/green]")
