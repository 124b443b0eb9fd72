"""Run lint rules over post files and collect a report."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from postkit.content.exceptions import (
    FrontmatterError,
    MissingFrontmatterError,
    PostDirectoryNotFoundError,
    UnterminatedFrontmatterError,
)
from postkit.content.frontmatter import parse_frontmatter
from postkit.content.post import iter_post_paths
from postkit.lint.issues import LintIssue, Severity
from postkit.lint.rules import POST_RULES, RULES, PostContext, check_duplicates

if TYPE_CHECKING:
    from collections.abc import Iterable

    from postkit.config.settings import PostkitConfig

logger = logging.getLogger(__name__)


@dataclass
class LintReport:
    """Issues found in one lint run."""

    issues: list[LintIssue] = field(default_factory=list)
    files_checked: int = 0

    @property
    def errors(self) -> list[LintIssue]:
        return [issue for issue in self.issues if issue.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[LintIssue]:
        return [issue for issue in self.issues if issue.severity is Severity.WARNING]

    def ok(self, *, strict: bool = False) -> bool:
        """True when there are no errors (and no warnings, if ``strict``)."""
        if strict:
            return not self.issues
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        return {
            "files_checked": self.files_checked,
            "errors": len(self.errors),
            "warnings": len(self.warnings),
            "issues": [issue.to_dict() for issue in self.issues],
        }


def _frontmatter_issue(path: Path, exc: FrontmatterError) -> LintIssue:
    if isinstance(exc, MissingFrontmatterError):
        rule = "missing-frontmatter"
    elif isinstance(exc, UnterminatedFrontmatterError):
        rule = "unterminated-frontmatter"
    else:
        rule = "invalid-yaml"
    return LintIssue(path=path, rule=rule, severity=RULES[rule], message=str(exc))


def _encoding_issue(path: Path, exc: UnicodeDecodeError) -> LintIssue:
    message = f"not valid UTF-8 (byte 0x{exc.object[exc.start]:02x} at offset {exc.start})"
    return LintIssue(path=path, rule="invalid-encoding", severity=RULES["invalid-encoding"], message=message)


def _enabled(issues: Iterable[LintIssue], config: PostkitConfig) -> list[LintIssue]:
    disabled = set(config.lint.disabled_rules)
    return [issue for issue in issues if issue.rule not in disabled]


def _lint_parsed(
    path: Path, metadata: dict[str, Any], body: str, config: PostkitConfig, *, draft: bool
) -> list[LintIssue]:
    ctx = PostContext(path=path, metadata=metadata, body=body, settings=config.lint, draft=draft)
    issues: list[LintIssue] = []
    for rule in POST_RULES:
        issues.extend(rule(ctx))
    return issues


def lint_text(text: str, path: Path, config: PostkitConfig, *, draft: bool = False) -> list[LintIssue]:
    """Lint post text as if it were stored at ``path``."""
    try:
        metadata, body = parse_frontmatter(text)
    except FrontmatterError as exc:
        return _enabled([_frontmatter_issue(path, exc)], config)
    return _enabled(_lint_parsed(path, metadata, body, config, draft=draft), config)


def lint_file(path: Path, config: PostkitConfig, *, draft: bool = False) -> list[LintIssue]:
    """Lint one post file.

    Raises:
        OSError: If the file cannot be read.

    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        return _enabled([_encoding_issue(path, exc)], config)
    return lint_text(text, path, config, draft=draft)


def _is_draft(path: Path, config: PostkitConfig) -> bool:
    drafts_dir = config.paths.drafts_dir.resolve()
    return drafts_dir in path.resolve().parents


def _collect_paths(paths: Iterable[Path]) -> list[Path]:
    collected: list[Path] = []
    for path in paths:
        if path.is_dir():
            collected.extend(iter_post_paths(path))
        else:
            collected.append(path)
    return collected


def lint_paths(paths: Iterable[Path], config: PostkitConfig) -> LintReport:
    """Lint files and directories of posts, then check for duplicates across them.

    Raises:
        PostDirectoryNotFoundError: If a given path does not exist.

    """
    report = LintReport()
    parsed: list[tuple[Path, dict[str, Any]]] = []

    for path in _collect_paths(Path(p) for p in paths):
        if not path.exists():
            raise PostDirectoryNotFoundError(str(path))
        draft = _is_draft(path, config)
        report.files_checked += 1
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            report.issues.extend(_enabled([_encoding_issue(path, exc)], config))
            continue
        try:
            metadata, body = parse_frontmatter(text)
        except FrontmatterError as exc:
            report.issues.extend(_enabled([_frontmatter_issue(path, exc)], config))
            continue
        report.issues.extend(_enabled(_lint_parsed(path, metadata, body, config, draft=draft), config))
        parsed.append((path, metadata))

    report.issues.extend(_enabled(check_duplicates(parsed), config))
    report.issues.sort(key=lambda issue: (str(issue.path), issue.severity is not Severity.ERROR, issue.rule))
    logger.debug(
        "Checked %d file(s): %d error(s), %d warning(s)",
        report.files_checked,
        len(report.errors),
        len(report.warnings),
    )
    return report
