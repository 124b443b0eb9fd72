"""Lint findings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path


class Severity(str, Enum):
    """How a finding affects the lint exit status."""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True, slots=True)
class LintIssue:
    """A single problem found in a post.

    Attributes:
        path: File the issue was found in
        rule: Rule id (e.g. "missing-field")
        severity: ERROR or WARNING
        message: Human-readable description
        field: Front matter key involved, if any

    """

    path: Path
    rule: str
    severity: Severity
    message: str
    field: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": str(self.path),
            "rule": self.rule,
            "severity": self.severity.value,
            "message": self.message,
            "field": self.field,
        }
