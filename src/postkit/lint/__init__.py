"""Front matter linting."""

from postkit.lint.issues import LintIssue, Severity
from postkit.lint.rules import RULES
from postkit.lint.runner import LintReport, lint_file, lint_paths, lint_text

__all__ = ["RULES", "LintIssue", "LintReport", "Severity", "lint_file", "lint_paths", "lint_text"]
