"""Unit tests for individual front matter lint rules."""

from pathlib import Path

import pytest

from postkit.config import LintSettings
from postkit.lint.issues import Severity
from postkit.lint.rules import (
    RULES,
    PostContext,
    check_body,
    check_category,
    check_duplicates,
    check_excerpt,
    check_filename,
    check_layout,
    check_read_time,
    check_required_fields,
    check_schema,
    check_unknown_keys,
)
from tests.helpers.post_factory import VALID_BODY, VALID_METADATA

POST_PATH = Path("_posts/2024-03-12-reading-results.md")


def make_ctx(body=VALID_BODY, settings=None, path=POST_PATH, draft=False, **overrides):
    metadata = dict(VALID_METADATA)
    for key, value in overrides.items():
        if value is None:
            metadata.pop(key, None)
        else:
            metadata[key] = value
    return PostContext(
        path=path,
        metadata=metadata,
        body=body,
        settings=settings or LintSettings(),
        draft=draft,
    )


def rules_of(issues):
    return [issue.rule for issue in issues]


def test_every_rule_has_a_severity():
    assert set(RULES.values()) <= {Severity.ERROR, Severity.WARNING}
    assert RULES["invalid-field"] is Severity.ERROR
    assert RULES["read-time-drift"] is Severity.WARNING


def test_valid_post_passes_every_rule():
    ctx = make_ctx()
    checks = (
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

    assert [issue for check in checks for issue in check(ctx)] == []


@pytest.mark.parametrize(
    ("overrides", "field"),
    [
        ({"title": ""}, "title"),
        ({"date": "soon"}, "date"),
        ({"tags": []}, "tags"),
        ({"read_time": 0}, "read_time"),
    ],
)
def test_schema_violations_are_invalid_field_errors(overrides, field):
    issues = list(check_schema(make_ctx(**overrides)))

    assert rules_of(issues) == ["invalid-field"]
    assert issues[0].field == field
    assert issues[0].severity is Severity.ERROR


@pytest.mark.parametrize("key", ["title", "date", "tags"])
def test_schema_required_keys_are_missing_field_errors(key):
    issues = list(check_schema(make_ctx(**{key: None})))

    assert rules_of(issues) == ["missing-field"]
    assert issues[0].field == key


def test_required_fields_from_settings():
    issues = list(check_required_fields(make_ctx(category=None, excerpt=None)))

    assert rules_of(issues) == ["missing-field", "missing-field"]
    assert {issue.field for issue in issues} == {"category", "excerpt"}


def test_required_field_without_value():
    ctx = make_ctx()
    ctx.metadata["excerpt"] = None

    issues = list(check_required_fields(ctx))

    assert issues[0].message == "key 'excerpt' is declared without a value"


def test_required_fields_skip_schema_keys():
    # title is enforced by check_schema; reporting it twice would be noise
    assert list(check_required_fields(make_ctx(title=None))) == []


def test_required_fields_can_be_relaxed():
    settings = LintSettings(required_fields=["title", "date", "tags"])

    assert list(check_required_fields(make_ctx(settings=settings, category=None, excerpt=None))) == []


def test_blank_body_is_an_error():
    assert rules_of(check_body(make_ctx(body="\n   \n"))) == ["empty-body"]


def test_unknown_keys_warn_unless_allowed():
    ctx = make_ctx(permalink="/x/", author="sam")

    assert sorted(issue.field for issue in check_unknown_keys(ctx)) == ["author", "permalink"]

    allowed = make_ctx(settings=LintSettings(extra_keys=["permalink", "author"]), permalink="/x/", author="sam")
    assert list(check_unknown_keys(allowed)) == []


def test_unknown_layout():
    issues = list(check_layout(make_ctx(layout="page")))

    assert rules_of(issues) == ["unknown-layout"]
    assert issues[0].severity is Severity.WARNING


def test_missing_layout_uses_default():
    assert list(check_layout(make_ctx(layout=None))) == []


def test_category_allow_list():
    settings = LintSettings(categories=["SQL", "Career"])

    assert rules_of(check_category(make_ctx(settings=settings))) == ["unknown-category"]
    assert list(check_category(make_ctx(settings=settings, category="SQL"))) == []
    assert list(check_category(make_ctx(category="Anything"))) == []


def test_filename_pattern_for_posts_only():
    undated = Path("_posts/reading-results.md")

    assert rules_of(check_filename(make_ctx(path=undated))) == ["filename-pattern"]
    assert list(check_filename(make_ctx(path=undated, draft=True))) == []


def test_filename_date_mismatch():
    issues = list(check_filename(make_ctx(date="2024-03-13")))

    assert rules_of(issues) == ["filename-date-mismatch"]
    assert "2024-03-12" in issues[0].message
    assert "2024-03-13" in issues[0].message


def test_filename_check_ignores_unparseable_dates():
    # the bad date itself is reported by check_schema
    assert list(check_filename(make_ctx(date="soon"))) == []


def test_read_time_drift():
    long_body = " ".join(["word"] * 1200)  # six minutes at 200 wpm

    assert rules_of(check_read_time(make_ctx(body=long_body, read_time=3))) == ["read-time-drift"]
    assert list(check_read_time(make_ctx(body=long_body, read_time=4))) == []
    assert list(check_read_time(make_ctx(body=long_body, read_time=8))) == []


def test_read_time_drift_skips_invalid_values():
    assert list(check_read_time(make_ctx(read_time="five"))) == []
    assert list(check_read_time(make_ctx(read_time=None))) == []


def test_read_time_respects_code_setting():
    code = "```\n" + "\n".join(["token " * 10] * 60) + "\n```\n"
    body = "Short intro.\n\n" + code

    assert list(check_read_time(make_ctx(body=body, read_time=1))) == []
    with_code = LintSettings(include_code_in_read_time=True)
    assert rules_of(check_read_time(make_ctx(body=body, read_time=1, settings=with_code))) == ["read-time-drift"]


def test_excerpt_length():
    settings = LintSettings(max_excerpt_length=10)

    assert rules_of(check_excerpt(make_ctx(settings=settings))) == ["excerpt-too-long"]
    assert list(check_excerpt(make_ctx(settings=settings, excerpt="Short."))) == []


def test_duplicates_across_posts():
    posts = [
        (Path("_posts/2024-01-01-intro.md"), {"title": "Intro"}),
        (Path("_posts/2024-02-01-intro.md"), {"title": "Something else"}),
        (Path("_posts/2024-03-01-other.md"), {"title": "intro "}),
    ]

    issues = list(check_duplicates(posts))

    assert sorted((issue.rule, issue.path.name) for issue in issues) == [
        ("duplicate-slug", "2024-02-01-intro.md"),
        ("duplicate-title", "2024-03-01-other.md"),
    ]
    slug_issue = next(issue for issue in issues if issue.rule == "duplicate-slug")
    assert slug_issue.severity is Severity.ERROR
