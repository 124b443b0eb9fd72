import json

from typer.testing import CliRunner

from postkit.cli.main import app

runner = CliRunner()


def test_lint_clean_site_exits_zero(site):
    site.add_post("2024-03-12-clean.md")

    result = runner.invoke(app, ["lint"])

    assert result.exit_code == 0, result.output
    assert "1 file(s) checked, 0 error(s), 0 warning(s)" in result.output


def test_lint_errors_exit_one(site):
    site.add_post("2024-03-12-bad.md", tags=[])

    result = runner.invoke(app, ["lint"])

    assert result.exit_code == 1
    assert "(invalid-field)" in result.output
    assert "2024-03-12-bad.md" in result.output


def test_lint_warnings_only_fail_with_strict(site):
    site.add_post("2024-03-12-page.md", layout="page")

    assert runner.invoke(app, ["lint"]).exit_code == 0
    result = runner.invoke(app, ["lint", "--strict"])
    assert result.exit_code == 1
    assert "(unknown-layout)" in result.output


def test_lint_json_output(site):
    site.add_post("2024-03-12-a.md", excerpt=None)

    result = runner.invoke(app, ["lint", "--format", "json"])

    assert result.exit_code == 1
    data = json.loads(result.stdout)
    assert data["errors"] == 1
    assert data["issues"][0]["rule"] == "missing-field"
    assert data["issues"][0]["field"] == "excerpt"


def test_lint_explicit_paths(site):
    good = site.add_post("2024-03-12-good.md")
    site.add_post("2024-03-13-bad.md", text="no front matter\n")

    result = runner.invoke(app, ["lint", str(good)])

    assert result.exit_code == 0, result.output


def test_lint_uses_config_file(site):
    site.add_post("2024-03-12-a.md")
    (site.root / ".postkit.yml").write_text("lint:\n  categories: [SQL]\n", encoding="utf-8")

    result = runner.invoke(app, ["lint", "--strict"])

    assert result.exit_code == 1
    assert "(unknown-category)" in result.output


def test_lint_explicit_config_option(site):
    site.add_post("2024-03-12-a.md", category=None)
    config_path = site.root / "relaxed.yml"
    config_path.write_text("lint:\n  required_fields: [title, date, tags]\n", encoding="utf-8")

    result = runner.invoke(app, ["--config", str(config_path), "lint"])

    assert result.exit_code == 0, result.output


def test_lint_bad_config_reports_error(site):
    (site.root / ".postkit.yml").write_text("lint:\n  words_per_minute: fast\n", encoding="utf-8")

    result = runner.invoke(app, ["lint"])

    assert result.exit_code == 1
    assert "Configuration Error" in result.output
    assert "words_per_minute" in result.output


def test_lint_missing_posts_dir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(app, ["lint"])

    assert result.exit_code == 1
    assert "Posts directory not found" in result.output
