"""Tests for CLI commands."""

import json

import pytest
from click.testing import CliRunner

from mdbook_pagebreaks.cli import cli
from mdbook_pagebreaks.css import CSS_FILENAME
from mdbook_pagebreaks.replacer import HTML_BREAK


@pytest.fixture
def runner():
    """Create a CLI runner."""
    return CliRunner()


def test_cli_version(runner):
    """Test --version flag."""
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test_cli_help(runner):
    """Test --help flag."""
    result = runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "supports" in result.output
    assert "init" in result.output


def test_supports_html(runner):
    """Test supports command for the html renderer."""
    result = runner.invoke(cli, ["supports", "html"])
    assert result.exit_code == 0
    assert "Handling supports for renderer html: true" in result.stderr


def test_supports_any_renderer(runner):
    """Test supports command for an arbitrary renderer."""
    result = runner.invoke(cli, ["supports", "made-up-renderer"])
    assert result.exit_code == 0


def test_supports_requires_renderer(runner):
    """Test supports command without an argument."""
    result = runner.invoke(cli, ["supports"])
    assert result.exit_code != 0


def test_init_command(runner, tmp_path):
    """Test init writes the stylesheet."""
    result = runner.invoke(cli, ["init", "--output-dir", str(tmp_path)])

    assert result.exit_code == 0
    assert (tmp_path / CSS_FILENAME).exists()
    assert "✓" in result.stderr


def test_init_default_directory(runner, tmp_path, monkeypatch):
    """Test init writes into the current directory by default."""
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(cli, ["init"])

    assert result.exit_code == 0
    assert (tmp_path / CSS_FILENAME).exists()


def test_init_missing_directory(runner, tmp_path):
    """Test init with a directory that does not exist."""
    result = runner.invoke(cli, ["init", "-o", str(tmp_path / "missing")])

    assert result.exit_code == 1
    assert "Error:" in result.stderr


def test_preprocess_html(runner, context_data, book_json):
    """Test preprocessing a book for the html renderer."""
    stdin = json.dumps([context_data, book_json])

    result = runner.invoke(cli, [], input=stdin)

    assert result.exit_code == 0
    output = json.loads(result.stdout)
    chapter = output["sections"][0]["Chapter"]
    assert chapter["content"] == f"# Chapter 1\n{HTML_BREAK}"
    assert chapter["name"] == "Chapter 1"
    assert "Rendered 1 page break for" in result.stderr


def test_preprocess_other(runner, context_data, book_json):
    """Test preprocessing a book for a non-html renderer."""
    context_data["renderer"] = "other"

    result = runner.invoke(cli, [], input=json.dumps([context_data, book_json]))

    assert result.exit_code == 0
    output = json.loads(result.stdout)
    assert output["sections"][0]["Chapter"]["content"] == "# Chapter 1\n"
    assert "Removed 1 page break for" in result.stderr


def test_preprocess_version_mismatch_warns(runner, context_data, book_json):
    """Test that a different mdBook version only warns."""
    context_data["mdbook_version"] = "0.5.0"

    result = runner.invoke(cli, [], input=json.dumps([context_data, book_json]))

    assert result.exit_code == 0
    assert "Warning:" in result.stderr
    assert "0.5.0" in result.stderr
    json.loads(result.stdout)


def test_preprocess_invalid_input(runner):
    """Test that malformed input exits with an error."""
    result = runner.invoke(cli, [], input="not json")

    assert result.exit_code == 1
    assert "Error:" in result.stderr
    assert result.stdout == ""


def test_preprocess_counts_several_markers(runner, context_data, book_json):
    """Test the status line for more than one marker."""
    book_json["sections"][0]["Chapter"]["content"] = "{{---}}\ntext\n{{---}}"

    result = runner.invoke(cli, [], input=json.dumps([context_data, book_json]))

    assert result.exit_code == 0
    assert "Rendered 2 page breaks for renderer 'html'" in result.stderr


def test_preprocess_prerelease_version_warns(runner, context_data, book_json):
    """Test that a pre-release mdBook is reported as a mismatch."""
    context_data["mdbook_version"] = "0.4.22-beta.1"

    result = runner.invoke(cli, [], input=json.dumps([context_data, book_json]))

    assert result.exit_code == 0
    assert "Warning:" in result.stderr


def test_preprocess_invalid_utf8(runner, context_data, book_json):
    """Test that undecodable input exits with an error."""
    raw = json.dumps([context_data, book_json]).encode("utf-8")

    result = runner.invoke(cli, [], input=raw.replace(b"# Chapter 1", b"# \xff"))

    assert result.exit_code == 1
    assert "Error:" in result.stderr
    assert result.stdout == ""


def test_preprocess_non_string_content(runner, context_data, book_json):
    """Test that non-text chapter content exits with an error."""
    book_json["sections"][0]["Chapter"]["content"] = 5

    result = runner.invoke(cli, [], input=json.dumps([context_data, book_json]))

    assert result.exit_code == 1
    assert "must be a string" in result.stderr
    assert result.stdout == ""


def test_preprocess_non_string_version(runner, context_data, book_json):
    """Test that a non-text mdBook version exits with an error."""
    context_data["mdbook_version"] = 4

    result = runner.invoke(cli, [], input=json.dumps([context_data, book_json]))

    assert result.exit_code == 1
    assert "'mdbook_version' must be a string" in result.stderr
    assert result.stdout == ""
