"""Tests for the stylescope CLI commands."""
from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from stylescope import __version__
from stylescope.cli.main import cli
from stylescope.errors import SourceFetchError

PAGE = """<html><head>
<link rel="stylesheet" href="css/base.css">
<link rel="stylesheet" href="css/theme.css">
</head><body>
<nav class="menu flex my-ghost" id="top"><a class="menu__item">x</a></nav>
</body></html>
"""


@pytest.fixture
def site(tmp_path):
    (tmp_path / "css").mkdir()
    (tmp_path / "css" / "base.css").write_text(
        ".menu { color: red; }\n#top .menu__item { color: blue; }\n", encoding="utf-8"
    )
    (tmp_path / "css" / "theme.css").write_text(".menu { color: green; }\n", encoding="utf-8")
    (tmp_path / "extra").mkdir()
    (tmp_path / "extra" / "menu.scss").write_text(
        ".menu { &__item { padding: 0; } }\n", encoding="utf-8"
    )
    (tmp_path / "index.html").write_text(PAGE, encoding="utf-8")
    return tmp_path


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


class TestCLIGroup:
    def test_help_lists_commands(self) -> None:
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "analyze" in result.output
        assert "specificity" in result.output
        assert "resolve" in result.output

    def test_version(self) -> None:
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


# ---------------------------------------------------------------------------
# specificity command
# ---------------------------------------------------------------------------


class TestSpecificityCommand:
    def test_prints_vectors(self) -> None:
        result = CliRunner().invoke(cli, ["specificity", "#id .cls", ":where(.a)"])
        assert result.exit_code == 0
        assert result.output.splitlines() == ["(0,1,1,0)  #id .cls", "(0,0,0,0)  :where(.a)"]

    def test_requires_a_selector(self) -> None:
        result = CliRunner().invoke(cli, ["specificity"])
        assert result.exit_code != 0


# ---------------------------------------------------------------------------
# resolve command
# ---------------------------------------------------------------------------


class TestResolveCommand:
    def test_lists_resolved_selectors(self, tmp_path) -> None:
        path = tmp_path / "menu.scss"
        path.write_text(
            ".a, .b {\n  &--x { color: red; }\n  @media print { color: black; }\n}\n",
            encoding="utf-8",
        )
        result = CliRunner().invoke(cli, ["resolve", str(path)])
        assert result.exit_code == 0
        assert "2-2  &--x" in result.output
        assert "    -> .a--x" in result.output
        assert "    -> .b--x" in result.output
        assert "[@media print]" in result.output
        assert "Summary: 3 rule(s) in menu.scss" in result.output

    def test_parse_error(self, tmp_path) -> None:
        path = tmp_path / "bad.css"
        path.write_text(".a { color: red;", encoding="utf-8")
        result = CliRunner().invoke(cli, ["resolve", str(path)])
        assert result.exit_code == 1
        assert "Parse error" in result.output

    def test_missing_file(self) -> None:
        result = CliRunner().invoke(cli, ["resolve", "does-not-exist.css"])
        assert result.exit_code != 0


# ---------------------------------------------------------------------------
# analyze command
# ---------------------------------------------------------------------------


class TestAnalyzeCommand:
    def test_json_report(self, site) -> None:
        result = CliRunner().invoke(cli, ["analyze", str(site / "index.html"), "-s", ".menu", "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["element"]["ids"] == ["top"]
        files = {f["file"].rsplit("/", 1)[-1]: f for f in data["files"]}
        assert set(files) == {"base.css", "theme.css"}
        assert all(f["is_linked"] for f in files.values())
        assert data["conflicts"]["color"]["winner"]["value"] == "blue"
        assert data["ghost_classes"]["ghost_classes"] == ["my-ghost"]

    def test_later_linked_file_wins_tie(self, site) -> None:
        (site / "css" / "base.css").write_text(".menu { color: red; }\n", encoding="utf-8")
        result = CliRunner().invoke(cli, ["analyze", str(site / "index.html"), "-s", ".menu", "--json"])
        data = json.loads(result.output)
        assert data["conflicts"]["color"]["winner"]["value"] == "green"

    def test_text_report(self, site) -> None:
        result = CliRunner().invoke(cli, ["analyze", str(site / "index.html"), "-s", "#top"])
        assert result.exit_code == 0, result.output
        assert 'Target: <nav class="menu flex my-ghost..." id="top">' in result.output
        assert "Conflicts:" in result.output
        assert "color: blue" in result.output
        assert "Ghost classes (1 of 4): my-ghost" in result.output

    def test_project_scan_reports_unlinked_files(self, site) -> None:
        result = CliRunner().invoke(
            cli,
            ["analyze", str(site / "index.html"), "-s", ".menu", "--project", str(site), "--json"],
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert [u.rsplit("/", 1)[-1] for u in data["unlinked_files"]] == ["menu.scss"]

    def test_extra_css_and_workers(self, site) -> None:
        result = CliRunner().invoke(
            cli,
            [
                "analyze", str(site / "index.html"), "-s", ".menu",
                "--css", str(site / "extra" / "menu.scss"),
                "--workers", "3", "--no-cache", "--json",
            ],
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["stats"]["files_scanned"] == 3

    def test_ignore_pattern(self, site) -> None:
        result = CliRunner().invoke(
            cli,
            ["analyze", str(site / "index.html"), "-s", ".menu", "--ignore-pattern", "^my-", "--json"],
        )
        data = json.loads(result.output)
        assert data["ghost_classes"]["ghost_classes"] == []

    def test_invalid_ignore_pattern(self, site) -> None:
        result = CliRunner().invoke(
            cli, ["analyze", str(site / "index.html"), "-s", ".menu", "--ignore-pattern", "("]
        )
        assert result.exit_code == 2

    def test_target_not_found(self, site) -> None:
        result = CliRunner().invoke(cli, ["analyze", str(site / "index.html"), "-s", ".nope"])
        assert result.exit_code == 1
        assert "No element matches" in result.output

    def test_unreadable_html(self, tmp_path) -> None:
        result = CliRunner().invoke(cli, ["analyze", str(tmp_path / "missing.html"), "-s", ".menu"])
        assert result.exit_code == 1
        assert "Could not read" in result.output

    def test_url_source(self, monkeypatch) -> None:
        monkeypatch.setattr(
            "stylescope.cli.analyze.fetch_html",
            lambda url: "<style>.menu { color: red; }</style><nav class='menu'></nav>",
        )
        result = CliRunner().invoke(cli, ["analyze", "https://example.test/", "-s", ".menu", "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert [f["file"] for f in data["files"]] == ["<style #1>"]

    def test_url_fetch_error(self, monkeypatch) -> None:
        def fail(url):
            raise SourceFetchError("HTTP 500 fetching " + url, location=url, status_code=500)

        monkeypatch.setattr("stylescope.cli.analyze.fetch_html", fail)
        result = CliRunner().invoke(cli, ["analyze", "https://example.test/", "-s", ".menu"])
        assert result.exit_code == 1
        assert "HTTP 500" in result.output

    def test_show_css_prints_rule_text(self, site) -> None:
        result = CliRunner().invoke(
            cli, ["analyze", str(site / "index.html"), "-s", ".menu", "--show-css"]
        )
        assert result.exit_code == 0, result.output
        assert "      | .menu { color: green; }" in result.output

    def test_show_css_formats_minified_rules(self, site) -> None:
        bundle = site / "extra" / "bundle.css"
        bundle.write_text(".menu{color:black}" + ".x{margin:0}" * 30, encoding="utf-8")
        result = CliRunner().invoke(
            cli,
            ["analyze", str(site / "index.html"), "-s", ".menu", "--css", str(bundle), "--show-css"],
        )
        assert result.exit_code == 0, result.output
        assert "bundle.css (minified)" in result.output
        assert "      |   color:black" in result.output


# ---------------------------------------------------------------------------
# analyze --lines and --skip-minified
# ---------------------------------------------------------------------------


class TestAnalyzeTargeting:
    def _json(self, site, *args):
        result = CliRunner().invoke(cli, ["analyze", str(site / "index.html"), *args, "--json"])
        assert result.exit_code == 0, result.output
        return json.loads(result.output)

    def test_line_range_selects_element(self, site) -> None:
        data = self._json(site, "--lines", "5-5")
        assert data["element"]["tag_name"] == "nav"
        assert data["element"]["ids"] == ["top"]
        assert "menu__item" in data["element"]["classes"]

    def test_line_range_looks_through_body(self, site) -> None:
        data = self._json(site, "-l", "4-6")
        assert data["element"]["tag_name"] == "nav"

    @pytest.mark.parametrize(
        "line_range, message",
        [
            ("5", "Invalid line range"),
            ("a-b", "Invalid line range"),
            ("0-3", "must be positive"),
            ("5-2", "is after end line"),
            ("5-99", "past the end"),
        ],
    )
    def test_bad_line_range(self, site, line_range, message) -> None:
        result = CliRunner().invoke(
            cli, ["analyze", str(site / "index.html"), "--lines", line_range]
        )
        assert result.exit_code == 1
        assert message in result.output

    def test_selector_or_lines_required(self, site) -> None:
        result = CliRunner().invoke(cli, ["analyze", str(site / "index.html")])
        assert result.exit_code == 2

    def test_selector_and_lines_are_exclusive(self, site) -> None:
        result = CliRunner().invoke(
            cli, ["analyze", str(site / "index.html"), "-s", ".menu", "-l", "5-5"]
        )
        assert result.exit_code == 2

    def test_skip_minified(self, site) -> None:
        vendor = site / "extra" / "vendor.min.css"
        vendor.write_text(".menu {\n  color: black;\n}\n", encoding="utf-8")
        args = ["-s", ".menu", "--css", str(vendor)]

        data = self._json(site, *args)
        assert any(f["file"].endswith("vendor.min.css") for f in data["files"])

        data = self._json(site, *args, "--skip-minified")
        assert not any(f["file"].endswith("vendor.min.css") for f in data["files"])
        assert "skipped_minified" in [d["code"] for d in data["diagnostics"]]
