"""Tests for per-stylesheet analysis and the project-wide pass."""

import json

import pytest

from stylescope.analysis import AnalysisCache, StylesheetAnalyzer, analyze_project
from stylescope.config import AnalysisConfig
from stylescope.model import Severity, TargetIdentity
from stylescope.sources import StylesheetSource


@pytest.fixture
def identity():
    return TargetIdentity(classes=("menu", "menu__item"), tag_name="nav")


def _codes(diagnostics):
    return [d.code for d in diagnostics]


# ---------------------------------------------------------------------------
# StylesheetAnalyzer
# ---------------------------------------------------------------------------


class TestStylesheetAnalyzer:
    def test_nested_matches(self, identity):
        source = StylesheetSource(
            "menu.scss",
            ".menu { &__item { color: blue; } &:hover { background: red; } }",
            "scss",
        )
        result = StylesheetAnalyzer(identity).analyze(source)
        assert [m.selector for m in result.matches] == [".menu", ".menu__item", ".menu:hover"]
        assert result.matches[1].original_selector == "&__item"
        assert result.matches[1].is_nested
        assert result.error is None

    def test_non_matching_rules_are_dropped(self, identity):
        source = StylesheetSource("a.css", ".menu-bar { color: red; } .other { color: blue; }")
        assert StylesheetAnalyzer(identity).analyze(source).matches == []

    def test_specificity_follows_matching_branch(self, identity):
        source = StylesheetSource("a.css", "#other, .menu { color: red; }")
        match = StylesheetAnalyzer(identity).analyze(source).matches[0]
        assert str(match.specificity) == "(0,0,1,0)"

    def test_at_rule_context(self, identity):
        source = StylesheetSource("a.css", "@media print { .menu { display: none; } }")
        match = StylesheetAnalyzer(identity).analyze(source).matches[0]
        assert match.at_rule_context == "@media print"

    def test_parse_error_is_reported_not_raised(self, identity):
        result = StylesheetAnalyzer(identity).analyze(StylesheetSource("bad.css", ".menu { color: red;"))
        assert result.matches == []
        assert "Unclosed block" in result.error
        assert _codes(result.diagnostics) == ["parse_error"]
        assert result.diagnostics[0].severity is Severity.ERROR
        assert result.diagnostics[0].line == 1

    def test_sass_is_unsupported(self, identity):
        result = StylesheetAnalyzer(identity).analyze(
            StylesheetSource("a.sass", ".menu\n  color: red", "sass")
        )
        assert result.error is not None
        assert _codes(result.diagnostics) == ["unsupported_syntax"]

    def test_empty_stylesheet(self, identity):
        result = StylesheetAnalyzer(identity).analyze(StylesheetSource("empty.css", "  \n"))
        assert result.error is None
        assert _codes(result.diagnostics) == ["empty_stylesheet"]

    def test_comment_only_stylesheet_is_empty(self, identity):
        result = StylesheetAnalyzer(identity).analyze(
            StylesheetSource("notes.css", "/* nothing here yet */\n")
        )
        assert _codes(result.diagnostics) == ["empty_stylesheet"]

    def test_fan_out_diagnostic(self, identity):
        source = StylesheetSource(
            "a.scss", ".menu, .a, .b { .menu__item, .x, .y { color: red; } }", "scss"
        )
        result = StylesheetAnalyzer(identity, AnalysisConfig(fan_out_warning=8)).analyze(source)
        assert _codes(result.diagnostics) == ["selector_fan_out"]
        assert result.diagnostics[0].is_warning

    def test_used_keyframes_and_properties(self, identity):
        source = StylesheetSource(
            "a.css",
            """
            @keyframes pulse { from { opacity: 0; } to { opacity: 1; } }
            @keyframes unused { to { opacity: 0; } }
            @property --angle { syntax: '<angle>'; inherits: false; initial-value: 0deg; }
            .menu { animation: pulse 1s infinite; transform: rotate(var(--angle)); }
            """,
        )
        result = StylesheetAnalyzer(identity).analyze(source)
        assert [k.params for k in result.keyframes] == ["pulse"]
        assert [p.params for p in result.properties] == ["--angle"]

    def test_shadow_matches(self):
        identity = TargetIdentity(tag_name="my-card", shadow_parts=("label",))
        source = StylesheetSource("a.css", "my-card::part(label) { color: red; }")
        result = StylesheetAnalyzer(identity).analyze(source)
        assert [s.selector for s in result.shadow_matches] == ["my-card::part(label)"]
        assert result.matches == []

    def test_shadow_matching_can_be_disabled(self):
        identity = TargetIdentity(tag_name="my-card", shadow_parts=("label",))
        source = StylesheetSource("a.css", "my-card::part(label) { color: red; }")
        analyzer = StylesheetAnalyzer(identity, AnalysisConfig(include_shadow=False))
        assert analyzer.analyze(source).shadow_matches == []

    def test_minified_flag(self, identity):
        source = StylesheetSource("a.min.css", ".menu{color:red}" * 50)
        assert StylesheetAnalyzer(identity).analyze(source).is_minified

    def test_skip_minified_by_content(self, identity):
        source = StylesheetSource("bundle.css", ".menu{color:red}" * 50)
        result = StylesheetAnalyzer(identity, AnalysisConfig(skip_minified=True)).analyze(source)
        assert result.matches == []
        assert result.is_minified
        assert _codes(result.diagnostics) == ["skipped_minified"]

    def test_skip_minified_by_name(self, identity):
        source = StylesheetSource("vendor.min.css", ".menu {\n  color: red;\n}\n")
        result = StylesheetAnalyzer(identity, AnalysisConfig(skip_minified=True)).analyze(source)
        assert result.matches == []
        assert _codes(result.diagnostics) == ["skipped_minified"]

    def test_readable_file_is_not_skipped(self, identity):
        source = StylesheetSource("menu.css", ".menu {\n  color: red;\n}\n")
        result = StylesheetAnalyzer(identity, AnalysisConfig(skip_minified=True)).analyze(source)
        assert [m.selector for m in result.matches] == [".menu"]

    def test_cached_result_is_reused(self, identity):
        cache = AnalysisCache(capacity=4)
        analyzer = StylesheetAnalyzer(identity, cache=cache)
        source = StylesheetSource("a.css", ".menu { color: red; }")
        first = analyzer.analyze(source)
        second = analyzer.analyze(source)
        assert first is second
        assert cache.stats()["hits"] == 1

    def test_cache_disabled_by_config(self, identity):
        cache = AnalysisCache()
        analyzer = StylesheetAnalyzer(identity, AnalysisConfig(use_cache=False), cache)
        analyzer.analyze(StylesheetSource("a.css", ".menu { color: red; }"))
        assert len(cache) == 0


# ---------------------------------------------------------------------------
# analyze_project
# ---------------------------------------------------------------------------


class TestAnalyzeProject:
    def _sources(self):
        return [
            StylesheetSource("a.css", ".menu { color: red; }"),
            StylesheetSource("b.css", ".menu.menu__item { color: green; }"),
            StylesheetSource("c.css", ":where(.menu) { color: blue !important; }"),
        ]

    def test_conflicts_across_files(self, identity):
        report = analyze_project(identity, self._sources(), ["a.css", "b.css", "c.css"])
        decision = report.conflicts["color"]
        assert decision.winner.value == "blue"
        assert decision.winner.source == "c.css"

    def test_threaded_results_keep_input_order(self, identity):
        sources = self._sources() * 3
        sources = [
            StylesheetSource(f"{i}-{s.name}", s.text) for i, s in enumerate(sources)
        ]
        report = analyze_project(identity, sources, config=AnalysisConfig(workers=4))
        assert [f.name for f in report.files] == [s.name for s in sources]

    def test_threaded_and_serial_agree(self, identity):
        serial = analyze_project(identity, self._sources(), ["a.css", "b.css", "c.css"])
        threaded = analyze_project(
            identity, self._sources(), ["a.css", "b.css", "c.css"], AnalysisConfig(workers=3)
        )
        assert serial.to_dict() == threaded.to_dict()

    def test_bad_file_does_not_stop_the_rest(self, identity):
        sources = [StylesheetSource("bad.css", ".menu {"), *self._sources()]
        report = analyze_project(identity, sources)
        assert report.files[0].error
        assert len(report.matches) == 3
        assert "parse_error" in _codes(report.all_diagnostics)

    def test_target_without_classes_or_ids(self):
        report = analyze_project(TargetIdentity(tag_name="div"), [])
        assert _codes(report.diagnostics) == ["no_selectors"]

    def test_unlinked_files(self, identity):
        report = analyze_project(identity, self._sources(), ["a.css"])
        assert report.unlinked_files == ["b.css", "c.css"]

    def test_ghosts_and_extra_patterns(self):
        identity = TargetIdentity(classes=("menu", "lonely", "acme-x"))
        sources = [StylesheetSource("a.css", ".menu { color: red; }")]
        report = analyze_project(
            identity, sources, config=AnalysisConfig(extra_utility_patterns=(r"^acme-",))
        )
        assert report.ghosts.ghost_classes == ("lonely",)

    def test_to_dict_is_json_serializable(self, identity):
        report = analyze_project(identity, self._sources(), ["a.css", "b.css", "c.css"])
        data = json.loads(json.dumps(report.to_dict()))
        assert data["element"]["classes"] == ["menu", "menu__item"]
        assert [f["file"] for f in data["files"]] == ["a.css", "b.css", "c.css"]
        assert all(f["is_linked"] for f in data["files"])
        assert data["conflicts"]["color"]["winner"]["file"] == "c.css"
        assert data["stats"]["total_matches"] == 3
        assert data["ghost_classes"]["has_ghosts"] is False
