"""End-to-end scenarios: HTML target, stylesheets, full report."""

from itertools import permutations

import pytest

from stylescope import AnalysisConfig, analyze_project
from stylescope.analysis import AnalysisCache
from stylescope.html import extract_target
from stylescope.model import TargetIdentity
from stylescope.sources import StylesheetSource


# ---------------------------------------------------------------------------
# Nested selectors reach the target
# ---------------------------------------------------------------------------


class TestNestedMenu:
    def test_nested_rules_resolve_and_match(self):
        identity = extract_target(
            '<nav class="menu"><a class="menu__item" href="#">Home</a></nav>', ".menu"
        )
        source = StylesheetSource(
            "menu.scss",
            ".menu { &__item { color: blue; } &:hover { background: red; } }",
            "scss",
        )
        report = analyze_project(identity, [source])
        selectors = [m.selector for m in report.matches]
        assert ".menu__item" in selectors
        assert ".menu:hover" in selectors


# ---------------------------------------------------------------------------
# !important across files
# ---------------------------------------------------------------------------


class TestImportantAcrossFiles:
    SOURCES = [
        StylesheetSource("one.css", "#nav { color: red; }"),
        StylesheetSource("two.css", "#nav#nav { color: green; }"),
        StylesheetSource("three.css", ":where(.menu) { color: blue !important; }"),
    ]

    @pytest.mark.parametrize("link_order", list(permutations(["one.css", "two.css", "three.css"])))
    def test_important_wins(self, link_order):
        identity = TargetIdentity(classes=("menu",), ids=("nav",))
        report = analyze_project(identity, self.SOURCES, list(link_order))
        decision = report.conflicts["color"]
        assert decision.winner.value == "blue"
        assert decision.winner.source == "three.css"
        assert [str(d.specificity) for d in decision.losers] == ["(0,2,0,0)", "(0,1,0,0)"]


# ---------------------------------------------------------------------------
# Ghost classes
# ---------------------------------------------------------------------------


class TestGhostReport:
    def test_only_missing_class_is_a_ghost(self):
        identity = TargetIdentity(classes=("flex", "p-4", "text-blue-500", "my-missing-class"))
        report = analyze_project(identity, [StylesheetSource("a.css", ".unrelated { color: red; }")])
        assert report.ghosts.ghost_classes == ("my-missing-class",)
        assert report.to_dict()["ghost_classes"]["ghost_classes"] == ["my-missing-class"]


# ---------------------------------------------------------------------------
# Shared cache across runs
# ---------------------------------------------------------------------------


class TestSharedCache:
    def test_second_run_is_served_from_cache(self):
        identity = TargetIdentity(classes=("menu",))
        sources = [
            StylesheetSource("a.css", ".menu { color: red; }"),
            StylesheetSource("b.css", ".menu { color: blue; }"),
        ]
        cache = AnalysisCache(capacity=8)
        config = AnalysisConfig(workers=2)
        first = analyze_project(identity, sources, ["a.css", "b.css"], config, cache)
        second = analyze_project(identity, sources, ["a.css", "b.css"], config, cache)
        assert cache.stats()["hits"] == 2
        assert first.to_dict() == second.to_dict()
        assert second.conflicts["color"].winner.value == "blue"
