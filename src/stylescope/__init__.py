"""stylescope: CSS rule, cascade and ghost-class analysis for one HTML element."""

__version__ = "0.3.0"

from stylescope.analysis import AnalysisReport, FileAnalysis, StylesheetAnalyzer, analyze_project
from stylescope.cascade import collect_declarations, resolve_conflicts
from stylescope.config import AnalysisConfig
from stylescope.ghost import detect_ghost_classes
from stylescope.matching import TargetMatcher, match_selector
from stylescope.model import (
    CascadeDecision,
    GhostClassReport,
    Match,
    MatchResult,
    SourceRule,
    SpecificityVector,
    TargetIdentity,
)
from stylescope.selectors import SelectorResolver, calculate_specificity, resolve_rule
from stylescope.stylesheet import parse_stylesheet

__all__ = [
    "__version__",
    "AnalysisConfig",
    "AnalysisReport",
    "CascadeDecision",
    "FileAnalysis",
    "GhostClassReport",
    "Match",
    "MatchResult",
    "SelectorResolver",
    "SourceRule",
    "SpecificityVector",
    "StylesheetAnalyzer",
    "TargetIdentity",
    "TargetMatcher",
    "analyze_project",
    "calculate_specificity",
    "collect_declarations",
    "detect_ghost_classes",
    "match_selector",
    "parse_stylesheet",
    "resolve_conflicts",
    "resolve_rule",
]
