"""Result types for per-file and whole-project analyses."""

from __future__ import annotations

from dataclasses import dataclass, field

from stylescope.analysis.variables import VariableUsage
from stylescope.model.cascade import CascadeDecision
from stylescope.model.diagnostic import Diagnostic
from stylescope.model.ghost import GhostClassReport
from stylescope.model.identity import TargetIdentity
from stylescope.model.match import Match, ShadowMatch
from stylescope.model.rule import AtRuleBlock
from stylescope.stylesheet.model import Stylesheet


@dataclass(frozen=True)
class FileAnalysis:
    """Everything one stylesheet contributes to the target.

    ``error`` is set (and the match lists are empty) when the stylesheet
    could not be analyzed at all; the rest of the project is unaffected.
    """

    name: str
    syntax: str = "css"
    matches: list[Match] = field(default_factory=list)
    shadow_matches: list[ShadowMatch] = field(default_factory=list)
    keyframes: list[AtRuleBlock] = field(default_factory=list)  # used by matches
    properties: list[AtRuleBlock] = field(default_factory=list)  # used by matches
    is_minified: bool = False
    error: str | None = None
    diagnostics: list[Diagnostic] = field(default_factory=list)
    stylesheet: Stylesheet | None = field(default=None, compare=False, repr=False)

    @property
    def has_matches(self) -> bool:
        return bool(self.matches or self.shadow_matches)

    def to_dict(self) -> dict[str, object]:
        return {
            "file": self.name,
            "syntax": self.syntax,
            "is_minified": self.is_minified,
            "error": self.error,
            "matches": [m.to_dict() for m in self.matches],
            "shadow_dom_matches": [m.to_dict() for m in self.shadow_matches],
            "keyframes": [k.to_dict() for k in self.keyframes],
            "properties": [p.to_dict() for p in self.properties],
        }


@dataclass(frozen=True)
class AnalysisReport:
    """Outcome of analyzing one target against a set of stylesheets."""

    identity: TargetIdentity
    files: list[FileAnalysis] = field(default_factory=list)
    conflicts: dict[str, CascadeDecision] = field(default_factory=dict)
    ghosts: GhostClassReport = field(default_factory=GhostClassReport)
    variables: list[VariableUsage] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    link_order: list[str] = field(default_factory=list)

    @property
    def matched_files(self) -> list[FileAnalysis]:
        return [f for f in self.files if f.has_matches]

    @property
    def matches(self) -> list[Match]:
        return [m for f in self.files for m in f.matches]

    @property
    def unlinked_files(self) -> list[str]:
        """Files with matching rules that the document never links.

        Empty when no link order is known.
        """
        if not self.link_order:
            return []
        linked = set(self.link_order)
        return [f.name for f in self.matched_files if f.name not in linked]

    @property
    def all_diagnostics(self) -> list[Diagnostic]:
        return [*self.diagnostics, *(d for f in self.files for d in f.diagnostics)]

    def to_dict(self) -> dict[str, object]:
        linked = set(self.link_order)
        files = []
        for f in self.matched_files:
            entry = f.to_dict()
            entry["is_linked"] = f.name in linked
            files.append(entry)
        return {
            "element": self.identity.to_dict(),
            "files": files,
            "conflicts": {prop: d.to_dict() for prop, d in self.conflicts.items()},
            "ghost_classes": self.ghosts.to_dict(),
            "variables": [v.to_dict() for v in self.variables],
            "unlinked_files": self.unlinked_files,
            "diagnostics": [d.to_dict() for d in self.all_diagnostics],
            "stats": {
                "files_scanned": len(self.files),
                "files_with_matches": len(self.matched_files),
                "total_matches": len(self.matches),
                "conflicts": sum(1 for d in self.conflicts.values() if d.has_conflict),
            },
        }
