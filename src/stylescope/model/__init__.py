from stylescope.model.cascade import CascadeDecision, Declaration
from stylescope.model.diagnostic import Diagnostic, Severity
from stylescope.model.ghost import GhostClassReport
from stylescope.model.identity import TargetIdentity
from stylescope.model.match import Match, MatchResult, ResolvedSelector, ShadowMatch
from stylescope.model.rule import AtRule, AtRuleBlock, SourceRule, format_at_rules
from stylescope.model.specificity import ZERO, SpecificityVector

__all__ = [
    "AtRule",
    "AtRuleBlock",
    "CascadeDecision",
    "Declaration",
    "Diagnostic",
    "GhostClassReport",
    "Match",
    "MatchResult",
    "ResolvedSelector",
    "Severity",
    "ShadowMatch",
    "SourceRule",
    "SpecificityVector",
    "TargetIdentity",
    "ZERO",
    "format_at_rules",
]
