"""Matching model: resolved selectors and the matches built from them."""

from __future__ import annotations

from dataclasses import dataclass, field

from stylescope.model.rule import SourceRule
from stylescope.model.specificity import ZERO, SpecificityVector


@dataclass(frozen=True)
class ResolvedSelector:
    """A nested selector flattened into its browser-equivalent form.

    ``expanded`` is ``text`` followed by the arguments of any ``:is()``,
    ``:where()``, ``:not()`` or ``:has()`` so identifiers inside them can be
    found without a full selector-list grammar.
    """

    text: str
    expanded: str
    rule: SourceRule = field(compare=False, repr=False)


@dataclass(frozen=True)
class MatchResult:
    """Outcome of testing one selector against a target identity."""

    matches: bool = False
    reasons: tuple[str, ...] = ()

    @classmethod
    def no_match(cls) -> MatchResult:
        return cls(False, ())


@dataclass(frozen=True)
class Match:
    """A resolved selector that can match the target, and why."""

    selector: str  # resolved
    reasons: tuple[str, ...]
    rule: SourceRule = field(compare=False, repr=False)
    specificity: SpecificityVector = ZERO

    @property
    def original_selector(self) -> str:
        return self.rule.selector

    @property
    def source(self) -> str:
        return self.rule.source

    @property
    def at_rule_context(self) -> str | None:
        return self.rule.at_rule_context

    @property
    def start_line(self) -> int:
        return self.rule.start_line

    @property
    def end_line(self) -> int:
        return self.rule.end_line

    @property
    def is_nested(self) -> bool:
        return self.rule.is_nested

    def to_dict(self) -> dict[str, object]:
        return {
            "selector": self.selector,
            "original_selector": self.original_selector,
            "matched_on": list(self.reasons),
            "at_rule_context": self.at_rule_context,
            "start_line": self.start_line,
            "end_line": self.end_line,
            "specificity": str(self.specificity),
            "is_nested": self.is_nested,
        }


@dataclass(frozen=True)
class ShadowMatch:
    """A ``::part()`` / ``::slotted()`` rule relating to the target.

    These describe host-versus-content styling, so they never take part in
    the element's own cascade.
    """

    selector: str
    reasons: tuple[str, ...]
    kinds: tuple[str, ...]  # "::part", "::slotted"
    rule: SourceRule = field(compare=False, repr=False)

    @property
    def original_selector(self) -> str:
        return self.rule.selector

    @property
    def at_rule_context(self) -> str | None:
        return self.rule.at_rule_context

    def to_dict(self) -> dict[str, object]:
        return {
            "selector": self.selector,
            "original_selector": self.original_selector,
            "matched_on": list(self.reasons),
            "shadow_dom_type": list(self.kinds),
            "at_rule_context": self.at_rule_context,
            "start_line": self.rule.start_line,
            "end_line": self.rule.end_line,
        }
