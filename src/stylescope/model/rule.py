"""Stylesheet rule model: AtRule, SourceRule and AtRuleBlock dataclasses."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class AtRule:
    """One enclosing at-rule, e.g. ``@media (min-width: 600px)``."""

    name: str  # "media", "layer", "container", "supports", ...
    params: str = ""

    @property
    def context(self) -> str:
        if self.params:
            return f"@{self.name} {self.params}"
        return f"@{self.name}"


def format_at_rules(at_rules: tuple[AtRule, ...]) -> str | None:
    """Render an at-rule chain outermost first, or None for an empty chain."""
    if not at_rules:
        return None
    return " ".join(a.context for a in at_rules)


@dataclass(frozen=True, eq=False)
class SourceRule:
    """A single CSS rule as authored.

    Rules are compared by identity: two textually identical rules in
    different places of a file are different rules.

    Attributes:
        selector: Raw selector text, possibly containing ``&``.
        body: The rule's own declarations (nested rules excluded).
        parent: The enclosing style rule, for nested rules.
        at_rules: Enclosing conditional at-rules, outermost first.
        source: Name of the stylesheet the rule came from.
        start_line: 1-based line of the first selector character.
        end_line: 1-based line of the closing brace.
        order: Position of the rule in document order within its source.
        text: Full source text of the rule, nested rules included.
    """

    selector: str
    body: str = ""
    parent: SourceRule | None = None
    at_rules: tuple[AtRule, ...] = ()
    source: str = "<string>"
    start_line: int = 0
    end_line: int = 0
    order: int = 0
    text: str = ""

    @property
    def is_nested(self) -> bool:
        return self.parent is not None

    @property
    def at_rule_context(self) -> str | None:
        return format_at_rules(self.at_rules)

    def ancestors(self) -> Iterator[SourceRule]:
        """Yield enclosing style rules, innermost first."""
        rule = self.parent
        while rule is not None:
            yield rule
            rule = rule.parent


@dataclass(frozen=True)
class AtRuleBlock:
    """A captured block at-rule such as ``@keyframes`` or ``@property``."""

    name: str
    params: str
    text: str
    source: str = "<string>"
    start_line: int = 0
    end_line: int = 0
    at_rules: tuple[AtRule, ...] = ()

    @property
    def at_rule_context(self) -> str | None:
        return format_at_rules(self.at_rules)

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "params": self.params,
            "start_line": self.start_line,
            "end_line": self.end_line,
            "at_rule_context": self.at_rule_context,
        }
