"""Stylesheet model: RawDeclaration and Stylesheet dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field

from stylescope.model.rule import AtRuleBlock, SourceRule


@dataclass(frozen=True)
class RawDeclaration:
    """Declaration text as written, before it is split into property/value."""

    text: str
    line: int = 0


@dataclass(frozen=True)
class Stylesheet:
    """Everything a single CSS/SCSS/Less source was split into.

    ``rules`` are in document order; nested rules follow their parent.
    """

    name: str
    syntax: str = "css"
    rules: list[SourceRule] = field(default_factory=list)
    keyframes: list[AtRuleBlock] = field(default_factory=list)
    properties: list[AtRuleBlock] = field(default_factory=list)
    declarations: list[RawDeclaration] = field(default_factory=list)  # top level

    @property
    def is_empty(self) -> bool:
        return not (self.rules or self.keyframes or self.properties or self.declarations)
