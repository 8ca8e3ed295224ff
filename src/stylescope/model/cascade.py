"""Cascade model: Declaration and CascadeDecision dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field

from stylescope.model.match import Match
from stylescope.model.specificity import SpecificityVector


@dataclass(frozen=True)
class Declaration:
    """One ``property: value`` pair contributed by a matched rule.

    Attributes:
        property: Property name, lower-cased unless it is a custom property.
        value: Declared value with any ``!important`` flag removed.
        important: Whether the declaration carried ``!important``.
        match: The match whose rule declared it.
        file_rank: Position of the source in stylesheet load order.
        rule_order: Position of the rule within its source.
        index: Position of the declaration within its rule.
    """

    property: str
    value: str
    important: bool
    match: Match = field(compare=False, repr=False)
    file_rank: int = 0
    rule_order: int = 0
    index: int = 0

    @property
    def specificity(self) -> SpecificityVector:
        return self.match.specificity

    @property
    def selector(self) -> str:
        return self.match.selector

    @property
    def source(self) -> str:
        return self.match.source

    def rank_key(self) -> tuple[bool, SpecificityVector, int, int, int]:
        """Cascade order: importance, specificity, file order, source position."""
        return (self.important, self.specificity, self.file_rank, self.rule_order, self.index)

    def to_dict(self) -> dict[str, object]:
        return {
            "selector": self.selector,
            "value": self.value,
            "important": self.important,
            "specificity": str(self.specificity),
            "file": self.source,
            "start_line": self.match.start_line,
            "end_line": self.match.end_line,
        }


@dataclass(frozen=True)
class CascadeDecision:
    """The winning declaration for one property and everything it beat.

    ``losers`` are in reverse rank order: the closest competitor first.
    """

    property: str
    winner: Declaration
    losers: tuple[Declaration, ...] = ()

    @property
    def has_conflict(self) -> bool:
        return bool(self.losers)

    def to_dict(self) -> dict[str, object]:
        return {
            "winner": self.winner.to_dict(),
            "losers": [d.to_dict() for d in self.losers],
        }
