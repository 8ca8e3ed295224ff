"""SpecificityVector: CSS specificity as an ordered tuple."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class SpecificityVector:
    """Specificity compared lexicographically, most significant term first.

    The leading ``inline`` slot exists for completeness; inline styles are
    not cascade participants here, so it is always zero.
    """

    inline: int = 0
    ids: int = 0
    classes: int = 0
    elements: int = 0

    def __add__(self, other: SpecificityVector) -> SpecificityVector:
        return SpecificityVector(
            self.inline + other.inline,
            self.ids + other.ids,
            self.classes + other.classes,
            self.elements + other.elements,
        )

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.inline, self.ids, self.classes, self.elements)

    def __str__(self) -> str:
        return "(" + ",".join(str(n) for n in self.as_tuple()) + ")"


ZERO = SpecificityVector()
ID = SpecificityVector(ids=1)
CLASS = SpecificityVector(classes=1)
ELEMENT = SpecificityVector(elements=1)
