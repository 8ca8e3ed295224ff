"""Selector specificity computed from a Lark grammar of CSS selectors."""

from __future__ import annotations

import functools
import logging
from pathlib import Path

from lark import Lark, Token, Transformer
from lark.exceptions import LarkError

from stylescope.model.specificity import CLASS, ELEMENT, ID, ZERO, SpecificityVector

__all__ = [
    "calculate_specificity",
    "compare_specificity",
    "format_specificity",
    "SpecificityTransformer",
]

log = logging.getLogger(__name__)

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"

# Pseudo-elements that CSS2 allowed with a single colon.
_LEGACY_PSEUDO_ELEMENTS = frozenset({"before", "after", "first-line", "first-letter"})


class SpecificityTransformer(Transformer):  # type: ignore[type-arg]
    """Fold a selector parse tree into a :class:`SpecificityVector`.

    ``:where()`` counts for nothing; ``:is()``, ``:not()``, ``:has()`` and
    friends count as their most specific argument. A selector list yields
    its most specific branch.
    """

    # ---- simple selectors ----

    def type_selector(self, items: list[Token]) -> SpecificityVector:
        return ELEMENT

    def universal(self, items: list[Token]) -> SpecificityVector:
        return ZERO

    def nesting(self, items: list[Token]) -> SpecificityVector:
        return ZERO

    def id_selector(self, items: list[Token]) -> SpecificityVector:
        return ID

    def class_selector(self, items: list[Token]) -> SpecificityVector:
        return CLASS

    def attribute_selector(self, items: list[Token]) -> SpecificityVector:
        return CLASS

    def pseudo_element(self, items: list[Token]) -> SpecificityVector:
        return ELEMENT

    def pseudo_class(self, items: list[Token]) -> SpecificityVector:
        if str(items[0]).lower() in _LEGACY_PSEUDO_ELEMENTS:
            return ELEMENT
        return CLASS

    def pseudo_function(self, items: list[Token]) -> SpecificityVector:
        return CLASS

    def element_function(self, items: list[Token]) -> SpecificityVector:
        return ELEMENT

    def selector_function(self, items: list[object]) -> SpecificityVector:
        name = str(items[0])[1:-1].lower()
        if name == "where":
            return ZERO
        branches = items[1]
        return max(branches, default=ZERO)  # type: ignore[type-var, arg-type]

    def scoped_function(self, items: list[object]) -> SpecificityVector:
        # :host() is a pseudo-class and ::slotted() a pseudo-element, each
        # plus its argument.
        base = ELEMENT if str(items[0]).startswith("::") else CLASS
        branches = items[1]
        return base + max(branches, default=ZERO)  # type: ignore[type-var, arg-type, operator]

    # ---- structural ----

    def complex_selector(self, items: list[object]) -> SpecificityVector:
        total = ZERO
        for item in items:
            if isinstance(item, SpecificityVector):
                total = total + item
        return total

    def selector_list(self, items: list[SpecificityVector]) -> list[SpecificityVector]:
        return list(items)

    def start(self, items: list[list[SpecificityVector]]) -> SpecificityVector:
        return max(items[0], default=ZERO)


@functools.lru_cache(maxsize=1)
def _parser() -> Lark:
    return Lark(GRAMMAR_PATH.read_text(encoding="utf-8"), parser="lalr", start="start")


def calculate_specificity(selector: str) -> SpecificityVector:
    """Return the specificity of *selector* as ``(inline, ids, classes, elements)``.

    A selector list yields its most specific branch. Anything the grammar
    cannot read yields the zero vector; this function never raises on input.
    """
    if not isinstance(selector, str) or not selector.strip():
        return ZERO
    parser = _parser()
    try:
        tree = parser.parse(selector)
        return SpecificityTransformer().transform(tree)
    except LarkError as exc:
        log.debug("Cannot compute specificity of %r: %s", selector, exc)
        return ZERO


def compare_specificity(a: SpecificityVector, b: SpecificityVector) -> int:
    """Return 1, 0 or -1 as *a* is more, equally or less specific than *b*."""
    if a > b:
        return 1
    if a < b:
        return -1
    return 0


def format_specificity(vector: SpecificityVector) -> str:
    return str(vector)
