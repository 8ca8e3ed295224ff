"""Ghost class detection: markup classes that no project rule targets."""

from __future__ import annotations

import re
from collections.abc import Iterable

from stylescope.ghost.patterns import compile_patterns, is_utility_class
from stylescope.model.ghost import GhostClassReport
from stylescope.model.identity import TargetIdentity
from stylescope.model.match import Match

__all__ = ["detect_ghost_classes", "defined_classes"]


def defined_classes(classes: Iterable[str], matches: Iterable[Match]) -> set[str]:
    """Classes referenced by any match.

    Taken from ``class:`` reasons, plus a plain substring search of every
    matched selector, which picks up classes that only occur inside a
    functional pseudo-class argument.
    """
    classes = list(classes)
    defined: set[str] = set()
    for match in matches:
        for reason in match.reasons:
            kind, _, value = reason.partition(":")
            if kind.strip() == "class" and value.strip():
                defined.add(value.strip())
        selector = match.selector or ""
        for cls in classes:
            if cls in selector:
                defined.add(cls)
    return defined


def detect_ghost_classes(
    identity: TargetIdentity,
    matches: Iterable[Match],
    extra_patterns: Iterable[str | re.Pattern[str]] = (),
) -> GhostClassReport:
    """Report the target's classes that have no rule and no known convention."""
    classes = identity.classes
    if not classes:
        return GhostClassReport()

    defined = defined_classes(classes, matches)
    extra = compile_patterns(extra_patterns)
    ghosts = tuple(
        cls for cls in classes if cls not in defined and not is_utility_class(cls, extra)
    )
    return GhostClassReport(
        ghost_classes=ghosts,
        defined_classes=tuple(cls for cls in classes if cls in defined),
        total_classes=len(classes),
    )
