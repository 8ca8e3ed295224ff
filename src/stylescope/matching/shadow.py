"""Shadow DOM matching for ``::part()`` and ``::slotted()`` selectors.

Both checks are substring heuristics rather than real selector matching:
``::part(name)`` matches when the target exposes ``part="name"`` or when
any of its classes, ids or its tag occur anywhere in the selector (the
host side), and ``::slotted(inner)`` matches when one of the target's
classes occurs in ``inner``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from stylescope.model.identity import TargetIdentity

__all__ = ["ShadowMatchResult", "match_shadow"]

_PART_RE = re.compile(r"::part\(([^)]+)\)", re.IGNORECASE)
_SLOTTED_RE = re.compile(r"::slotted\(([^)]+)\)", re.IGNORECASE)


@dataclass(frozen=True)
class ShadowMatchResult:
    matches: bool = False
    reasons: tuple[str, ...] = ()
    kinds: tuple[str, ...] = ()


def match_shadow(selector: str, identity: TargetIdentity) -> ShadowMatchResult:
    if not isinstance(selector, str) or "::" not in selector:
        return ShadowMatchResult()

    reasons: list[str] = []
    kinds: list[str] = []

    part = _PART_RE.search(selector)
    if part:
        for name in part.group(1).split():
            if name in identity.shadow_parts:
                reasons.append(f"part: {name}")
        host_names = [*identity.classes, *identity.ids, identity.tag_name]
        if any(name and name in selector for name in host_names):
            reasons.append("shadow-host with part")
        if reasons:
            kinds.append("::part")

    slotted = _SLOTTED_RE.search(selector)
    if slotted:
        inner = slotted.group(1).strip()
        if any(cls in inner for cls in identity.classes):
            reasons.append(f"slotted: {inner}")
            kinds.append("::slotted")

    return ShadowMatchResult(matches=bool(reasons), reasons=tuple(reasons), kinds=tuple(kinds))
