"""Target matching: can a selector apply to the analyzed element, and why."""

from __future__ import annotations

import re
from dataclasses import dataclass

from stylescope._text import split_top_level
from stylescope.model.identity import TargetIdentity
from stylescope.model.match import MatchResult, ResolvedSelector
from stylescope.selectors.resolver import expand_pseudo_classes

__all__ = ["TargetMatcher", "css_escape", "match_selector"]

# What may follow a class or id name without extending it.
_NAME_END = r"(?=[\s,:.\[#>+~)]|$)"
# What may precede a type selector.
_TAG_START = r"(?:^|[\s,>+~(])"

_IDENT_CHAR_RE = re.compile(r"[A-Za-z0-9_-]|[^\x00-\x7f]")


def css_escape(name: str) -> str:
    """Escape *name* the way it has to be written in a selector.

    ``md:flex`` becomes ``md\\:flex`` and ``2xl`` becomes ``\\32 xl``.
    """
    out: list[str] = []
    for i, ch in enumerate(name):
        if i == 0 and ch.isdigit():
            out.append(f"\\{ord(ch):x} ")
        elif _IDENT_CHAR_RE.match(ch):
            out.append(ch)
        else:
            out.append("\\" + ch)
    return "".join(out)


def _name_alternatives(name: str) -> str:
    forms = [re.escape(name)]
    escaped = css_escape(name)
    if escaped != name:
        forms.append(re.escape(escaped))
    return "(?:" + "|".join(forms) + ")"


@dataclass(frozen=True)
class _Pattern:
    kind: str  # "class", "id", "tag", "data-attr"
    value: str
    regex: re.Pattern[str]

    @property
    def reason(self) -> str:
        return f"{self.kind}: {self.value}"


def _build_patterns(identity: TargetIdentity) -> list[_Pattern]:
    patterns: list[_Pattern] = []
    for cls in identity.classes:
        regex = re.compile(r"\." + _name_alternatives(cls) + _NAME_END)
        patterns.append(_Pattern("class", cls, regex))
    for id_ in identity.ids:
        regex = re.compile(r"#" + _name_alternatives(id_) + _NAME_END)
        patterns.append(_Pattern("id", id_, regex))
    # A bare tag would match nearly every rule; only use it to corroborate.
    if identity.tag_name and identity.has_selectors:
        regex = re.compile(
            _TAG_START + re.escape(identity.tag_name) + _NAME_END, re.IGNORECASE
        )
        patterns.append(_Pattern("tag", identity.tag_name, regex))
    for attr in identity.data_attributes:
        regex = re.compile(
            r"\[\s*" + re.escape(attr) + r"\s*(?:[~|^$*]?=|\])", re.IGNORECASE
        )
        patterns.append(_Pattern("data-attr", attr, regex))
    return patterns


class TargetMatcher:
    """Selector matcher compiled once for one :class:`TargetIdentity`.

    Matching is textual: a selector matches when any of the target's
    classes, ids, data attributes (or its tag, when it also has a class or
    id) appear in it as whole names. Both the selector and its
    pseudo-class-expanded form are searched.
    """

    def __init__(self, identity: TargetIdentity) -> None:
        self.identity = identity
        self._patterns = _build_patterns(identity)

    def match(self, selector: str, expanded: str | None = None) -> MatchResult:
        """Return whether *selector* can match the target and the reasons."""
        if not isinstance(selector, str) or not selector.strip():
            return MatchResult.no_match()
        if expanded is None:
            expanded = expand_pseudo_classes(selector)
        reasons: dict[str, None] = {}
        for pattern in self._patterns:
            if pattern.regex.search(selector) or (
                expanded != selector and pattern.regex.search(expanded)
            ):
                reasons.setdefault(pattern.reason, None)
        return MatchResult(matches=bool(reasons), reasons=tuple(reasons))

    def match_resolved(self, resolved: ResolvedSelector) -> MatchResult:
        return self.match(resolved.text, resolved.expanded)

    def matching_branches(self, selector: str) -> list[str]:
        """Return the top-level comma branches of *selector* that match."""
        if not isinstance(selector, str):
            return []
        return [b for b in split_top_level(selector) if self.match(b).matches]


def match_selector(selector: str, identity: TargetIdentity) -> MatchResult:
    """One-off match; build a :class:`TargetMatcher` to match many selectors."""
    return TargetMatcher(identity).match(selector)
