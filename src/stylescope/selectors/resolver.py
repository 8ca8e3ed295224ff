"""Nested selector resolution and functional pseudo-class expansion."""

from __future__ import annotations

import logging
import re

from stylescope._text import find_closing, split_top_level
from stylescope.model.match import ResolvedSelector
from stylescope.model.rule import SourceRule

__all__ = ["SelectorResolver", "expand_pseudo_classes", "resolve_rule"]

log = logging.getLogger(__name__)

DEFAULT_FAN_OUT_WARNING = 8

_EXPANDABLE_RE = re.compile(r":(?:is|where|not|has)\(", re.IGNORECASE)


def expand_pseudo_classes(selector: str) -> str:
    """Append the arguments of ``:is()``/``:where()``/``:not()``/``:has()``.

    The result is the original selector followed by each argument list,
    space-joined, nested functions included::

        >>> expand_pseudo_classes(".nav :is(.item, .link)")
        '.nav :is(.item, .link) .item, .link'
    """
    extras: list[str] = []
    for m in _EXPANDABLE_RE.finditer(selector):
        open_index = m.end() - 1
        close = find_closing(selector, open_index)
        if close == -1:
            close = len(selector)
        inner = selector[open_index + 1 : close].strip()
        if inner:
            extras.append(inner)
    if not extras:
        return selector
    return " ".join([selector, *extras])


class SelectorResolver:
    """Flattens ``&`` and plain CSS nesting into browser-equivalent selectors.

    A comma-separated parent fans out: ``&`` binds to every parent branch
    independently, so ``.a, .b { &--x {} }`` gives ``.a--x`` and ``.b--x``.
    A comma-separated child fans out the same way, parent order first.
    Parent resolutions are memoized per resolver; use one resolver per
    stylesheet and drop it (or call :meth:`clear`) afterwards.
    """

    def __init__(self, fan_out_warning: int = DEFAULT_FAN_OUT_WARNING) -> None:
        self.fan_out_warning = fan_out_warning
        self.fan_out_warnings: list[tuple[SourceRule, int]] = []
        self._memo: dict[SourceRule, list[str]] = {}

    def resolve(self, rule: SourceRule) -> list[ResolvedSelector]:
        texts = self._resolve_text(rule)
        if len(texts) > self.fan_out_warning:
            log.warning(
                "Selector %r at %s:%d fans out into %d variants",
                rule.selector,
                rule.source,
                rule.start_line,
                len(texts),
            )
            self.fan_out_warnings.append((rule, len(texts)))
        return [
            ResolvedSelector(text=text, expanded=expand_pseudo_classes(text), rule=rule)
            for text in texts
        ]

    def clear(self) -> None:
        self._memo.clear()
        self.fan_out_warnings.clear()

    def _resolve_text(self, rule: SourceRule) -> list[str]:
        cached = self._memo.get(rule)
        if cached is not None:
            return cached

        if rule.parent is None:
            # "&" at the root of a stylesheet refers to the scoping root.
            if "&" in rule.selector:
                result = [rule.selector.replace("&", ":scope")]
            else:
                result = [rule.selector]
        else:
            parents: list[str] = []
            for resolved in self._resolve_text(rule.parent):
                parents.extend(split_top_level(resolved) or [resolved])
            children = split_top_level(rule.selector) or [rule.selector.strip()]
            result = []
            for parent in parents:
                for child in children:
                    if "&" in child:
                        result.append(child.replace("&", parent))
                    else:
                        result.append(f"{parent} {child}")

        self._memo[rule] = result
        return result


def resolve_rule(rule: SourceRule) -> list[ResolvedSelector]:
    """Resolve a single rule with a throwaway :class:`SelectorResolver`."""
    return SelectorResolver().resolve(rule)
