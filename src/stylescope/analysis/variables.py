"""Custom property and SCSS variable usage in matched rules."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from stylescope._text import split_top_level
from stylescope.model.match import Match
from stylescope.stylesheet.model import Stylesheet

if TYPE_CHECKING:
    from stylescope.analysis.report import FileAnalysis

__all__ = ["VariableDefinition", "VariableUsage", "collect_variables", "variable_usages"]

_CSS_VAR_RE = re.compile(r"var\(\s*(--[-\w]+)")
_SCSS_VAR_RE = re.compile(r"(\$[A-Za-z_][-\w]*)")
_DEFINITION_RE = re.compile(r"^\s*(\$[A-Za-z_][-\w]*|--[-\w]+)\s*:\s*(.+?)\s*$", re.DOTALL)


@dataclass(frozen=True)
class VariableDefinition:
    value: str
    context: str  # defining selector, or "global"
    source: str
    line: int = 0

    def to_dict(self) -> dict[str, object]:
        return {
            "value": self.value,
            "context": self.context,
            "source": self.source,
            "line": self.line,
        }


@dataclass(frozen=True)
class VariableUsage:
    """A variable referenced by a matched rule, with every definition found."""

    name: str  # "--brand" or "$brand"
    definitions: tuple[VariableDefinition, ...] = ()

    @property
    def is_defined(self) -> bool:
        return bool(self.definitions)

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "definitions": [d.to_dict() for d in self.definitions],
        }


def variable_usages(matches: Iterable[Match]) -> list[str]:
    """Names of variables used in the bodies of *matches*, first use first."""
    seen: dict[str, None] = {}
    for match in matches:
        for decl in split_top_level(match.rule.body, ";"):
            _, sep, value = decl.partition(":")
            if not sep:
                continue
            for name in _CSS_VAR_RE.findall(value):
                seen.setdefault(name, None)
            for name in _SCSS_VAR_RE.findall(value):
                seen.setdefault(name, None)
    return list(seen)


def _definitions(sheet: Stylesheet, wanted: set[str]) -> Iterable[tuple[str, VariableDefinition]]:
    for decl in sheet.declarations:
        m = _DEFINITION_RE.match(decl.text)
        if m and m.group(1) in wanted:
            yield m.group(1), VariableDefinition(m.group(2), "global", sheet.name, decl.line)
    for rule in sheet.rules:
        for decl in split_top_level(rule.body, ";"):
            m = _DEFINITION_RE.match(decl)
            if m and m.group(1) in wanted:
                yield m.group(1), VariableDefinition(
                    m.group(2), rule.selector, sheet.name, rule.start_line
                )


def collect_variables(files: Iterable[FileAnalysis]) -> list[VariableUsage]:
    """Variables used by the files' matches, resolved against every file."""
    files = list(files)
    names = variable_usages(m for f in files for m in f.matches)
    if not names:
        return []
    wanted = set(names)
    found: dict[str, list[VariableDefinition]] = {name: [] for name in names}
    for f in files:
        if f.stylesheet is None:
            continue
        for name, definition in _definitions(f.stylesheet, wanted):
            found[name].append(definition)
    return [VariableUsage(name, tuple(found[name])) for name in names]
