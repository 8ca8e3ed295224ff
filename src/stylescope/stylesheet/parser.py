"""Hand-written scanner splitting CSS, SCSS and Less source into rules.

Syntax example:
    .menu { color: blue; &__item { color: red; } }
    @media (min-width: 600px) { .menu { display: flex; } }
    @keyframes pulse { from { opacity: 0; } to { opacity: 1; } }

The scanner only finds rule boundaries, declarations and at-rule scoping.
Selectors and values are kept as text; nothing is validated.
"""

from __future__ import annotations

import logging
import re
from pathlib import PurePath

from stylescope._text import split_top_level
from stylescope.errors import StylesheetParseError
from stylescope.model.rule import AtRule, AtRuleBlock, SourceRule
from stylescope.stylesheet.model import RawDeclaration, Stylesheet

__all__ = ["parse_stylesheet", "parse_declarations", "syntax_for"]

log = logging.getLogger(__name__)

# At-rules whose block holds rules (and, inside a style rule, declarations)
# that still apply to the surrounding selector.
_GROUP_AT_RULES = frozenset({
    "media",
    "supports",
    "container",
    "layer",
    "scope",
    "document",
    "-moz-document",
    "starting-style",
    # SCSS control flow and mixin content blocks
    "include",
    "if",
    "else",
    "each",
    "for",
    "while",
})

_KEYFRAMES_AT_RULES = frozenset({
    "keyframes",
    "-webkit-keyframes",
    "-moz-keyframes",
    "-o-keyframes",
})

_AT_RULE_RE = re.compile(r"@(?P<name>[-\w]+)\s*(?P<params>.*)", re.DOTALL)

_PROPERTY_RE = re.compile(r"^(?:--[-\w]*|-?[A-Za-z_][-\w]*)$")

_IMPORTANT_RE = re.compile(r"\s*!\s*important\s*$", re.IGNORECASE)

_SYNTAX_BY_SUFFIX = {
    ".css": "css",
    ".scss": "scss",
    ".sass": "sass",
    ".less": "less",
}


def syntax_for(path: str | PurePath) -> str:
    """Return the stylesheet syntax implied by a file name (default ``css``)."""
    return _SYNTAX_BY_SUFFIX.get(PurePath(path).suffix.lower(), "css")


class _Block:
    """Intermediate style-rule node built while scanning."""

    def __init__(
        self,
        selector: str,
        at_rules: tuple[AtRule, ...],
        start_line: int,
        start: int,
        order: int,
    ) -> None:
        self.selector = selector
        self.at_rules = at_rules
        self.start_line = start_line
        self.end_line = start_line
        self.start = start
        self.end = start
        self.order = order
        self.declarations: list[RawDeclaration] = []
        self.children: list[_Block] = []


class _Scanner:
    """Single-pass scanner tracking comments, strings, nesting and lines."""

    def __init__(self, text: str, name: str, syntax: str) -> None:
        self.text = text
        self.name = name
        self.line_comments = syntax in ("scss", "less")
        self.pos = 0
        self.line = 1
        self.roots: list[_Block] = []
        self.keyframes: list[AtRuleBlock] = []
        self.properties: list[AtRuleBlock] = []
        self.top_level: list[RawDeclaration] = []
        self._order = 0

    # ---- low-level movement ----

    def _advance(self, count: int = 1) -> str:
        chunk = self.text[self.pos : self.pos + count]
        self.line += chunk.count("\n")
        self.pos += len(chunk)
        return chunk

    def _column(self, pos: int) -> int:
        return pos - self.text.rfind("\n", 0, pos)

    def _peek(self) -> tuple[str, str]:
        return self.text[self.pos], self.text[self.pos + 1 : self.pos + 2]

    def _skip_comment(self) -> None:
        end = self.text.find("*/", self.pos + 2)
        if end == -1:
            raise StylesheetParseError(
                "Unclosed comment", line=self.line, column=self._column(self.pos)
            )
        self._advance(end + 2 - self.pos)

    def _skip_line(self) -> None:
        end = self.text.find("\n", self.pos)
        if end == -1:
            end = len(self.text)
        self._advance(end - self.pos)

    def _read_string(self, quote: str) -> str:
        start, line = self.pos, self.line
        self._advance()
        while self.pos < len(self.text):
            ch = self.text[self.pos]
            if ch == "\\":
                self._advance(2)
            elif ch == quote:
                self._advance()
                return self.text[start : self.pos]
            elif ch == "\n":
                break
            else:
                self._advance()
        raise StylesheetParseError("Unclosed string", line=line, column=self._column(start))

    def _read_interpolation(self) -> str:
        start, line = self.pos, self.line
        self._advance(2)
        depth = 1
        while self.pos < len(self.text):
            ch = self._advance()
            if ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    return self.text[start : self.pos]
        raise StylesheetParseError(
            "Unclosed interpolation", line=line, column=self._column(start)
        )

    def _skip_block(self, opened_at: tuple[int, int]) -> None:
        """Consume a block body whose opening brace was already read."""
        depth = 1
        parens = 0
        while self.pos < len(self.text):
            ch, nxt = self._peek()
            if ch == "/" and nxt == "*":
                self._skip_comment()
                continue
            if ch == "/" and nxt == "/" and self.line_comments and parens == 0:
                self._skip_line()
                continue
            if ch in "\"'":
                self._read_string(ch)
                continue
            if ch == "\\":
                self._advance(2)
                continue
            self._advance()
            if ch == "(":
                parens += 1
            elif ch == ")":
                parens = max(0, parens - 1)
            elif ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    return
        raise StylesheetParseError("Unclosed block", line=opened_at[0], column=opened_at[1])

    # ---- structure ----

    def _new_block(
        self,
        selector: str,
        parent: _Block | None,
        at_rules: tuple[AtRule, ...],
        line: int,
        start: int,
    ) -> _Block:
        block = _Block(selector, at_rules, line, start, self._order)
        self._order += 1
        (parent.children if parent is not None else self.roots).append(block)
        return block

    def parse_contents(
        self,
        owner: _Block | None,
        at_rules: tuple[AtRule, ...],
        declarations: list[RawDeclaration],
        opened_at: tuple[int, int] | None = None,
    ) -> None:
        """Scan declarations and nested blocks up to the closing brace.

        *opened_at* is the (line, column) of the block being scanned; None
        means the top level, where end of input is the only valid end.
        """
        buf: list[str] = []
        start: int | None = None
        start_line = self.line
        parens = 0
        while self.pos < len(self.text):
            ch, nxt = self._peek()
            if ch == "/" and nxt == "*":
                self._skip_comment()
                buf.append(" ")
                continue
            if ch == "/" and nxt == "/" and self.line_comments and parens == 0:
                self._skip_line()
                continue
            if start is None and not ch.isspace():
                start, start_line = self.pos, self.line
            if ch in "\"'":
                buf.append(self._read_string(ch))
                continue
            if ch == "\\":
                buf.append(self._advance(2))
                continue
            if ch == "#" and nxt == "{":
                buf.append(self._read_interpolation())
                continue
            if ch == "(":
                parens += 1
            elif ch == ")":
                parens = max(0, parens - 1)
            elif parens == 0 and ch == ";":
                self._advance()
                _flush(buf, start_line, declarations)
                buf, start = [], None
                continue
            elif parens == 0 and ch == "{":
                block_start = start if start is not None else self.pos
                self._advance()
                self._open_block("".join(buf), block_start, start_line, owner, at_rules)
                buf, start = [], None
                continue
            elif parens == 0 and ch == "}":
                _flush(buf, start_line, declarations)
                if opened_at is None:
                    raise StylesheetParseError(
                        "Unexpected }", line=self.line, column=self._column(self.pos)
                    )
                self._advance()
                return
            buf.append(self._advance())

        if opened_at is not None:
            raise StylesheetParseError("Unclosed block", line=opened_at[0], column=opened_at[1])
        _flush(buf, start_line, declarations)

    def _open_block(
        self,
        prelude: str,
        start: int,
        line: int,
        owner: _Block | None,
        at_rules: tuple[AtRule, ...],
    ) -> None:
        opened_at = (line, self._column(start))
        prelude = prelude.strip()

        if prelude.startswith("@"):
            m = _AT_RULE_RE.match(prelude)
            name = m.group("name").lower() if m else ""
            params = " ".join(m.group("params").split()) if m else ""

            if name in _KEYFRAMES_AT_RULES or name == "property":
                self._skip_block(opened_at)
                captured = AtRuleBlock(
                    name=name,
                    params=params,
                    text=self.text[start : self.pos],
                    source=self.name,
                    start_line=line,
                    end_line=self.line,
                    at_rules=at_rules,
                )
                if name == "property":
                    self.properties.append(captured)
                else:
                    self.keyframes.append(captured)
                return

            if name in _GROUP_AT_RULES:
                chain = at_rules + (AtRule(name, params),)
                if owner is None:
                    self.parse_contents(None, chain, self.top_level, opened_at)
                    return
                # Declarations directly inside a nested group apply to the
                # enclosing selector, as if wrapped in "& { ... }".
                wrapper = self._new_block("&", owner, chain, line, start)
                self.parse_contents(owner, chain, wrapper.declarations, opened_at)
                wrapper.end_line, wrapper.end = self.line, self.pos
                if not wrapper.declarations:
                    owner.children.remove(wrapper)
                return

            log.debug("Skipping @%s block at %s:%d", name, self.name, line)
            self._skip_block(opened_at)
            return

        block = self._new_block(" ".join(prelude.split()), owner, at_rules, line, start)
        self.parse_contents(block, at_rules, block.declarations, opened_at)
        block.end_line, block.end = self.line, self.pos

    def build_rules(self) -> list[SourceRule]:
        """Freeze the block tree into SourceRules, parents before children."""
        rules: list[SourceRule] = []

        def visit(block: _Block, parent: SourceRule | None) -> None:
            rule = SourceRule(
                selector=block.selector,
                body="; ".join(d.text for d in block.declarations),
                parent=parent,
                at_rules=block.at_rules,
                source=self.name,
                start_line=block.start_line,
                end_line=block.end_line,
                order=block.order,
                text=self.text[block.start : block.end],
            )
            rules.append(rule)
            for child in block.children:
                visit(child, rule)

        for root in self.roots:
            visit(root, None)
        rules.sort(key=lambda r: r.order)
        return rules


def _flush(buf: list[str], line: int, declarations: list[RawDeclaration]) -> None:
    text = "".join(buf).strip()
    if text:
        declarations.append(RawDeclaration(text=text, line=line))


def parse_stylesheet(
    source: str, name: str = "<string>", syntax: str = "css"
) -> Stylesheet:
    """Split CSS/SCSS/Less *source* into rules and captured at-rule blocks.

    Raises :class:`StylesheetParseError` on an unclosed block, comment,
    string or interpolation, or on an unexpected closing brace.
    """
    scanner = _Scanner(source, name, syntax)
    scanner.parse_contents(None, (), scanner.top_level)
    return Stylesheet(
        name=name,
        syntax=syntax,
        rules=scanner.build_rules(),
        keyframes=scanner.keyframes,
        properties=scanner.properties,
        declarations=scanner.top_level,
    )


def parse_declarations(body: str) -> list[tuple[str, str, bool]]:
    """Split a rule body into ``(property, value, important)`` triples.

    Declarations are separated by ``;`` outside parentheses and quotes and
    split at their first ``:``. A declaration missing either side, and SCSS
    variables or at-rule statements, are dropped. Property names are
    lower-cased except custom properties.
    """
    result: list[tuple[str, str, bool]] = []
    for decl in split_top_level(body, ";"):
        prop, sep, value = decl.partition(":")
        prop = prop.strip()
        value = value.strip()
        if not sep or not prop or not value or not _PROPERTY_RE.match(prop):
            continue
        important = bool(_IMPORTANT_RE.search(value))
        if important:
            value = _IMPORTANT_RE.sub("", value).strip()
            if not value:
                continue
        if not prop.startswith("--"):
            prop = prop.lower()
        result.append((prop, value, important))
    return result
