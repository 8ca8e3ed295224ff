"""Depth-aware text helpers shared by the parser, resolver and matcher."""

from __future__ import annotations

_OPENERS = "(["
_CLOSERS = ")]"


def split_top_level(text: str, separator: str = ",") -> list[str]:
    """Split *text* on *separator* outside parentheses, brackets and quotes.

    Empty pieces are dropped and the rest are stripped::

        >>> split_top_level(":is(.a, .b), .c")
        [':is(.a, .b)', '.c']
    """
    parts: list[str] = []
    depth = 0
    quote = ""
    start = 0
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if quote:
            if ch == quote:
                quote = ""
        elif ch in "\"'":
            quote = ch
        elif ch in _OPENERS:
            depth += 1
        elif ch in _CLOSERS:
            depth = max(0, depth - 1)
        elif ch == separator and depth == 0:
            parts.append(text[start:i])
            start = i + 1
        i += 1
    parts.append(text[start:])
    return [p.strip() for p in parts if p.strip()]


def find_closing(text: str, open_index: int) -> int:
    """Return the index of the bracket closing the one at *open_index*, or -1."""
    depth = 0
    quote = ""
    i = open_index
    while i < len(text):
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if quote:
            if ch == quote:
                quote = ""
        elif ch in "\"'":
            quote = ch
        elif ch in _OPENERS:
            depth += 1
        elif ch in _CLOSERS:
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return -1
