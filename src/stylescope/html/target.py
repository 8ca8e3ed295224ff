"""Target extraction: select one element and collect what identifies it."""

from __future__ import annotations

import logging
import re

from bs4 import BeautifulSoup, Tag
from soupsieve import SelectorSyntaxError

from stylescope.errors import StylescopeError, TargetNotFoundError
from stylescope.model.identity import TargetIdentity

__all__ = [
    "extract_target",
    "identity_from_element",
    "normalize_selector",
    "parse_html",
    "parse_line_range",
]

log = logging.getLogger(__name__)

_WORD_RE = re.compile(r"^[A-Za-z][\w-]*$")
_WORD_LIST_RE = re.compile(r"^[\w-]+(?:\s+[\w-]+)+$")
_LINE_RANGE_RE = re.compile(r"^(\d+)-(\d+)$")

# Words that read as tag names, so "nav item" stays a descendant selector.
_HTML_TAGS = frozenset({
    "div", "span", "header", "footer", "nav", "section", "article", "aside",
    "main", "p", "a", "ul", "ol", "li", "h1", "h2", "h3", "h4", "h5", "h6",
    "form", "button", "img", "table",
})

_WHOLE_PAGE_TAGS = {
    "html": "Targeting <html> includes the whole document; pick a component instead.",
    "head": "<head> holds metadata, not visible components.",
    "body": "Targeting <body> analyzes the whole page; pick a section such as main or header.",
}


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def normalize_selector(selector: str) -> str:
    """Turn a bare class list such as ``btn primary`` into ``.btn.primary``.

    Anything that already looks like a selector is returned stripped.
    """
    selector = selector.strip()
    if not _WORD_LIST_RE.match(selector):
        return selector
    parts = selector.split()
    if any(part.lower() in _HTML_TAGS for part in parts):
        return selector
    normalized = "." + ".".join(parts)
    log.warning("Selector %r looks like class names; using %r", selector, normalized)
    return normalized


def _suggestions(selector: str) -> list[str]:
    suggestions: list[str] = []
    if _WORD_RE.match(selector):
        suggestions += [f".{selector}", f"#{selector}"]
    parts = selector.split()
    if len(parts) > 1 and ">" not in selector and all(_WORD_RE.match(p) for p in parts):
        suggestions += ["." + ".".join(parts), f".{parts[0]}"]
    return suggestions


def _attribute_words(value: object) -> list[str]:
    # bs4 returns multi-valued attributes such as class as lists.
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    if isinstance(value, str):
        return value.split()
    return []


def identity_from_element(element: Tag) -> TargetIdentity:
    """Collect classes, ids, data attributes and parts of *element* and its subtree."""
    classes: list[str] = []
    ids: list[str] = []
    data_attributes: list[str] = []
    parts: list[str] = []
    for node in [element, *element.find_all(True)]:
        classes.extend(_attribute_words(node.get("class")))
        node_id = node.get("id")
        if isinstance(node_id, str) and node_id.strip():
            ids.append(node_id.strip())
        data_attributes.extend(a for a in node.attrs if a.lower().startswith("data-"))
        parts.extend(_attribute_words(node.get("part")))
    return TargetIdentity(
        classes=tuple(classes),
        ids=tuple(ids),
        tag_name=element.name or "",
        data_attributes=tuple(data_attributes),
        shadow_parts=tuple(parts),
    )


def parse_line_range(line_range: str, total_lines: int) -> tuple[int, int]:
    """Validate a ``START-END`` range (1-based, inclusive) against a document."""
    m = _LINE_RANGE_RE.match(line_range.strip())
    if m is None:
        raise StylescopeError(
            f"Invalid line range {line_range!r}; use a format like 45-80"
        )
    start, end = int(m.group(1)), int(m.group(2))
    if start < 1 or end < 1:
        raise StylescopeError(f"Line numbers must be positive, got {line_range!r}")
    if start > end:
        raise StylescopeError(f"Start line {start} is after end line {end}")
    if end > total_lines:
        raise StylescopeError(f"End line {end} is past the end of the document ({total_lines} lines)")
    return start, end


def _select_by_lines(html: str, line_range: str) -> Tag:
    start, end = parse_line_range(line_range, len(html.split("\n")))
    fragment = parse_html("\n".join(html.split("\n")[start - 1 : end]))
    # Document wrappers in the span are looked through, as a browser would.
    element = fragment.find(lambda tag: tag.name not in _WHOLE_PAGE_TAGS)
    if element is None:
        raise TargetNotFoundError(f"lines {line_range}")
    return element


def _select_by_selector(soup: BeautifulSoup, selector: str, index: int) -> Tag:
    normalized = normalize_selector(selector)

    reason = _WHOLE_PAGE_TAGS.get(normalized.lower())
    if reason is not None:
        raise StylescopeError(f"Cannot analyze {normalized!r} as a component. {reason}")

    try:
        elements = soup.select(normalized)
    except SelectorSyntaxError as exc:
        raise StylescopeError(f"Invalid selector {selector!r}: {exc}", cause=exc) from exc
    if not elements:
        raise TargetNotFoundError(selector, _suggestions(selector.strip()))

    position = min(max(index, 0), len(elements) - 1)
    if len(elements) > 1:
        log.warning("%d elements match %r; using index %d", len(elements), normalized, position)
    return elements[position]


def extract_target(
    html: str | BeautifulSoup,
    selector: str | None = None,
    index: int = 0,
    line_range: str | None = None,
) -> TargetIdentity:
    """Select an element and describe it.

    The element is either the *index*-th match of *selector* (an index past
    the last match selects the last match) or, with *line_range* such as
    ``"45-80"``, the first element starting inside those source lines. A
    line range needs the document text, not a parsed soup.

    Raises :class:`TargetNotFoundError` when nothing matches, and
    :class:`StylescopeError` for ``html``/``head``/``body``, an invalid
    selector or a malformed line range.
    """
    if selector is not None and line_range is not None:
        raise ValueError("Pass either a selector or a line range, not both")
    if selector is not None:
        soup = html if isinstance(html, BeautifulSoup) else parse_html(html)
        element = _select_by_selector(soup, selector, index)
    elif line_range is not None:
        if not isinstance(html, str):
            raise TypeError("A line range needs the HTML source text")
        element = _select_by_lines(html, line_range)
    else:
        raise ValueError("A selector or a line range is required")

    identity = identity_from_element(element)
    if not identity.has_selectors:
        log.warning("Target %s has no classes or ids; detection may be limited", identity.summary)
    log.debug("Target %s", identity.summary)
    return identity
