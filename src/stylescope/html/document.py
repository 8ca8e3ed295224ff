"""Stylesheets referenced by an HTML document, in load order."""

from __future__ import annotations

from pathlib import Path

from bs4 import BeautifulSoup

from stylescope.sources import StylesheetSource, is_url

__all__ = ["inline_style_name", "inline_styles", "stylesheet_links", "stylesheet_order"]


def inline_style_name(number: int) -> str:
    return f"<style #{number}>"


def _soup(html: str | BeautifulSoup) -> BeautifulSoup:
    return html if isinstance(html, BeautifulSoup) else BeautifulSoup(html, "html.parser")


def _is_stylesheet_link(tag) -> bool:
    rel = tag.get("rel") or []
    if isinstance(rel, str):
        rel = rel.split()
    return any(r.lower() == "stylesheet" for r in rel) and bool(tag.get("href"))


def _resolve_href(href: str, base: str | Path | None) -> str:
    href = href.strip()
    if is_url(href) or href.startswith("//"):
        return href
    path = href.split("#", 1)[0].split("?", 1)[0].lstrip("/")
    if base is None:
        return path
    return str((Path(base) / path).resolve())


def stylesheet_links(html: str | BeautifulSoup, base: str | Path | None = None) -> list[str]:
    """``<link rel="stylesheet">`` targets in document order.

    Local hrefs are resolved against *base* (the HTML file's directory);
    query strings and fragments are dropped. URLs are returned as-is.
    """
    soup = _soup(html)
    return [
        _resolve_href(tag["href"], base)
        for tag in soup.find_all("link")
        if _is_stylesheet_link(tag)
    ]


def inline_styles(html: str | BeautifulSoup) -> list[StylesheetSource]:
    """``<style>`` blocks as sources named ``<style #N>``, in document order."""
    soup = _soup(html)
    return [
        StylesheetSource(name=inline_style_name(n), text=tag.get_text())
        for n, tag in enumerate(soup.find_all("style"), start=1)
    ]


def stylesheet_order(html: str | BeautifulSoup, base: str | Path | None = None) -> list[str]:
    """Names of linked and inline stylesheets interleaved in document order."""
    soup = _soup(html)
    order: list[str] = []
    inline = 0
    for tag in soup.find_all(["link", "style"]):
        if tag.name == "style":
            inline += 1
            order.append(inline_style_name(inline))
        elif _is_stylesheet_link(tag):
            order.append(_resolve_href(tag["href"], base))
    return order
