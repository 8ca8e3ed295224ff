"""Stylesheet and HTML sources: loading files, finding them, fetching URLs."""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from pathlib import Path

import httpx

from stylescope.errors import SourceFetchError
from stylescope.stylesheet.parser import syntax_for

__all__ = [
    "IGNORED_DIRS",
    "STYLESHEET_SUFFIXES",
    "StylesheetSource",
    "discover_stylesheets",
    "fetch_html",
    "is_url",
    "load_source",
]

log = logging.getLogger(__name__)

STYLESHEET_SUFFIXES = frozenset({".css", ".scss", ".sass", ".less"})

IGNORED_DIRS = frozenset({
    "node_modules",
    "bower_components",
    "vendor",
    ".git",
    "dist",
    "build",
    "coverage",
})

_USER_AGENT = "stylescope/0.3 (+https://pypi.org/project/stylescope/)"


@dataclass(frozen=True)
class StylesheetSource:
    """Stylesheet text plus the name it is reported and ordered by."""

    name: str
    text: str
    syntax: str = "css"

    @property
    def digest(self) -> str:
        return hashlib.sha1(self.text.encode("utf-8")).hexdigest()


def is_url(location: str) -> bool:
    return location.startswith(("http://", "https://"))


def load_source(path: str | Path) -> StylesheetSource:
    """Read a stylesheet from disk; the syntax follows the file suffix."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise SourceFetchError(
            f"Could not read {path}: {exc}", location=str(path), cause=exc
        ) from exc
    return StylesheetSource(name=str(path), text=text, syntax=syntax_for(path))


def discover_stylesheets(project_dir: str | Path) -> list[Path]:
    """Find every stylesheet under *project_dir*, skipping vendored trees."""
    root = Path(project_dir)
    found: list[Path] = []
    for path in root.rglob("*"):
        if path.suffix.lower() not in STYLESHEET_SUFFIXES or not path.is_file():
            continue
        if any(part in IGNORED_DIRS for part in path.relative_to(root).parts[:-1]):
            continue
        found.append(path)
    log.debug("Found %d stylesheets under %s", len(found), root)
    return sorted(found)


def fetch_html(
    url: str, timeout: float = 15.0, client: httpx.Client | None = None
) -> str:
    """GET *url* and return its body.

    Raises :class:`SourceFetchError` on transport failures and non-2xx
    responses.
    """
    try:
        if client is None:
            with httpx.Client(
                timeout=timeout,
                follow_redirects=True,
                headers={"User-Agent": _USER_AGENT},
            ) as owned:
                resp = owned.get(url)
        else:
            resp = client.get(url)
    except httpx.TimeoutException as exc:
        raise SourceFetchError(
            f"Timed out fetching {url}", location=url, cause=exc
        ) from exc
    except httpx.HTTPError as exc:
        raise SourceFetchError(
            f"Could not fetch {url}: {exc}", location=url, cause=exc
        ) from exc

    if resp.status_code >= 300:
        raise SourceFetchError(
            f"HTTP {resp.status_code} fetching {url}",
            location=url,
            status_code=resp.status_code,
        )
    log.info("Fetched %s (%d bytes)", url, len(resp.content))
    return resp.text
